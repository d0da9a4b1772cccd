"""Exceptions raised by the CHIP-8 interpreter."""


class Chip8Error(Exception):
    """Base error for interpreter failures."""


class RomTooLargeError(Chip8Error, ValueError):
    """Raised when a ROM does not fit between PROGRAM_START and the end of memory."""

    def __init__(self, size: int, limit: int):
        super().__init__(f"ROM is {size} bytes, at most {limit} bytes fit in memory")
        self.size = size
        self.limit = limit


class StackError(Chip8Error):
    """Base error for call stack misuse."""


class StackOverflowError(StackError):
    """Raised when a call is made with all stack slots in use."""


class StackUnderflowError(StackError):
    """Raised when a return is executed with no matching call."""


class MemoryBoundsError(Chip8Error):
    """Raised when an instruction addresses memory past the last byte."""

    def __init__(self, operation: str, address: int, length: int = 1):
        super().__init__(
            f"{operation}: access of {length} byte(s) at 0x{address:04X} exceeds memory"
        )
        self.operation = operation
        self.address = address
        self.length = length
