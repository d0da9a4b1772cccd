"""CHIP-8 instruction decoding."""

from typing import Tuple

from chex import dataclass


@dataclass(frozen=True)
class DecodedInstruction:
    """Decoded CHIP-8 instruction with extracted operands."""
    raw: int
    nibbles: Tuple[int, int, int, int]  # Most significant first

    @property
    def opcode(self) -> int:
        return self.nibbles[0]

    @property
    def x(self) -> int:
        return self.nibbles[1]

    @property
    def y(self) -> int:
        return self.nibbles[2]

    @property
    def n(self) -> int:
        return self.nibbles[3]

    @property
    def nn(self) -> int:
        return self.raw & 0x00FF

    @property
    def nnn(self) -> int:
        return self.raw & 0x0FFF

    def matches(self, mask: int, pattern: int) -> bool:
        """True iff the masked instruction word equals ``pattern``."""
        return (self.raw & mask) == pattern

    def __str__(self) -> str:
        return f"{self.raw:04X}"


def decode_word(instruction: int) -> DecodedInstruction:
    """Decode 16-bit instruction into components."""
    instruction = int(instruction) & 0xFFFF
    return DecodedInstruction(
        raw=instruction,
        nibbles=(
            (instruction & 0xF000) >> 12,
            (instruction & 0x0F00) >> 8,
            (instruction & 0x00F0) >> 4,
            instruction & 0x000F,
        ),
    )


def decode(high: int, low: int) -> DecodedInstruction:
    """Decode the two bytes of an instruction, given in program order."""
    return decode_word(((int(high) & 0xFF) << 8) | (int(low) & 0xFF))
