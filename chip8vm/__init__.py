"""CHIP-8 virtual machine package."""

from chip8vm.state import EmulatorState, StackState, create_state
from chip8vm.emulator import (
    DISPATCH_TABLE, dispatch, execute, fetch, tick_timers, set_keypad, step,
    run_cycles, load_rom, load_rom_file,
)
from chip8vm.decode import DecodedInstruction, decode, decode_word
from chip8vm.errors import (
    Chip8Error, RomTooLargeError, StackError, StackOverflowError,
    StackUnderflowError, MemoryBoundsError,
)
from chip8vm.constants import *

__all__ = [
    "EmulatorState",
    "StackState",
    "create_state",
    "DISPATCH_TABLE",
    "dispatch",
    "execute",
    "fetch",
    "tick_timers",
    "set_keypad",
    "step",
    "run_cycles",
    "load_rom",
    "load_rom_file",
    "DecodedInstruction",
    "decode",
    "decode_word",
    "Chip8Error",
    "RomTooLargeError",
    "StackError",
    "StackOverflowError",
    "StackUnderflowError",
    "MemoryBoundsError",
    "PROGRAM_START",
    "FONT_START",
    "MEMORY_SIZE",
    "MAX_ROM_SIZE",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
]
