"""Main CHIP-8 emulator execution engine."""

import os
from typing import Callable, Optional, Sequence, Tuple, Union

import jax.numpy as jnp

from chip8vm.constants import MAX_ROM_SIZE, NUM_KEYS, PROGRAM_START
from chip8vm.decode import DecodedInstruction, decode, decode_word
from chip8vm.errors import RomTooLargeError
from chip8vm.state import EmulatorState, check_memory_range
from chip8vm.rom import read_rom
from chip8vm.logging import build_progress_bar
from chip8vm.instructions.system import execute_clear_screen, execute_return, no_op
from chip8vm.instructions.control_flow import (
    execute_jump, execute_call, execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate, execute_skip_if_equal_register,
    execute_skip_if_not_equal_register, execute_jump_with_offset,
    execute_skip_if_key, execute_skip_if_not_key,
)
from chip8vm.instructions.alu import ALU_INSTRUCTIONS
from chip8vm.instructions.memory import execute_set, execute_add, execute_set_index, execute_random
from chip8vm.instructions.display import execute_display
from chip8vm.instructions.misc import (
    execute_get_delay_timer, execute_wait_for_key, execute_set_delay_timer,
    execute_set_sound_timer, execute_add_to_index, execute_font_character,
    execute_bcd_conversion, execute_store_registers, execute_load_registers,
)

Handler = Callable[[EmulatorState, DecodedInstruction], EmulatorState]

# (mask, pattern, handler), tried in order; the first match wins.
DISPATCH_TABLE: Tuple[Tuple[int, int, Handler], ...] = (
    (0xFFFF, 0x00E0, execute_clear_screen),
    (0xFFFF, 0x00EE, execute_return),
    (0xF000, 0x1000, execute_jump),
    (0xF000, 0x2000, execute_call),
    (0xF000, 0x3000, execute_skip_if_equal_immediate),
    (0xF000, 0x4000, execute_skip_if_not_equal_immediate),
    (0xF00F, 0x5000, execute_skip_if_equal_register),
    (0xF000, 0x6000, execute_set),
    (0xF000, 0x7000, execute_add),
    *((0xF00F, 0x8000 | n, handler) for n, handler in ALU_INSTRUCTIONS.items()),
    (0xF00F, 0x9000, execute_skip_if_not_equal_register),
    (0xF000, 0xA000, execute_set_index),
    (0xF000, 0xB000, execute_jump_with_offset),
    (0xF000, 0xC000, execute_random),
    (0xF000, 0xD000, execute_display),
    (0xF0FF, 0xE09E, execute_skip_if_key),
    (0xF0FF, 0xE0A1, execute_skip_if_not_key),
    (0xF0FF, 0xF007, execute_get_delay_timer),
    (0xF0FF, 0xF00A, execute_wait_for_key),
    (0xF0FF, 0xF015, execute_set_delay_timer),
    (0xF0FF, 0xF018, execute_set_sound_timer),
    (0xF0FF, 0xF01E, execute_add_to_index),
    (0xF0FF, 0xF029, execute_font_character),
    (0xF0FF, 0xF033, execute_bcd_conversion),
    (0xF0FF, 0xF055, execute_store_registers),
    (0xF0FF, 0xF065, execute_load_registers),
)


def dispatch(instruction: DecodedInstruction) -> Handler:
    """Select the handler for a decoded instruction, ``no_op`` if none matches."""
    for mask, pattern, handler in DISPATCH_TABLE:
        if instruction.matches(mask, pattern):
            return handler
    return no_op


def execute(state: EmulatorState, instruction: Union[int, DecodedInstruction]) -> EmulatorState:
    """Execute single CHIP-8 instruction."""
    if not isinstance(instruction, DecodedInstruction):
        instruction = decode_word(instruction)
    return dispatch(instruction)(state, instruction)


def fetch(state: EmulatorState) -> DecodedInstruction:
    """Fetch and decode the instruction at the program counter."""
    pc = int(state.pc)
    check_memory_range("fetch", pc, 2)
    return decode(state.memory[pc], state.memory[pc + 1])


def tick_timers(state: EmulatorState) -> EmulatorState:
    """Decrement the delay and sound timers, stopping at zero."""
    delay, sound = int(state.delay_timer), int(state.sound_timer)
    return state.replace(
        delay_timer=jnp.asarray(max(delay - 1, 0), dtype=jnp.uint8),
        sound_timer=jnp.asarray(max(sound - 1, 0), dtype=jnp.uint8),
    )


def set_keypad(state: EmulatorState, keypad: Sequence[bool]) -> EmulatorState:
    """Replace the key state with a 16-key snapshot."""
    keypad = jnp.asarray(keypad, dtype=jnp.bool_)
    if keypad.shape != (NUM_KEYS,):
        raise ValueError(f"Expected keypad shape ({NUM_KEYS},), got {keypad.shape}")
    return state.replace(keypad=keypad)


def step(state: EmulatorState, keypad: Optional[Sequence[bool]] = None) -> Tuple[EmulatorState, int]:
    """Run one interpreter cycle.

    Applies the key snapshot, ticks the timers, then fetches and executes one
    instruction. Returns the new state and the raw instruction word executed.
    """
    if keypad is not None:
        state = set_keypad(state, keypad)
    state = tick_timers(state)
    instruction = fetch(state)
    state = execute(state, instruction)
    state = state.replace(last_instruction=jnp.asarray(instruction.raw, dtype=jnp.uint16))
    return state, instruction.raw


def run_cycles(
    state: EmulatorState,
    num_cycles: int,
    keypad: Optional[Sequence[bool]] = None,
    show_progress: bool = False,
) -> EmulatorState:
    """Run ``num_cycles`` cycles headlessly with a fixed key snapshot."""
    if keypad is not None:
        state = set_keypad(state, keypad)
    progress = build_progress_bar(num_cycles) if show_progress else None
    try:
        for _ in range(num_cycles):
            state, _ = step(state)
            if progress is not None:
                progress.update(1)
    finally:
        if progress is not None:
            progress.close()
    return state


def load_rom(state: EmulatorState, rom: Union[bytes, bytearray, Sequence[int]]) -> EmulatorState:
    """Load ROM data into CHIP-8 memory starting at 0x200.

    Raises RomTooLargeError, leaving the state untouched, when the data does
    not fit before the end of memory.
    """
    rom_data = bytes(rom)
    if len(rom_data) > MAX_ROM_SIZE:
        raise RomTooLargeError(len(rom_data), MAX_ROM_SIZE)
    rom_array = jnp.array(list(rom_data), dtype=jnp.uint8)
    new_memory = state.memory.at[PROGRAM_START:PROGRAM_START + len(rom_data)].set(rom_array)
    return state.replace(memory=new_memory, pc=jnp.asarray(PROGRAM_START, dtype=jnp.uint16))


def load_rom_file(state: EmulatorState, filename: Union[str, os.PathLike]) -> EmulatorState:
    """Read a ROM file from disk and load it."""
    return load_rom(state, read_rom(filename))
