"""CHIP-8 miscellaneous instructions (Fxxx)."""

import jax.numpy as jnp

from chip8vm.constants import FONT_GLYPH_SIZE, FONT_START, INDEX_MASK
from chip8vm.state import EmulatorState, check_memory_range
from chip8vm.decode import DecodedInstruction
from chip8vm.instructions.system import advance


def execute_get_delay_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX07 - Set VX to delay timer value."""
    return advance(state.replace(V=state.V.at[instruction.x].set(state.delay_timer)))


def execute_wait_for_key(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX0A - Wait for key press.

    The lowest pressed key is stored in VX. With no key down the program
    counter stays put, so the same instruction runs again next cycle.
    """
    pressed = [key for key, down in enumerate(state.keypad.tolist()) if down]
    if not pressed:
        return state
    return advance(state.replace(V=state.V.at[instruction.x].set(pressed[0])))


def execute_set_delay_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX15 - Set delay timer to VX."""
    return advance(state.replace(delay_timer=state.V[instruction.x]))


def execute_set_sound_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX18 - Set sound timer to VX."""
    return advance(state.replace(sound_timer=state.V[instruction.x]))


def execute_add_to_index(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX1E - Add VX to I register."""
    new_i = (int(state.I) + int(state.V[instruction.x])) & INDEX_MASK
    return advance(state.replace(I=jnp.asarray(new_i, dtype=jnp.uint16)))


def execute_font_character(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX29 - Set I to location of sprite for digit VX."""
    glyph = int(state.V[instruction.x]) & 0xF
    font_address = FONT_START + glyph * FONT_GLYPH_SIZE
    return advance(state.replace(I=jnp.asarray(font_address, dtype=jnp.uint16)))


def execute_bcd_conversion(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX33 - Store BCD representation of VX at I, I+1, I+2."""
    value = int(state.V[instruction.x])
    address = int(state.I)
    check_memory_range("bcd", address, 3)

    digits = jnp.array([value // 100, (value // 10) % 10, value % 10], dtype=jnp.uint8)
    new_memory = state.memory.at[address:address + 3].set(digits)
    return advance(state.replace(memory=new_memory))


def execute_store_registers(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX55 - Store V0 through VX in memory starting at I."""
    count = instruction.x + 1
    address = int(state.I)
    check_memory_range("register dump", address, count)

    new_memory = state.memory.at[address:address + count].set(state.V[:count])
    return advance(state.replace(memory=new_memory))


def execute_load_registers(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX65 - Load V0 through VX from memory starting at I."""
    count = instruction.x + 1
    address = int(state.I)
    check_memory_range("register load", address, count)

    new_V = state.V.at[:count].set(state.memory[address:address + count])
    return advance(state.replace(V=new_V))
