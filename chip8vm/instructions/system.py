"""CHIP-8 system instructions (0x0xxx) and shared helpers."""

import jax.numpy as jnp

from chip8vm.state import EmulatorState
from chip8vm.decode import DecodedInstruction
from chip8vm.stack import pop
from chip8vm.logging import get_logger

logger = get_logger("chip8vm.cpu")


def advance(state: EmulatorState, instructions: int = 1) -> EmulatorState:
    """Move the program counter past ``instructions`` instruction words."""
    return state.replace(pc=jnp.asarray(int(state.pc) + 2 * instructions, dtype=jnp.uint16))


def no_op(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """Unrecognised instruction: log it and move on."""
    logger.debug(f"No-op for unrecognised instruction {instruction} at 0x{int(state.pc):03X}")
    return advance(state)


def execute_clear_screen(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00E0 - Clear display."""
    state = state.replace(
        display=jnp.zeros_like(state.display),
        draw_pending=jnp.asarray(True),
    )
    return advance(state)


def execute_return(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00EE - Return from subroutine.

    The stack holds the address of the calling 2NNN, so execution resumes at
    the instruction after it.
    """
    stack, address = pop(state.stack)
    state = state.replace(stack=stack, pc=jnp.asarray(address, dtype=jnp.uint16))
    return advance(state)
