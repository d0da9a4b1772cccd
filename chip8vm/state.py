"""CHIP-8 emulator state structures."""

import random
from typing import Optional

import jax
import jax.numpy as jnp
from flax.struct import PyTreeNode, field

from chip8vm.constants import (
    FONT_DATA, FONT_START, MEMORY_SIZE, NUM_KEYS, NUM_REGISTERS, PROGRAM_START,
    SCREEN_HEIGHT, SCREEN_WIDTH, STACK_SIZE,
)
from chip8vm.errors import MemoryBoundsError


class StackState(PyTreeNode):
    """Return address stack for subroutine calls.

    ``pointer`` indexes the most recently pushed slot, -1 when empty.
    """
    data: jnp.ndarray = field(default_factory=lambda: jnp.zeros(STACK_SIZE, dtype=jnp.uint16))
    pointer: int = -1

    @property
    def depth(self) -> int:
        return int(self.pointer) + 1


class EmulatorState(PyTreeNode):
    """Main CHIP-8 emulator state."""
    rng: jax.Array
    memory: jnp.ndarray = field(default_factory=lambda: jnp.zeros(MEMORY_SIZE, dtype=jnp.uint8))
    pc: jnp.ndarray = field(default_factory=lambda: jnp.asarray(PROGRAM_START, dtype=jnp.uint16))
    display: jnp.ndarray = field(default_factory=lambda: jnp.zeros((SCREEN_WIDTH, SCREEN_HEIGHT), dtype=jnp.bool_))
    stack: StackState = field(default_factory=StackState)
    delay_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    sound_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    keypad: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_KEYS, dtype=jnp.bool_))
    V: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_REGISTERS, dtype=jnp.uint8))
    I: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint16))
    draw_pending: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.bool_))
    last_instruction: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint16))


def create_state(rng: Optional[jax.Array] = None) -> EmulatorState:
    """Create initial emulator state with font data loaded.

    Without an explicit key the random opcode draws from a key seeded by the
    process-wide ``random`` source, so runs are not reproducible.
    """
    if rng is None:
        rng = jax.random.PRNGKey(random.getrandbits(31))
    state = EmulatorState(rng)
    font = jnp.asarray(FONT_DATA, dtype=jnp.uint8)
    return state.replace(memory=state.memory.at[FONT_START:FONT_START + len(FONT_DATA)].set(font))


def check_memory_range(operation: str, address: int, length: int) -> None:
    """Raise MemoryBoundsError unless ``[address, address + length)`` lies inside memory."""
    if address < 0 or address + length > MEMORY_SIZE:
        raise MemoryBoundsError(operation, address, length)
