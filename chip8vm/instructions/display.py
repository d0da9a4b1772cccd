"""CHIP-8 display operations."""

import jax.numpy as jnp

from chip8vm.constants import FLAG_REGISTER, SCREEN_HEIGHT, SCREEN_WIDTH, SPRITE_WIDTH
from chip8vm.state import EmulatorState, check_memory_range
from chip8vm.decode import DecodedInstruction
from chip8vm.instructions.system import advance

# Pre-computed coordinate grids for display operations
xx, yy = jnp.meshgrid(jnp.arange(SCREEN_WIDTH), jnp.arange(SCREEN_HEIGHT), indexing='ij')


def sprite_mask(sprite_rows: jnp.ndarray, sprite_x: int, sprite_y: int) -> jnp.ndarray:
    """Lay sprite rows onto a (SCREEN_WIDTH, SCREEN_HEIGHT) boolean grid.

    Pixels that run off the right or bottom edge wrap to the opposite side.
    """
    height = sprite_rows.shape[0]
    col_offset = (xx - sprite_x) % SCREEN_WIDTH
    row_offset = (yy - sprite_y) % SCREEN_HEIGHT
    in_sprite = (col_offset < SPRITE_WIDTH) & (row_offset < height)

    padded_rows = jnp.zeros(SCREEN_HEIGHT, dtype=jnp.uint8).at[:height].set(sprite_rows)
    shift = jnp.clip(SPRITE_WIDTH - 1 - col_offset, 0, SPRITE_WIDTH - 1)
    bits = (padded_rows[row_offset] >> shift) & 1
    return (bits == 1) & in_sprite


def execute_display(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """DXYN - Draw sprite at (VX, VY) with height N.

    Pixels are XORed onto the display; VF is set to 1 if any lit pixel was
    turned off, otherwise 0.
    """
    sprite_x = int(state.V[instruction.x]) % SCREEN_WIDTH
    sprite_y = int(state.V[instruction.y]) % SCREEN_HEIGHT
    address = int(state.I)
    height = instruction.n

    check_memory_range("draw", address, height)
    sprite = sprite_mask(state.memory[address:address + height], sprite_x, sprite_y)
    collision = jnp.any(state.display & sprite)

    state = state.replace(
        display=state.display ^ sprite,
        V=state.V.at[FLAG_REGISTER].set(collision.astype(jnp.uint8)),
        draw_pending=jnp.asarray(True),
    )
    return advance(state)
