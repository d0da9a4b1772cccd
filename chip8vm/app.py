"""Interactive CHIP-8 front end: pygame window, keyboard and the run loop."""

import argparse
import os
import sys
from typing import Optional, Sequence

import jax.numpy as jnp
import numpy as np

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
import pygame

from chip8vm.constants import NUM_KEYS, SCREEN_HEIGHT, SCREEN_WIDTH
from chip8vm.emulator import load_rom_file, step
from chip8vm.errors import Chip8Error
from chip8vm.logging import CycleTracer, get_logger
from chip8vm.rendering import chip8_display_to_rgb, create_color_scheme
from chip8vm.state import create_state

logger = get_logger("chip8vm")

# COSMAC VIP hex keypad laid over the left side of a QWERTY keyboard
KEY_MAP = {
    pygame.K_1: 0x1, pygame.K_2: 0x2, pygame.K_3: 0x3, pygame.K_4: 0xC,
    pygame.K_q: 0x4, pygame.K_w: 0x5, pygame.K_e: 0x6, pygame.K_r: 0xD,
    pygame.K_a: 0x7, pygame.K_s: 0x8, pygame.K_d: 0x9, pygame.K_f: 0xE,
    pygame.K_z: 0xA, pygame.K_x: 0x0, pygame.K_c: 0xB, pygame.K_v: 0xF,
}


class Screen:
    """Display sink: blits the 64x32 framebuffer as scale x scale blocks."""

    def __init__(self, scale: int = 20, color_scheme: str = "white", caption: str = "Chip 8 Emulator"):
        self.scale = scale
        self.on_color, self.off_color = create_color_scheme(color_scheme)
        self.surface = pygame.display.set_mode((SCREEN_WIDTH * scale, SCREEN_HEIGHT * scale))
        pygame.display.set_caption(caption)
        self.surface.fill(self.off_color)
        pygame.display.flip()

    def draw(self, display):
        rgb = chip8_display_to_rgb(display, self.scale, self.on_color, self.off_color)
        # surfarray wants (width, height, 3)
        pygame.surfarray.blit_array(self.surface, np.ascontiguousarray(rgb.swapaxes(0, 1)))
        pygame.display.flip()


class Keyboard:
    """Input source: tracks which of the 16 hex keys are held down."""

    def __init__(self, key_map=None):
        self.key_map = key_map or KEY_MAP
        self.keypad = np.zeros(NUM_KEYS, dtype=np.bool_)

    def poll(self) -> Optional[np.ndarray]:
        """Drain pending events; return the key snapshot, or None once the user quits."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return None
            if event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    return None
                if event.key in self.key_map:
                    self.keypad[self.key_map[event.key]] = True
            elif event.type == pygame.KEYUP and event.key in self.key_map:
                self.keypad[self.key_map[event.key]] = False
        return self.keypad.copy()


def run_emulator(
    rom_filename: str,
    scale: int = 20,
    cycle_delay_ms: int = 2,
    color_scheme: str = "white",
    trace: Optional[bool] = None,
) -> int:
    """Load a ROM and run it until the window is closed. Returns an exit code."""
    try:
        state = load_rom_file(create_state(), rom_filename)
    except OSError as e:
        logger.error(f"Couldn't open {rom_filename}: {e}")
        return 1
    except Chip8Error as e:
        logger.error(f"Couldn't load {rom_filename}: {e}")
        return 1

    pygame.init()
    try:
        screen = Screen(scale, color_scheme)
        keyboard = Keyboard()
        tracer = CycleTracer(enabled=trace)

        while True:
            keypad = keyboard.poll()
            if keypad is None:
                break

            state, _ = step(state, keypad)
            tracer.on_cycle(state)

            if state.draw_pending:
                screen.draw(state.display)
                state = state.replace(draw_pending=jnp.asarray(False))

            pygame.time.wait(cycle_delay_ms)
    except Chip8Error as e:
        logger.critical(f"Execution halted at 0x{int(state.pc):03X}: {e}")
        return 1
    finally:
        pygame.quit()

    logger.info(f"Stopped after {tracer.cycles} cycles")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="chip8vm", description="Run a CHIP-8 ROM.")
    parser.add_argument("rom", help="path to the ROM file")
    args = parser.parse_args(argv)
    return run_emulator(args.rom)


if __name__ == "__main__":
    sys.exit(main())
