"""
Run a CHIP-8 ROM: python main.py path/to/rom.ch8
"""

import sys

from chip8vm.app import main


if __name__ == "__main__":
    sys.exit(main())
