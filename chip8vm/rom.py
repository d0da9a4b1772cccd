"""Reading ROM images from disk."""

import os
from typing import Union

from chip8vm.logging import get_logger

logger = get_logger("chip8vm.rom")


def read_rom(path: Union[str, os.PathLike]) -> bytes:
    """Read a ROM file and return its raw bytes.

    Raises OSError (FileNotFoundError, PermissionError, ...) when the file
    cannot be read.
    """
    with open(path, "rb") as f:
        data = f.read()
    logger.info(f"Read {len(data)} bytes of data from {os.fspath(path)}")
    return data
