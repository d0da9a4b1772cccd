"""Tests for the command line entry point."""

import pytest
from chip8vm.app import main


def test_missing_rom_file_exits_non_zero(tmp_path):
    assert main([str(tmp_path / "missing.ch8")]) == 1


def test_oversized_rom_exits_non_zero(tmp_path):
    rom = tmp_path / "big.ch8"
    rom.write_bytes(bytes(4000))
    assert main([str(rom)]) == 1


def test_rom_argument_is_required():
    with pytest.raises(SystemExit) as excinfo:
        main([])
    assert excinfo.value.code == 2
