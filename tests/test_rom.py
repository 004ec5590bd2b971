import pytest

from chip8.errors import RomLoadError, RomTooLarge
from chip8.rom import load_rom


def test_load_rom(machine, tmp_path):
    rom = tmp_path / "test.ch8"
    rom.write_bytes(b"\x00\xE0\x12\x00")
    assert load_rom(machine, str(rom)) == 4
    assert machine.pc == 0x200
    assert machine.memory[0x200:0x204] == b"\x00\xE0\x12\x00"


def test_missing_rom(machine, tmp_path):
    with pytest.raises(RomLoadError):
        load_rom(machine, str(tmp_path / "nope.ch8"))


def test_oversized_rom(machine, tmp_path):
    rom = tmp_path / "big.ch8"
    rom.write_bytes(bytes(3585))
    with pytest.raises(RomTooLarge):
        load_rom(machine, str(rom))
