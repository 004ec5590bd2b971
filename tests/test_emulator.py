"""Driving-loop policies, exercised without opening a window."""

from types import SimpleNamespace

import pytest

from chip8.machine import Machine
from chip8.timers import TimerClock

emulator = pytest.importorskip("chip8.emulator")
Chip8Window = emulator.Chip8Window


def window_for(cpu):
    halted = []
    return SimpleNamespace(cpu=cpu, halt=halted.append), halted


def test_unknown_opcode_halts(cpu, monkeypatch):
    monkeypatch.setattr(emulator.config, "halt_on_unknown_opcode", True)
    cpu.machine.load_program(b"\x80\x18")
    win, halted = window_for(cpu)
    Chip8Window.step(win)
    assert len(halted) == 1
    assert halted[0].instruction.opcode == 0x8018


def test_unknown_opcode_skipped_and_reported(cpu, monkeypatch, capsys):
    monkeypatch.setattr(emulator.config, "halt_on_unknown_opcode", False)
    cpu.machine.load_program(b"\x80\x18\x60\x05")
    win, halted = window_for(cpu)
    Chip8Window.step(win)
    assert "8018" in capsys.readouterr().out
    assert halted == []
    Chip8Window.step(win)
    assert cpu.machine.V[0] == 5


def test_other_errors_always_halt(cpu, monkeypatch):
    monkeypatch.setattr(emulator.config, "halt_on_unknown_opcode", False)
    cpu.machine.load_program(b"\x00\xEE")
    win, halted = window_for(cpu)
    Chip8Window.step(win)
    assert len(halted) == 1


def test_timer_tick_drives_buzzer():
    machine = Machine()
    machine.timers.sound = 1
    updates = []
    win = SimpleNamespace(
        machine=machine,
        timer_clock=TimerClock(machine.timers, rate=60),
        buzzer=SimpleNamespace(update=updates.append),
    )
    Chip8Window._timer_tick(win, 0.01)
    assert updates == []
    Chip8Window._timer_tick(win, 0.01)
    assert updates == [False]


@pytest.mark.parametrize("rate", ["fast", "0", "-5"])
def test_bad_rate_prints_usage(rate, tmp_path, capsys):
    rom = tmp_path / "test.ch8"
    rom.write_bytes(b"\x12\x00")
    assert emulator.main(["chip8", str(rom), rate]) == 1
    assert emulator.USAGE in capsys.readouterr().out


def test_parse_cpu_hz():
    assert emulator.parse_cpu_hz("700") == 700
    assert emulator.parse_cpu_hz("0") is None


def test_missing_rom_exits(tmp_path, capsys):
    assert emulator.main(["chip8", str(tmp_path / "nope.ch8")]) == 1
    assert "Unable to read ROM" in capsys.readouterr().err
