"""Shared fixtures: a fresh machine wired to a display and keypad, no window."""

import pytest

from chip8.cpu import CPU
from chip8.display import Display
from chip8.keypad import Keypad
from chip8.machine import Machine
from chip8.rng import RandomSource


@pytest.fixture
def machine():
    return Machine()


@pytest.fixture
def cpu(machine):
    return CPU(machine, Display(), Keypad(), RandomSource(4))


def program(*opcodes):
    """Big-endian bytes for a list of 16-bit opcodes."""
    data = bytearray()
    for op in opcodes:
        data += bytes(((op >> 8) & 0xFF, op & 0xFF))
    return bytes(data)


@pytest.fixture
def run(cpu):
    """Load opcodes at 0x200 and execute `steps` of them (default: all)."""
    def _run(*opcodes, steps=None):
        cpu.machine.load_program(program(*opcodes))
        for _ in range(len(opcodes) if steps is None else steps):
            cpu.cycle()
        return cpu.machine
    return _run
