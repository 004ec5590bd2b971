# Machine state: 4096 bytes of memory, 16 registers (V0-VF, VF doubles as
# the carry/borrow/collision flag), the I register, PC, a 32-entry call
# stack and the two timers.
#   0x000-0x04F  unused
#   0x050-0x09F  font (16 glyphs x 5 bytes)
#   0x200-0xFFF  program space

import numpy as np

from .errors import MemoryOutOfBounds, RomTooLarge, StackOverflow, StackUnderflow
from .instruction import Instruction
from .timers import Timers

MEMORY_SIZE = 4096
FONT_BASE = 0x50
PROGRAM_START = 0x200
PROGRAM_SPACE = MEMORY_SIZE - PROGRAM_START
STACK_SIZE = 32

# set fonts (binary pixel patterns)
fontset = [
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80   # F
] #notice 80 bytes


class Machine:

    def __init__(self):
        self.memory = bytearray(MEMORY_SIZE)
        self.memory[FONT_BASE:FONT_BASE + len(fontset)] = bytes(fontset)

        self.V = [0] * 16
        self.I = 0
        self.pc = 0

        self.stack = np.zeros(STACK_SIZE, dtype=np.uint16)
        self.sp = 0

        self.timers = Timers()

    # ---- memory ----
    def check_range(self, address, length=1):
        if address < 0 or address + length > MEMORY_SIZE:
            raise MemoryOutOfBounds(address, length)

    def read(self, address, length=1):
        self.check_range(address, length)
        return self.memory[address:address + length]

    def write(self, address, data):
        self.check_range(address, len(data))
        self.memory[address:address + len(data)] = bytes(data)

    def load_program(self, data):
        if len(data) > PROGRAM_SPACE:
            raise RomTooLarge(len(data), PROGRAM_SPACE)
        self.memory[PROGRAM_START:PROGRAM_START + len(data)] = data
        self.pc = PROGRAM_START

    # ---- fetch ----
    def fetch(self):
        """Read the instruction at PC and move PC past it."""
        hi, lo = self.read(self.pc, 2)
        self.pc = (self.pc + 2) & 0xFFFF
        return Instruction(hi, lo)

    # ---- call stack ----
    def push(self, address):
        if self.sp >= STACK_SIZE:
            raise StackOverflow("Stack overflow on CALL (%d frames)" % STACK_SIZE)
        self.stack[self.sp] = address
        self.sp += 1

    def pop(self):
        if self.sp == 0:
            raise StackUnderflow("Stack underflow on 00EE")
        self.sp -= 1
        return int(self.stack[self.sp])
