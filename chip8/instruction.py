from collections import namedtuple


class Instruction(namedtuple("Instruction", "hi lo")):
    """Two fetched bytes, split into the fields the opcode handlers use.

    hi = byte at PC, lo = byte at PC+1 (CHIP-8 is big-endian).
    """

    __slots__ = ()

    @property
    def opcode(self):
        return (self.hi << 8) | self.lo

    # first nibble, kept in the high position: 0x00, 0x10 .. 0xF0
    @property
    def group(self):
        return self.hi & 0xF0

    @property
    def x(self):
        return self.hi & 0x0F

    @property
    def y(self):
        return (self.lo & 0xF0) >> 4

    @property
    def n(self):
        return self.lo & 0x0F

    @property
    def nn(self):
        return self.lo

    @property
    def nnn(self):
        return ((self.hi & 0x0F) << 8) | self.lo

    def __repr__(self):
        return "Instruction(%04X)" % self.opcode
