"""Everything the interpreter can report instead of executing an instruction."""


class Chip8Error(Exception):
    pass


class RomLoadError(Chip8Error):
    pass


class RomTooLarge(RomLoadError):
    def __init__(self, size, limit):
        self.size = size
        self.limit = limit
        super().__init__("ROM is %d bytes, program space holds %d" % (size, limit))


class UnknownOpcode(Chip8Error):
    def __init__(self, instruction, address):
        self.instruction = instruction
        self.address = address
        super().__init__("Unknown opcode: %04X at 0x%03X" % (instruction.opcode, address))


class StackOverflow(Chip8Error):
    pass


class StackUnderflow(Chip8Error):
    pass


class MemoryOutOfBounds(Chip8Error):
    def __init__(self, address, length=1):
        self.address = address
        self.length = length
        super().__init__("Memory access out of bounds: 0x%04X (+%d)" % (address, length))
