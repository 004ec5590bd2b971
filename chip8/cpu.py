# CPU - Cowgod's CHIP-8 Technical reference http://devernay.free.fr/hacks/chip8/C8TECH10.HTM
# One call to cycle() = fetch 2 bytes at PC, PC += 2, decode, dispatch.
# Groups 0x0, 0x8, 0xE and 0xF hold several instructions and dispatch again
# on the low nibble / low byte.

from .errors import UnknownOpcode
from .log import log
from .machine import FONT_BASE
from .rng import RandomSource


class CPU:

    def __init__(self, machine, display, keypad, rng=None):
        self.machine = machine
        self.display = display
        self.keypad = keypad
        self.rng = rng if rng is not None else RandomSource()

        self.cycle_count = 0

        # Prepare opcode function map
        self.setup_funcmap()

    # ---- Cycle ----
    def cycle(self):
        self.cycle_count += 1  # Count cycle

        address = self.machine.pc
        ins = self.machine.fetch()

        handler = self.funcmap.get(ins.group)
        if handler is None:
            raise UnknownOpcode(ins, address)
        handler(ins, address)
        return ins

    # ---- Opcode function map ----
    def setup_funcmap(self):
        self.funcmap = {
            0x00: self._0xxx,  # 00E0 / 00EE - Clear screen / Return from subroutine
            0x10: self._1nnn,  # 1nnn - Jump to a specific memory address
            0x20: self._2nnn,  # 2nnn - Call a subroutine at a memory address
            0x30: self._3xnn,  # 3xnn - Skip next instruction if a register equals a number
            0x40: self._4xnn,  # 4xnn - Skip next instruction if a register does NOT equal a number
            0x50: self._5xy0,  # 5xy0 - Skip next instruction if two registers are equal
            0x60: self._6xnn,  # 6xnn - Set a register to a number
            0x70: self._7xnn,  # 7xnn - Add a number to a register
            0x80: self._8xyk,  # 8xy0..8xyE - Math and logic between two registers
            0x90: self._9xy0,  # 9xy0 - Skip next instruction if two registers are NOT equal
            0xA0: self._Annn,  # Annn - Set the memory pointer I
            0xB0: self._Bnnn,  # Bnnn - Jump to an address plus V0
            0xC0: self._Cxnn,  # Cxnn - Random number ANDed with a value
            0xD0: self._Dxyn,  # Dxyn - Draw a sprite at X,Y
            0xE0: self._Exxx,  # Ex9E / ExA1 - Skip on key pressed / not pressed
            0xF0: self._Fxxx,  # Fx07..Fx65 - timers, memory, I and waiting for keys
        }
        self.alu_map = {
            0x0: self._8xy0,
            0x1: self._8xy1,
            0x2: self._8xy2,
            0x3: self._8xy3,
            0x4: self._8xy4,
            0x5: self._8xy5,
            0x6: self._8xy6,
            0x7: self._8xy7,
            0xE: self._8xyE,
        }
        self.key_map = {
            0x9E: self._Ex9E,
            0xA1: self._ExA1,
        }
        self.misc_map = {
            0x07: self._Fx07,
            0x0A: self._Fx0A,
            0x15: self._Fx15,
            0x18: self._Fx18,
            0x1E: self._Fx1E,
            0x29: self._Fx29,
            0x33: self._Fx33,
            0x55: self._Fx55,
            0x65: self._Fx65,
        }

    # ---- Opcode Handlers ----

    # 00E0 / 00EE - Clear Screen / Return from subroutine
    def _0xxx(self, ins, address):
        if ins.opcode == 0x00E0:
            self.display.clear()
            log("Clear the display (all pixels turned off)")
        elif ins.opcode == 0x00EE:
            self.machine.pc = self.machine.pop()
            log("Return to", hex(self.machine.pc))
        else:
            # 0nnn machine code routines are not supported
            raise UnknownOpcode(ins, address)

    # 1nnn - Jump to address NNN
    def _1nnn(self, ins, address):
        self.machine.pc = ins.nnn
        log("Jump to address", hex(ins.nnn))

    # 2nnn - Call subroutine at NNN
    def _2nnn(self, ins, address):
        self.machine.push(self.machine.pc)
        self.machine.pc = ins.nnn
        log("Call subroutine at", hex(ins.nnn))

    # 3xnn - Skip next instruction if Vx == nn
    def _3xnn(self, ins, address):
        if self.machine.V[ins.x] == ins.nn:
            self.machine.pc += 2
            log(f"Skip next instruction: V{ins.x} == {ins.nn}")

    # 4xnn - Skip next instruction if Vx != nn
    def _4xnn(self, ins, address):
        if self.machine.V[ins.x] != ins.nn:
            self.machine.pc += 2
            log(f"Skip next instruction: V{ins.x} != {ins.nn}")

    # 5xy0 - Skip next instruction if Vx == Vy
    def _5xy0(self, ins, address):
        V = self.machine.V
        if V[ins.x] == V[ins.y]:
            self.machine.pc += 2
            log(f"Skip next instruction: V{ins.x} == V{ins.y}")

    # 6xnn - Set Vx = nn
    def _6xnn(self, ins, address):
        self.machine.V[ins.x] = ins.nn
        log(f"Set V{ins.x} = {ins.nn}")

    # 7xnn - Add immediate, no carry
    def _7xnn(self, ins, address):
        V = self.machine.V
        V[ins.x] = (V[ins.x] + ins.nn) & 0xFF
        log(f"Add {ins.nn} to V{ins.x}: {V[ins.x]}")

    # 8xy0..8xyE
    def _8xyk(self, ins, address):
        handler = self.alu_map.get(ins.n)
        if handler is None:
            raise UnknownOpcode(ins, address)
        handler(ins.x, ins.y)

    def _8xy0(self, x, y):
        V = self.machine.V
        V[x] = V[y]
        log(f"Copy V{y} ({V[y]}) into V{x}")

    def _8xy1(self, x, y):
        V = self.machine.V
        V[x] |= V[y]
        log(f"V{x} = V{x} OR V{y} -> {V[x]}")

    def _8xy2(self, x, y):
        V = self.machine.V
        V[x] &= V[y]
        log(f"V{x} = V{x} AND V{y} -> {V[x]}")

    def _8xy3(self, x, y):
        V = self.machine.V
        V[x] ^= V[y]
        log(f"V{x} = V{x} XOR V{y} -> {V[x]}")

    # VF is written after Vx in all of the flag-setting ops, so VF as the
    # destination ends up holding the flag.
    def _8xy4(self, x, y):
        V = self.machine.V
        s = V[x] + V[y]
        V[x] = s & 0xFF
        V[0xF] = 1 if s > 0xFF else 0
        log(f"Add V{y} to V{x}: result {V[x]}, carry={V[0xF]}")

    def _8xy5(self, x, y):
        V = self.machine.V
        flag = 1 if V[x] >= V[y] else 0
        V[x] = (V[x] - V[y]) & 0xFF
        V[0xF] = flag
        log(f"Subtract V{y} from V{x}: result {V[x]}, NOT borrow={flag}")

    def _8xy6(self, x, y):
        V = self.machine.V
        V[x] = V[y]
        out_bit = V[x] & 1
        V[x] >>= 1
        V[0xF] = out_bit
        log(f"V{x} = V{y} >> 1: {V[x]}, least significant bit={out_bit}")

    def _8xy7(self, x, y):
        V = self.machine.V
        flag = 1 if V[y] >= V[x] else 0
        V[x] = (V[y] - V[x]) & 0xFF
        V[0xF] = flag
        log(f"Set V{x} = V{y} - V{x}: result {V[x]}, NOT borrow={flag}")

    def _8xyE(self, x, y):
        V = self.machine.V
        V[x] = V[y]
        out_bit = 1 if V[x] & 0x80 else 0
        V[x] = (V[x] << 1) & 0xFF
        V[0xF] = out_bit
        log(f"V{x} = V{y} << 1: {V[x]}, most significant bit={out_bit}")

    # 9xy0 - Skip next instruction if Vx != Vy
    def _9xy0(self, ins, address):
        V = self.machine.V
        if V[ins.x] != V[ins.y]:
            self.machine.pc += 2
            log(f"Skip next instruction: V{ins.x} != V{ins.y}")

    # Annn - Set I = NNN
    def _Annn(self, ins, address):
        self.machine.I = ins.nnn
        log(f"Set I = {ins.nnn:03X}")

    # Bnnn - Jump to address NNN + V0
    def _Bnnn(self, ins, address):
        self.machine.pc = ins.nnn + self.machine.V[0]
        log(f"Jump to address V0 + {ins.nnn:03X} = {self.machine.pc:03X}")

    # Cxnn - Vx = random byte & nn
    def _Cxnn(self, ins, address):
        V = self.machine.V
        V[ins.x] = ins.nn & self.rng.next()
        log(f"Set V{ins.x} = random_byte & {ins.nn} -> {V[ins.x]}")

    # Dxyn - Draw n rows of sprite data from I at (Vx, Vy)
    # The start point wraps around the screen, the sprite itself is clipped
    # at the right and bottom edges.
    def _Dxyn(self, ins, address):
        m = self.machine
        d = self.display
        px = m.V[ins.x] % d.width
        py = m.V[ins.y] % d.height
        rows = m.read(m.I, ins.n)

        m.V[0xF] = 0
        for row, sprite in enumerate(rows):
            y = py + row
            if y >= d.height:
                break
            for bit in range(8):
                x = px + bit
                if x >= d.width:
                    break
                if not sprite & (0x80 >> bit):
                    continue
                if d.get(x, y):
                    d.set(x, y, False)
                    m.V[0xF] = 1
                else:
                    d.set(x, y, True)
        d.should_draw = True
        log(f"Drew sprite at ({px}, {py}), collision={m.V[0xF]}")

    # Ex9E / ExA1 - skip if key Vx is pressed / not pressed
    def _Exxx(self, ins, address):
        handler = self.key_map.get(ins.nn)
        if handler is None:
            raise UnknownOpcode(ins, address)
        handler(ins.x)

    def _Ex9E(self, x):
        key = self.machine.V[x] & 0xF
        if self.keypad.is_pressed(key):
            self.machine.pc += 2
            log(f"Key {key:X} pressed, skip")

    def _ExA1(self, x):
        key = self.machine.V[x] & 0xF
        if not self.keypad.is_pressed(key):
            self.machine.pc += 2
            log(f"Key {key:X} not pressed, skip")

    # Fx07..Fx65 - timers, memory, I, and key input
    def _Fxxx(self, ins, address):
        handler = self.misc_map.get(ins.nn)
        if handler is None:
            raise UnknownOpcode(ins, address)
        handler(ins.x)

    def _Fx07(self, x):
        self.machine.V[x] = self.machine.timers.delay

    def _Fx0A(self, x):
        # Wait for a key press. Nothing pressed: back PC up so this
        # instruction runs again next cycle. The caller keeps polling.
        pressed = self.keypad.first_pressed()
        if pressed is None:
            self.machine.pc -= 2
        else:
            self.machine.V[x] = pressed
            log(f"Key {pressed:X} -> V{x}")

    def _Fx15(self, x):
        self.machine.timers.delay = self.machine.V[x]

    def _Fx18(self, x):
        self.machine.timers.sound = self.machine.V[x]

    def _Fx1E(self, x):
        m = self.machine
        m.I = (m.I + m.V[x]) & 0xFFFF
        log(f"Set I = I + V{x} -> {m.I:03X}")

    def _Fx29(self, x):
        self.machine.I = FONT_BASE + 5 * self.machine.V[x]
        log(f"Set I = font glyph {self.machine.V[x]:X}")

    def _Fx33(self, x):
        m = self.machine
        val = m.V[x]
        m.write(m.I, (val // 100, (val // 10) % 10, val % 10))
        log(f"BCD of V{x} ({val}) stored at {m.I:03X}")

    def _Fx55(self, x):
        m = self.machine
        m.write(m.I, m.V[:x + 1])
        log(f"Stored V0..V{x} at {m.I:03X}")

    def _Fx65(self, x):
        m = self.machine
        m.V[:x + 1] = list(m.read(m.I, x + 1))
        log(f"Loaded V0..V{x} from {m.I:03X}")
