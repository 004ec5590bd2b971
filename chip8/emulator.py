# The window is the driving loop: pyglet's clock calls the CPU cpu_hz times a
# second and feeds elapsed time into the 60Hz timer clock. pyglet also
# handles graphics, sound output and keyboard input, so we subclass its
# Window and override the event handlers we need.

import sys

import numpy as np
import pyglet
from pyglet.window import key

from . import config
from .audio import Buzzer
from .cpu import CPU
from .display import Display
from .errors import Chip8Error, RomLoadError, UnknownOpcode
from .keypad import Keypad
from .log import log, toggle_logs
from .machine import Machine
from .rng import RandomSource
from .rom import load_rom
from .timers import TimerClock

#map binding keys
keymap = {
    key._1: 0x1, key._2: 0x2, key._3: 0x3, key._4: 0xC,
    key.Q: 0x4, key.W: 0x5, key.E: 0x6, key.R: 0xD,
    key.A: 0x7, key.S: 0x8, key.D: 0x9, key.F: 0xE,
    key.Z: 0xA, key.X: 0x0, key.C: 0xB, key.V: 0xF,
}


class Chip8Window(pyglet.window.Window):

    def __init__(self, machine, cpu_hz=config.cpu_hz):
        super().__init__(
            width=config.window_width,
            height=config.window_height,
            caption="CHIP-8 Emulator",
            resizable=False,
            vsync=False
        )

        # ---- interpreter ----
        self.machine = machine
        self.display = Display()
        self.keypad = Keypad()
        rng = RandomSource()
        rng.seed_with_clock()
        self.cpu = CPU(self.machine, self.display, self.keypad, rng)
        self.timer_clock = TimerClock(self.machine.timers, rate=config.timer_HZ)
        self.buzzer = Buzzer()

        self.auto_clock = True
        self.has_exit = False

        # Pre-allocated small framebuffer (64x32 RGBA), upscaled with numpy.repeat
        self._small_framebuf = np.zeros((config.height, config.width, 4), dtype=np.uint8)
        self._small_framebuf[..., 3] = 255
        self.image = pyglet.image.ImageData(
            config.window_width,
            config.window_height,
            'RGBA',
            bytes(config.window_width * config.window_height * 4)
        )

        # ---- Performance Counters ----
        self._fps_counter = 0
        self._last_cycle_count = 0
        self.fps_label = self._hud_label("FPS: 0", 15)
        self.cps_label = self._hud_label("Cycles/s: 0", 30)

        # Schedule CPU and timer ticks
        pyglet.clock.schedule_interval(self._cpu_tick, 1.0 / cpu_hz)
        pyglet.clock.schedule_interval(self._timer_tick, 1.0 / config.timer_HZ)
        pyglet.clock.schedule_interval(self._update_bench, 1.0)

    def _hud_label(self, text, offset):
        return pyglet.text.Label(
            text,
            font_size=12,
            x=5,
            y=config.window_height - offset,
            anchor_x='left',
            anchor_y='center',
            color=(255, 255, 255, 255)
        )

    # ---- CPU cycle ----
    def _cpu_tick(self, dt):
        if self.auto_clock and not self.has_exit:
            self.step()

    def step(self):
        try:
            self.cpu.cycle()
        except UnknownOpcode as e:
            if config.halt_on_unknown_opcode:
                self.halt(e)
            else:
                print("Skipping:", e)
        except Chip8Error as e:
            self.halt(e)

    def halt(self, error):
        print("Emulation error:", error)
        self.close()

    # ---- timers ----
    def _timer_tick(self, dt):
        if self.timer_clock.advance(dt):
            self.buzzer.update(self.machine.timers.sound_active)

    def _update_bench(self, dt):
        cycles = self.cpu.cycle_count
        self.fps_label.text = f"FPS: {self._fps_counter / dt:.1f}"
        self.cps_label.text = f"Cycles/s: {cycles - self._last_cycle_count}"
        self._fps_counter = 0
        self._last_cycle_count = cycles

    # ---- Input ----
    def on_key_press(self, symbol, modifiers):
        if symbol == key.ESCAPE:
            self.close()
        elif symbol in keymap:
            self.keypad.press(keymap[symbol])
        elif symbol == key.F1:
            log("logs_on:", toggle_logs())
        elif symbol == key.M:
            self.auto_clock = not self.auto_clock
            log("Auto clock:", self.auto_clock)
        elif symbol == key.SPACE and not self.auto_clock:
            self.step()
        elif symbol == key.N:
            print(self.display.dump())

    def on_key_release(self, symbol, modifiers):
        if symbol in keymap:
            self.keypad.release(keymap[symbol])

    # ---- Drawing ----
    def on_draw(self):
        self.clear()

        if self.display.should_draw:
            # pyglet's origin is bottom-left, the frame buffer's is top-left
            self._small_framebuf[..., :3] = self.display.pixels[::-1, :, None] * 255
            scaled = np.repeat(np.repeat(self._small_framebuf, config.scale, axis=0), config.scale, axis=1)
            self.image.set_data('RGBA', config.window_width * 4, scaled.tobytes())
            self.display.should_draw = False
        self.image.blit(0, 0)

        self.fps_label.draw()
        self.cps_label.draw()
        self._fps_counter += 1

    def close(self):
        self.has_exit = True
        pyglet.clock.unschedule(self._cpu_tick)
        pyglet.clock.unschedule(self._timer_tick)
        pyglet.clock.unschedule(self._update_bench)
        self.buzzer.delete()
        super().close()


# ---- Entry point ----
USAGE = "Usage: python -m chip8 <rom-file> [cpu-hz]"


def parse_cpu_hz(text):
    """Instruction rate from the command line, None unless a positive integer."""
    try:
        cpu_hz = int(text)
    except ValueError:
        return None
    return cpu_hz if cpu_hz > 0 else None


def main(argv=None):
    argv = sys.argv if argv is None else argv
    cpu_hz = parse_cpu_hz(argv[2]) if len(argv) > 2 else config.cpu_hz
    if len(argv) < 2 or cpu_hz is None:
        print(USAGE)
        return 1

    machine = Machine()
    try:
        load_rom(machine, argv[1])
    except RomLoadError as e:
        print(e, file=sys.stderr)
        return 1

    Chip8Window(machine, cpu_hz=cpu_hz)
    pyglet.app.run()
    return 0
