from .config import timer_HZ
from .log import log


class Timers:
    """Delay and sound countdowns, decremented once per tick() down to zero."""

    def __init__(self):
        self.delay = 0
        self.sound = 0

    def tick(self):
        if self.delay > 0 or self.sound > 0:
            log("Delay:", self.delay)
            log("Sound:", self.sound)
        if self.delay > 0:
            self.delay -= 1
        if self.sound > 0:
            self.sound -= 1

    @property
    def sound_active(self):
        return self.sound > 0


class TimerClock:
    """Turns elapsed time into whole timer ticks at a fixed rate.

    The caller may advance it by any dt; leftover time is carried to the
    next call so no 1/rate boundary is lost or counted twice.
    """

    def __init__(self, timers, rate=timer_HZ):
        self.timers = timers
        self.period = 1.0 / rate
        self.elapsed = 0.0

    def advance(self, dt):
        self.elapsed += dt
        ticks = 0
        while self.elapsed >= self.period:
            self.elapsed -= self.period
            self.timers.tick()
            ticks += 1
        return ticks
