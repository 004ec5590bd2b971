import time

from .log import log

DEFAULT_SEED = 4
MASK32 = 0xFFFFFFFF


class RandomSource:
    """xorshift32 byte generator. Same seed, same sequence."""

    def __init__(self, state=DEFAULT_SEED):
        self.state = state & MASK32

    def seed(self, value):
        self.state = value & MASK32

    def seed_with_clock(self):
        now = time.time()
        if now < 0:
            log("System time is before UNIX Epoch! RNG seed is static.")
            self.state = DEFAULT_SEED
        else:
            self.state = int(now * 1000) & MASK32
        return self.state

    def next(self):
        x = self.state
        x ^= (x << 13) & MASK32
        x ^= x >> 17
        x ^= (x << 5) & MASK32
        self.state = x
        return x & 0xFF
