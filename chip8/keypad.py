import numpy as np


class Keypad:
    """Pressed state of the 16 hex keys 0x0-0xF."""

    def __init__(self):
        self.keys = np.zeros(16, dtype=np.uint8)

    def press(self, key):
        self.keys[key] = 1

    def release(self, key):
        self.keys[key] = 0

    def is_pressed(self, key):
        return bool(self.keys[key])

    def first_pressed(self):
        for i in range(16):
            if self.keys[i]:
                return i
        return None
