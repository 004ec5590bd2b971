import numpy as np

from .config import width, height


class Display:
    """64x32 monochrome frame buffer. Row-major, (0, 0) is top-left."""

    def __init__(self, width=width, height=height):
        self.width = width
        self.height = height
        self.pixels = np.zeros((height, width), dtype=np.uint8)
        self.should_draw = True  # so that we only update the window when needed

    def get(self, x, y):
        return bool(self.pixels[y, x])

    def set(self, x, y, on):
        self.pixels[y, x] = 1 if on else 0
        self.should_draw = True

    def clear(self):
        self.pixels.fill(0)
        self.should_draw = True

    def dump(self):
        return "\n".join("".join(str(p) for p in row) for row in self.pixels)
