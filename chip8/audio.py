import pyglet
from pyglet.media import synthesis

from .config import beep_frequency, beep_volume
from .log import log


def generate_beep(duration=1.0, frequency=beep_frequency):
    # Square waveform from pyglet.media.synthesis, looped while the gate is open
    wave = synthesis.Square(duration=duration, frequency=frequency)
    return pyglet.media.StaticSource(wave)


class Buzzer:
    """Tone that plays while the sound timer is non-zero."""

    def __init__(self, frequency=beep_frequency, volume=beep_volume):
        self.player = pyglet.media.Player()
        self.player.queue(generate_beep(frequency=frequency))
        self.player.loop = True
        self.player.volume = volume
        self.playing = False

    def enable(self):
        self.player.play()
        self.playing = True
        log("Sound plays!")

    def disable(self):
        self.player.pause()
        self.playing = False
        log("Sound stops")

    def update(self, sound_active):
        # only act on transitions across zero
        if sound_active and not self.playing:
            self.enable()
        elif not sound_active and self.playing:
            self.disable()

    def delete(self):
        if self.player is not None:
            self.player.delete()
            self.player = None
