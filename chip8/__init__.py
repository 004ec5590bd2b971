from .cpu import CPU
from .display import Display
from .errors import (Chip8Error, MemoryOutOfBounds, RomLoadError, RomTooLarge,
                     StackOverflow, StackUnderflow, UnknownOpcode)
from .instruction import Instruction
from .keypad import Keypad
from .machine import Machine
from .rng import RandomSource
from .timers import TimerClock, Timers
