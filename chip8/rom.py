from .errors import RomLoadError
from .log import log


def read_rom(path):
    try:
        with open(path, "rb") as f:
            return f.read()
    except OSError as e:
        raise RomLoadError("Unable to read ROM %s: %s" % (path, e)) from e


def load_rom(machine, path):
    """Copy a ROM file into program space and point PC at it."""
    log("Loading ROM:", path)
    data = read_rom(path)
    machine.load_program(data)
    log("Loaded", len(data), "bytes")
    return len(data)
