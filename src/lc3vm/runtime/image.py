import struct
import logging as lg
from pathlib import Path

from lc3vm.common.hwconf import MEMORY_SIZE
from lc3vm.runtime.memory import MemoryBus

WORD_SIZE = 2   # bytes per word on the wire


class ImageLoadError(Exception):
    def __init__(self, path: Path | str, reason: str):
        super().__init__(f'failed to load image {path}: {reason}')
        self.path = path
        self.reason = reason


def parse_image(data: bytes) -> tuple[int, list[int]]:
    '''
    Splits an image into its origin and payload words.

    Words are big-endian; a trailing odd byte is dropped and the payload
    is cut where it would run past the last memory address.
    '''
    if len(data) < WORD_SIZE:
        raise ValueError('image has no origin word')

    (origin,) = struct.unpack('>H', data[:WORD_SIZE])

    count = min((len(data) - WORD_SIZE) // WORD_SIZE, MEMORY_SIZE - origin)
    words = struct.unpack(f'>{count}H', data[WORD_SIZE:WORD_SIZE + count * WORD_SIZE])

    return origin, list(words)


def load_bytes(bus: MemoryBus, data: bytes) -> int:
    origin, words = parse_image(data)
    bus.load(origin, words)
    return origin


def load_image(bus: MemoryBus, path: Path) -> int:
    try:
        data = Path(path).read_bytes()
        origin, words = parse_image(data)
    except OSError as e:
        raise ImageLoadError(path, e.strerror or str(e)) from e
    except ValueError as e:
        raise ImageLoadError(path, str(e)) from e

    count = bus.load(origin, words)
    lg.info(f'Loaded {path}: {count} words @ 0x{origin:04X}')
    return origin
