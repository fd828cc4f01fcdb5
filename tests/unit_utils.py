import struct
from pathlib import Path

import lc3vm.sasm.asm as asm
import lc3vm.runtime.emulator as emulator
from lc3vm.common.hwconf import PC_START
from lc3vm.common.settings import RunSettings
from lc3vm.runtime.console import BufferedConsole
from lc3vm.runtime.cpu import CPU


def find_file(filename: str) -> Path:
    return Path(__file__).parent / filename


def load_file(filename: str) -> str:
    return find_file(filename).read_text()


def make_image(origin: int, words: list[int]) -> bytes:
    return struct.pack(f'>{len(words) + 1}H', origin, *words)


def image_words(image: bytes) -> list[int]:
    return list(struct.unpack(f'>{len(image) // 2}H', image))


def place(proc: CPU, *words: int, origin: int = PC_START):
    proc.bus.load(origin, words)


def step(proc: CPU, *words: int):
    ''' Places words at the entry point and executes the first one '''
    place(proc, *words)
    proc.exec_next()


def execute_asm_file(filename: str, input: bytes = b'', settings: RunSettings | None = None):
    image = asm.assemble_file(find_file(filename))
    console = BufferedConsole(input)
    proc = emulator.execute_images([image], console, settings)
    return proc, console
