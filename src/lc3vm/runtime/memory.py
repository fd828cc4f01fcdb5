import logging as lg
from typing import Protocol, Iterable

from lc3vm.common.hwconf import MEMORY_SIZE, WORD_MASK, KBSR, KBDR, KBSR_READY
from lc3vm.runtime.console import Console


class Device(Protocol):
    ''' Memory-mapped device, notified before the bus serves a read '''

    def on_read(self, bus: 'MemoryBus', address: int) -> None:
        ...


class MemoryBus():
    words: list[int]
    devices: dict[int, Device]

    def __init__(self, devices: dict[int, Device] | None = None):
        self.words = [0] * MEMORY_SIZE
        self.devices = devices if devices is not None else {}

    def map_device(self, address: int, device: Device):
        lg.debug(f'Device {type(device).__name__} mapped @ 0x{address:04X}')
        self.devices[address & WORD_MASK] = device

    def read(self, address: int) -> int:
        address &= WORD_MASK
        device = self.devices.get(address)

        if device is not None:
            device.on_read(self, address)

        return self.words[address]

    def peek(self, address: int) -> int:
        return self.words[address & WORD_MASK]

    def write(self, address: int, value: int):
        self.words[address & WORD_MASK] = value & WORD_MASK

    def load(self, origin: int, words: Iterable[int]) -> int:
        ''' Stores words from origin up to the end of memory, returns the count stored '''
        address = origin & WORD_MASK
        count = 0

        for word in words:
            if address >= MEMORY_SIZE:
                break

            self.words[address] = word & WORD_MASK
            address += 1
            count += 1

        return count


class Keyboard():
    ''' Status and data registers backed by the console input '''

    def __init__(self, console: Console):
        self.console = console

    def on_read(self, bus: MemoryBus, address: int) -> None:
        if self.console.has_byte():
            bus.write(KBSR, KBSR_READY)
            bus.write(KBDR, self.console.read_byte())
        else:
            bus.write(KBSR, 0)


def create_bus(console: Console) -> MemoryBus:
    bus = MemoryBus()
    bus.map_device(KBSR, Keyboard(console))
    return bus
