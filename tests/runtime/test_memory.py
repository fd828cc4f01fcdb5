import io
import os

from lc3vm.common.hwconf import KBSR, KBDR, MEMORY_SIZE
from lc3vm.runtime.console import BufferedConsole, StreamConsole
from lc3vm.runtime.memory import MemoryBus, create_bus


class RecordingDevice:
    def __init__(self):
        self.reads = []

    def on_read(self, bus, address):
        self.reads.append(address)
        bus.write(address, 0x0ABC)


def test_storage_is_zeroed():
    bus = MemoryBus()

    assert len(bus.words) == MEMORY_SIZE
    assert bus.read(0x3000) == 0


def test_addresses_wrap():
    bus = MemoryBus()
    bus.write(0x10005, 0x17)

    assert bus.read(5) == 0x17
    assert bus.read(0x10005) == 0x17


def test_write_masks_value():
    bus = MemoryBus()
    bus.write(0x4000, 0x12345)

    assert bus.read(0x4000) == 0x2345


def test_device_intercepts_read():
    device = RecordingDevice()
    bus = MemoryBus()
    bus.map_device(0x5000, device)

    assert bus.read(0x5000) == 0x0ABC
    assert bus.peek(0x5001) == 0
    assert device.reads == [0x5000]

    bus.peek(0x5000)
    bus.write(0x5000, 1)
    assert device.reads == [0x5000]


def test_keyboard_ready():
    console = BufferedConsole(b'A')
    bus = create_bus(console)

    assert bus.read(KBSR) == 0x8000
    assert bus.read(KBDR) == 0x41
    assert not console.has_byte()

    assert bus.read(KBSR) == 0
    assert bus.read(KBDR) == 0x41


def test_keyboard_idle():
    bus = create_bus(BufferedConsole())

    bus.write(KBSR, 0x8000)
    assert bus.read(KBSR) == 0


def test_keyboard_closed_input():
    read_fd, write_fd = os.pipe()
    os.close(write_fd)

    with os.fdopen(read_fd, 'rb', buffering=0) as stdin:
        bus = create_bus(StreamConsole(stdin, io.BytesIO()))

        bus.write(KBSR, 0x8000)
        assert bus.read(KBSR) == 0


def test_keyboard_data_read_does_not_poll():
    console = BufferedConsole(b'A')
    bus = create_bus(console)

    assert bus.read(KBDR) == 0
    assert console.has_byte()


def test_status_write_has_no_side_effect():
    console = BufferedConsole(b'A')
    bus = create_bus(console)
    bus.write(KBSR, 0x1234)

    assert bus.peek(KBSR) == 0x1234
    assert console.has_byte()


def test_load_stops_at_end_of_memory():
    bus = MemoryBus()

    assert bus.load(0xFFFE, [1, 2, 3]) == 2
    assert bus.peek(0xFFFE) == 1
    assert bus.peek(0xFFFF) == 2
    assert bus.peek(0x0000) == 0
