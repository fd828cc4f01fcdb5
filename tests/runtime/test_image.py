import pytest

from lc3vm.runtime.image import ImageLoadError, parse_image, load_image
from lc3vm.runtime.memory import MemoryBus

from unit_utils import make_image


def test_parse_big_endian():
    assert parse_image(b'\x30\x00\x12\x34\xAB\xCD') == (0x3000, [0x1234, 0xABCD])


def test_parse_drops_odd_byte():
    assert parse_image(b'\x30\x00\x12\x34\xAB') == (0x3000, [0x1234])


def test_parse_origin_only():
    assert parse_image(b'\x40\x00') == (0x4000, [])


def test_parse_without_origin():
    with pytest.raises(ValueError):
        parse_image(b'\x30')


def test_parse_stops_at_end_of_memory():
    assert parse_image(make_image(0xFFFE, [1, 2, 3])) == (0xFFFE, [1, 2])


def test_load_image(tmp_path):
    path = tmp_path / 'prog.obj'
    path.write_bytes(make_image(0x3000, [0xF025, 0x1234]))
    bus = MemoryBus()

    assert load_image(bus, path) == 0x3000
    assert bus.peek(0x3000) == 0xF025
    assert bus.peek(0x3001) == 0x1234
    assert bus.peek(0x3002) == 0


def test_later_images_overwrite(tmp_path):
    first = tmp_path / 'first.obj'
    second = tmp_path / 'second.obj'
    first.write_bytes(make_image(0x3000, [1, 2, 3]))
    second.write_bytes(make_image(0x3001, [9]))
    bus = MemoryBus()

    load_image(bus, first)
    load_image(bus, second)

    assert [bus.peek(a) for a in range(0x3000, 0x3003)] == [1, 9, 3]


def test_missing_image(tmp_path):
    path = tmp_path / 'missing.obj'

    with pytest.raises(ImageLoadError) as e:
        load_image(MemoryBus(), path)

    assert e.value.path == path
    assert 'missing.obj' in str(e.value)


def test_empty_image(tmp_path):
    path = tmp_path / 'empty.obj'
    path.write_bytes(b'')

    with pytest.raises(ImageLoadError):
        load_image(MemoryBus(), path)
