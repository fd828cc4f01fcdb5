import io
import os

import pytest

from lc3vm.runtime.console import BufferedConsole, StreamConsole, TerminalConsole


def test_buffered_console():
    console = BufferedConsole(b'ab')

    assert console.has_byte()
    assert console.read_byte() == ord('a')
    assert console.read_byte() == ord('b')
    assert not console.has_byte()

    with pytest.raises(EOFError):
        console.read_byte()

    console.write_byte(0x141)
    console.write(b'BC')
    assert console.text() == 'ABC'


def test_stream_console_without_descriptor():
    stdout = io.BytesIO()
    console = StreamConsole(io.BytesIO(b'q'), stdout)

    assert console.fd is None
    assert console.has_byte()
    assert console.has_byte()
    assert console.read_byte() == ord('q')
    assert not console.has_byte()

    with pytest.raises(EOFError):
        console.read_byte()

    console.write(b'ok')
    console.write_byte(ord('!'))
    console.flush()
    assert stdout.getvalue() == b'ok!'


def test_stream_console_polls_pipe():
    read_fd, write_fd = os.pipe()

    with os.fdopen(read_fd, 'rb', buffering=0) as stdin:
        console = StreamConsole(stdin, io.BytesIO())

        assert not console.has_byte()

        os.write(write_fd, b'kl')
        assert console.has_byte()
        assert console.read_byte() == ord('k')
        assert console.has_byte()
        assert console.read_byte() == ord('l')
        assert not console.has_byte()

        os.close(write_fd)

        with pytest.raises(EOFError):
            console.read_byte()


def test_stream_console_closed_pipe_has_no_byte():
    read_fd, write_fd = os.pipe()
    os.close(write_fd)

    with os.fdopen(read_fd, 'rb', buffering=0) as stdin:
        console = StreamConsole(stdin, io.BytesIO())

        assert not console.has_byte()
        assert not console.has_byte()

        with pytest.raises(EOFError):
            console.read_byte()


def test_terminal_console_off_tty():
    stdout = io.BytesIO()

    with TerminalConsole(io.BytesIO(b''), stdout) as console:
        console.write(b'x')

    assert console.saved_attrs is None
    assert stdout.getvalue() == b'x'
