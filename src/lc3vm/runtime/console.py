import io
import os
import select
import logging as lg
from typing import BinaryIO


class Console:
    ''' Byte-level host I/O the machine is given '''

    def has_byte(self) -> bool:
        ''' Non-blocking check for pending input '''
        return False

    def read_byte(self) -> int:
        ''' Blocks until a byte arrives, raises EOFError when input is closed '''
        raise EOFError()

    def write_byte(self, value: int):
        pass

    def write(self, data: bytes):
        for value in data:
            self.write_byte(value)

    def flush(self):
        pass


class BufferedConsole(Console):
    ''' In-memory console, input is given upfront and output is collected '''

    def __init__(self, input: bytes = b''):
        self.pending = bytearray(input)
        self.output = bytearray()

    def feed(self, data: bytes):
        self.pending += data

    def has_byte(self) -> bool:
        return len(self.pending) > 0

    def read_byte(self) -> int:
        if not self.pending:
            raise EOFError()

        return self.pending.pop(0)

    def write_byte(self, value: int):
        self.output.append(value & 0xFF)

    def write(self, data: bytes):
        self.output += data

    def text(self) -> str:
        return self.output.decode('latin-1')


class StreamConsole(Console):
    ''' Console over binary streams, polled with a zero timeout select '''

    def __init__(self, stdin: BinaryIO, stdout: BinaryIO):
        self.stdin = stdin
        self.stdout = stdout
        self.lookahead: int | None = None

        try:
            self.fd: int | None = stdin.fileno()
        except (AttributeError, io.UnsupportedOperation):
            # In-memory streams never block, read-ahead stands in for polling
            self.fd = None

    def has_byte(self) -> bool:
        if self.lookahead is not None:
            return True

        if self.fd is not None:
            readable, _, _ = select.select([self.fd], [], [], 0)

            if not readable:
                return False

            # Closed input selects as readable too, only data counts
            data = os.read(self.fd, 1)
        else:
            data = self.stdin.read(1)

        if not data:
            return False

        self.lookahead = data[0]
        return True

    def read_byte(self) -> int:
        if self.lookahead is not None:
            value = self.lookahead
            self.lookahead = None
            return value

        if self.fd is not None:
            # Unbuffered, so select keeps seeing what is left
            data = os.read(self.fd, 1)
        else:
            data = self.stdin.read(1)

        if not data:
            raise EOFError()

        return data[0]

    def write_byte(self, value: int):
        self.stdout.write(bytes([value & 0xFF]))

    def write(self, data: bytes):
        self.stdout.write(data)

    def flush(self):
        self.stdout.flush()


class TerminalConsole(StreamConsole):
    '''
    StreamConsole that switches a tty to unbuffered, no-echo input while
    entered. The saved terminal attributes are restored on exit, whatever
    the reason for leaving.
    '''

    def __init__(self, stdin: BinaryIO, stdout: BinaryIO):
        super().__init__(stdin, stdout)
        self.saved_attrs: list | None = None

    def __enter__(self):
        if self.fd is not None and os.isatty(self.fd):
            import termios

            self.saved_attrs = termios.tcgetattr(self.fd)
            attrs = termios.tcgetattr(self.fd)
            attrs[3] &= ~(termios.ICANON | termios.ECHO)  # lflag
            termios.tcsetattr(self.fd, termios.TCSANOW, attrs)
            lg.debug('Terminal input buffering disabled')

        return self

    def __exit__(self, *exc_info):
        if self.saved_attrs is not None:
            import termios

            termios.tcsetattr(self.fd, termios.TCSANOW, self.saved_attrs)
            self.saved_attrs = None
            lg.debug('Terminal input buffering restored')

        self.flush()
        return False
