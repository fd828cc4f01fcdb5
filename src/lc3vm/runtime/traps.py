import logging as lg
from typing import TYPE_CHECKING

from lc3vm.common.ops import TrapVector
from lc3vm.common.hwconf import IN_PROMPT, HALT_MESSAGE
from lc3vm.runtime.decoder import Instruction

if TYPE_CHECKING:
    from lc3vm.runtime.cpu import CPU

R0 = 0


class TrapDispatcher():
    def __init__(self, proc: 'CPU'):
        self.proc = proc

    @property
    def regs(self):
        return self.proc.regs

    @property
    def console(self):
        return self.proc.console

    def string_at(self, address: int):
        ''' Yields words from address up to (not including) a zero word '''
        bus = self.proc.bus

        while (word := bus.peek(address)) != 0:
            yield word
            address += 1

    # - Services - #

    def getc(self):
        self.regs.set(R0, self.console.read_byte())
        self.regs.update_flags(R0)

    def out(self):
        self.console.write_byte(self.regs.get(R0) & 0xFF)
        self.console.flush()

    def puts(self):
        text = bytes(word & 0xFF for word in self.string_at(self.regs.get(R0)))
        self.console.write(text)
        self.console.flush()

    def in_(self):
        self.console.write(IN_PROMPT.encode())
        self.console.flush()

        value = self.console.read_byte()
        self.console.write_byte(value)
        self.console.flush()

        self.regs.set(R0, value)
        self.regs.update_flags(R0)

    def putsp(self):
        text = bytearray()

        for word in self.string_at(self.regs.get(R0)):
            text.append(word & 0xFF)

            if word >> 8:
                text.append(word >> 8)

        self.console.write(bytes(text))
        self.console.flush()

    def halt(self):
        self.console.write(HALT_MESSAGE.encode())
        self.console.flush()
        lg.info('HALT trap')
        self.proc.running = False

    HANDLERS = {
        TrapVector.GETC: getc,
        TrapVector.OUT: out,
        TrapVector.PUTS: puts,
        TrapVector.IN: in_,
        TrapVector.PUTSP: putsp,
        TrapVector.HALT: halt
    }

    def dispatch(self, instr: Instruction):
        handler = self.HANDLERS.get(instr.trap_vector)

        if handler is None:
            self.proc.undefined(instr)
            return

        handler(self)
