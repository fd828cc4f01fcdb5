import logging as lg

from lc3vm.common.ops import Opcode
from lc3vm.common.hwconf import LINK_REG
from lc3vm.common.settings import RunSettings
from lc3vm.runtime.console import Console
from lc3vm.runtime.decoder import Instruction, decode
from lc3vm.runtime.memory import MemoryBus
from lc3vm.runtime.registers import RegisterFile
from lc3vm.runtime.traps import TrapDispatcher


class IllegalInstruction(Exception):
    def __init__(self, word: int, pc: int):
        super().__init__(f'Illegal instruction 0x{word:04X} @ 0x{pc:04X}')
        self.word = word
        self.pc = pc


class CPU():
    regs: RegisterFile
    running: bool

    def __init__(self, bus: MemoryBus, console: Console, settings: RunSettings | None = None):
        self.bus = bus              # Ref. to memory
        self.console = console      # Ref. to host I/O
        self.settings = settings if settings is not None else RunSettings()

        self.regs = RegisterFile()
        self.traps = TrapDispatcher(self)
        self.running = True

    # - Helpers - #

    def fetch(self) -> int:
        word = self.bus.read(self.regs.pc)
        self.regs.pc = (self.regs.pc + 1) & 0xFFFF
        return word

    def relative(self, offset: int) -> int:
        return (self.regs.pc + offset) & 0xFFFF

    def define(self, reg: int, value: int):
        self.regs.set(reg, value)
        self.regs.update_flags(reg)

    def second_operand(self, instr: Instruction) -> int:
        if instr.imm_mode:
            return instr.imm5

        return self.regs.get(instr.sr2)

    def undefined(self, instr: Instruction):
        if self.settings.strict:
            raise IllegalInstruction(instr.word, (self.regs.pc - 1) & 0xFFFF)

        lg.debug(f'Ignoring undefined instruction 0x{instr.word:04X}')

    # - Operations - #

    def br(self, instr: Instruction):
        if instr.cond & self.regs.cond:
            self.regs.pc = self.relative(instr.pc_offset9)

    def add(self, instr: Instruction):
        self.define(instr.dr, self.regs.get(instr.sr1) + self.second_operand(instr))

    def and_(self, instr: Instruction):
        self.define(instr.dr, self.regs.get(instr.sr1) & self.second_operand(instr))

    def not_(self, instr: Instruction):
        self.define(instr.dr, ~self.regs.get(instr.sr1))

    def ld(self, instr: Instruction):
        self.define(instr.dr, self.bus.read(self.relative(instr.pc_offset9)))

    def ldi(self, instr: Instruction):
        pointer = self.bus.read(self.relative(instr.pc_offset9))
        self.define(instr.dr, self.bus.read(pointer))

    def ldr(self, instr: Instruction):
        self.define(instr.dr, self.bus.read(self.regs.get(instr.base_r) + instr.offset6))

    def lea(self, instr: Instruction):
        self.define(instr.dr, self.relative(instr.pc_offset9))

    def st(self, instr: Instruction):
        self.bus.write(self.relative(instr.pc_offset9), self.regs.get(instr.sr))

    def sti(self, instr: Instruction):
        pointer = self.bus.read(self.relative(instr.pc_offset9))
        self.bus.write(pointer, self.regs.get(instr.sr))

    def str_(self, instr: Instruction):
        self.bus.write(self.regs.get(instr.base_r) + instr.offset6, self.regs.get(instr.sr))

    def jmp(self, instr: Instruction):
        self.regs.pc = self.regs.get(instr.base_r)

    def jsr(self, instr: Instruction):
        # Link first: JSRR R7 lands on the return address
        self.regs.set(LINK_REG, self.regs.pc)

        if instr.jsr_mode:
            self.regs.pc = self.relative(instr.pc_offset11)
        else:
            self.regs.pc = self.regs.get(instr.base_r)

    def trap(self, instr: Instruction):
        self.regs.set(LINK_REG, self.regs.pc)
        self.traps.dispatch(instr)

    def rti(self, instr: Instruction):
        self.undefined(instr)

    def res(self, instr: Instruction):
        self.undefined(instr)

    HANDLERS = {
        Opcode.BR: br,
        Opcode.ADD: add,
        Opcode.LD: ld,
        Opcode.ST: st,
        Opcode.JSR: jsr,
        Opcode.AND: and_,
        Opcode.LDR: ldr,
        Opcode.STR: str_,
        Opcode.RTI: rti,
        Opcode.NOT: not_,
        Opcode.LDI: ldi,
        Opcode.STI: sti,
        Opcode.JMP: jmp,
        Opcode.RES: res,
        Opcode.LEA: lea,
        Opcode.TRAP: trap
    }

    # -- Implementation -- #

    def exec_next(self):
        instr = decode(self.fetch())
        handler = self.HANDLERS[instr.opcode]
        handler(self, instr)


missing = set(Opcode) - set(CPU.HANDLERS)

if missing:
    raise NotImplementedError(f'No handlers for {sorted(op.name for op in missing)}')
