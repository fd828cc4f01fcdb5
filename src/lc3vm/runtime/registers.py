import logging as lg

from lc3vm.common.ops import Flag
from lc3vm.common.hwconf import GP_REGS, PC_START, WORD_MASK, SIGN_BIT


class RegisterFile():
    pc: int         # Program counter
    cond: Flag      # Condition flag of the last register-defining instruction
    gp: list[int]   # General purpose registers

    def __init__(self):
        self.pc = PC_START
        self.cond = Flag.ZERO
        self.gp = [0] * GP_REGS

    def get(self, reg: int) -> int:
        return self.gp[reg]

    def set(self, reg: int, value: int):
        self.gp[reg] = value & WORD_MASK

    def update_flags(self, reg: int):
        value = self.gp[reg]

        if value == 0:
            self.cond = Flag.ZERO
        elif value & SIGN_BIT:
            self.cond = Flag.NEGATIVE
        else:
            self.cond = Flag.POSITIVE

    def debug_dump(self):
        state = [f'PC:{self.pc:04X}', f'COND:{self.cond.name}']
        state.extend([f'R{i}:{self.gp[i]:04X}' for i in range(len(self.gp))])

        lg.debug(' '.join(state))
