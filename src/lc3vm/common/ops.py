from enum import IntEnum


class Opcode(IntEnum):
    BR = 0x0    # if cond & COND: PC + S9 -> PC
    ADD = 0x1   # R1 + (R2 | S5) -> R0
    LD = 0x2    # M[PC + S9] -> R0
    ST = 0x3    # R0 -> M[PC + S9]
    JSR = 0x4   # PC -> R7; R1 | PC + S11 -> PC
    AND = 0x5   # R1 & (R2 | S5) -> R0
    LDR = 0x6   # M[R1 + S6] -> R0
    STR = 0x7   # R0 -> M[R1 + S6]
    RTI = 0x8   # not available to user programs
    NOT = 0x9   # ~R1 -> R0
    LDI = 0xA   # M[M[PC + S9]] -> R0
    STI = 0xB   # R0 -> M[M[PC + S9]]
    JMP = 0xC   # R1 -> PC
    RES = 0xD   # reserved
    LEA = 0xE   # PC + S9 -> R0
    TRAP = 0xF  # PC -> R7; service U8


class TrapVector(IntEnum):
    GETC = 0x20     # byte -> R0, no echo
    OUT = 0x21      # R0 low byte -> console
    PUTS = 0x22     # one char per word from M[R0]
    IN = 0x23       # prompt, byte -> R0 with echo
    PUTSP = 0x24    # two chars per word from M[R0]
    HALT = 0x25


class Flag(IntEnum):
    POSITIVE = 1 << 0
    ZERO = 1 << 1
    NEGATIVE = 1 << 2
