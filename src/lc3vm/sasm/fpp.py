import logging as lg
from typing import List, Tuple, Dict, Any

from lc3vm.common.ops import Opcode, TrapVector
from lc3vm.common.hwconf import WORD_MASK, LINK_REG

Tokens = List[Any]
Operand = int | str     # literal or label name


class AsmError(Exception):
    pass


class Register(int):
    ''' Register operand, told apart from immediates by type '''
    pass


def check_signed(value: int, width: int, what: str) -> int:
    low = -(1 << (width - 1))
    high = (1 << (width - 1)) - 1

    if value < low or value > high:
        raise AsmError(f'{what} {value} does not fit in {width} bits [{low}, {high}]')

    return value & ((1 << width) - 1)


def check_unsigned(value: int, width: int, what: str) -> int:
    if value < 0 or value >= (1 << width):
        raise AsmError(f'{what} {value} does not fit in {width} unsigned bits')

    return value


def branch_condition(mnemonic: str) -> int:
    flags = mnemonic[2:].upper()

    if not flags:
        return 0b111

    return (0b100 if 'N' in flags else 0) \
        | (0b010 if 'Z' in flags else 0) \
        | (0b001 if 'P' in flags else 0)


class FPP:
    ''' First pass processor '''
    cmd_list: List[Tuple[str, Any]]
    label_dict: Dict[str, int]
    origin: int | None

    def __init__(self):
        self.cmd_list = list()
        self.origin = None
        self.address = 0
        self.label_dict = dict()
        self.ended = False

    def check_origin(self):
        if self.origin is None:
            raise AsmError('Statement before .ORIG')

    def resolve(self, labelname: str) -> int:
        if labelname not in self.label_dict:
            raise AsmError(f'Undefined label {labelname}')

        return self.label_dict[labelname]

    # Emitters
    def issue_word(self, word: int):
        self.check_origin()
        lg.debug(f'Issuing 0x{word & WORD_MASK:04X} @ 0x{self.address:04X}')
        self.cmd_list.append(('word', word & WORD_MASK))
        self.address += 1

    def issue_pcrel(self, base: int, target: Operand, width: int):
        ''' Instruction whose low bits hold an offset from the next address '''
        if isinstance(target, str):
            self.check_origin()
            self.cmd_list.append(('ref', (self.address, base, target, width)))
            self.address += 1
        else:
            self.issue_word(base | check_signed(target, width, 'Offset'))

    # Directives
    def on_orig(self, tokens: Tokens):
        if self.origin is not None:
            raise AsmError('Only one .ORIG per image')

        self.origin = check_unsigned(tokens[1], 16, 'Origin')
        self.address = self.origin
        lg.debug(f'Origin @ 0x{self.origin:04X}')

    def on_end(self, tokens: Tokens):
        self.ended = True

    def on_label(self, tokens: Tokens):
        self.check_origin()
        labelname = tokens[0]

        if labelname in self.label_dict:
            raise AsmError(f'Duplicate label {labelname}')

        self.label_dict[labelname] = self.address
        lg.debug(f'Label {labelname} @ 0x{self.address:04X}')

    def on_fill(self, tokens: Tokens):
        value = tokens[1]

        if isinstance(value, str):
            self.check_origin()
            self.cmd_list.append(('abs', value))
            self.address += 1
        else:
            if value < -0x8000 or value > WORD_MASK:
                raise AsmError(f'.FILL value {value} does not fit in a word')

            self.issue_word(value)

    def on_blkw(self, tokens: Tokens):
        count = check_unsigned(tokens[1], 16, '.BLKW count')
        fill = tokens[2] if len(tokens) > 2 else 0

        for _ in range(count):
            self.issue_word(fill)

    def on_stringz(self, tokens: Tokens):
        for char in tokens[1]:
            self.issue_word(check_unsigned(ord(char), 8, 'Character'))

        self.issue_word(0)

    # Instructions
    def on_arith(self, tokens: Tokens):
        (mnemonic, dr, sr1, source) = tokens
        word = (Opcode[mnemonic] << 12) | (dr << 9) | (sr1 << 6)

        if isinstance(source, Register):
            word |= source
        else:
            word |= 0x20 | check_signed(source, 5, 'Immediate')

        self.issue_word(word)

    def on_not(self, tokens: Tokens):
        (_, dr, sr) = tokens
        self.issue_word((Opcode.NOT << 12) | (dr << 9) | (sr << 6) | 0x3F)

    def on_br(self, tokens: Tokens):
        (mnemonic, target) = tokens
        self.issue_pcrel((Opcode.BR << 12) | (branch_condition(mnemonic) << 9), target, 9)

    def on_jmp(self, tokens: Tokens):
        (mnemonic, base) = tokens

        if mnemonic == 'JSRR':
            self.issue_word((Opcode.JSR << 12) | (base << 6))
        else:
            self.issue_word((Opcode.JMP << 12) | (base << 6))

    def on_ret(self, tokens: Tokens):
        self.issue_word((Opcode.JMP << 12) | (LINK_REG << 6))

    def on_jsr(self, tokens: Tokens):
        self.issue_pcrel((Opcode.JSR << 12) | (1 << 11), tokens[1], 11)

    def on_pcrel(self, tokens: Tokens):
        (mnemonic, reg, target) = tokens
        self.issue_pcrel((Opcode[mnemonic] << 12) | (reg << 9), target, 9)

    def on_base_offset(self, tokens: Tokens):
        (mnemonic, reg, base, offset) = tokens
        word = (Opcode[mnemonic] << 12) | (reg << 9) | (base << 6)
        self.issue_word(word | check_signed(offset, 6, 'Offset'))

    def on_trap(self, tokens: Tokens):
        vector = check_unsigned(tokens[1], 8, 'Trap vector')
        self.issue_word((Opcode.TRAP << 12) | vector)

    def on_trap_alias(self, tokens: Tokens):
        self.issue_word((Opcode.TRAP << 12) | TrapVector[tokens[0]])

    def on_rti(self, tokens: Tokens):
        self.issue_word(Opcode.RTI << 12)

    def on_fail(self, tokens: Tokens):
        raise AsmError(f'Unknown statement {tokens[0]}')
