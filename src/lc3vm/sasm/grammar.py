# type: ignore
''' LC-3 assembly grammar '''

import pyparsing as pp

from lc3vm.common.ops import TrapVector
from lc3vm.sasm.fpp import FPP, Register

BR_MNEMONICS = ['BR', 'BRN', 'BRZ', 'BRP', 'BRNZ', 'BRNP', 'BRZP', 'BRNZP']
PCREL_MNEMONICS = ['LD', 'LDI', 'LEA', 'ST', 'STI']
MNEMONICS = ['ADD', 'AND', 'NOT', 'JMP', 'RET', 'JSR', 'JSRR', 'LDR', 'STR', 'TRAP', 'RTI'] \
    + BR_MNEMONICS + PCREL_MNEMONICS + [v.name for v in TrapVector]
DIRECTIVES = ['.ORIG', '.FILL', '.BLKW', '.STRINGZ', '.END']


def kw(name):
    return pp.CaselessKeyword(name)


def any_kw(names):
    return pp.MatchFirst([kw(name) for name in names])


def g_stmt(expr, handler):
    return expr.set_parse_action(lambda r: (handler, r.as_list()))


comment = pp.Regex(r';[^\n]*')
comma = pp.Suppress(',')

id = pp.Word(pp.alphas + '_', pp.alphanums + '_')

reg = pp.Regex(r'[Rr][0-7]\b').set_parse_action(lambda r: Register(int(r[0][1])))

dec_const = pp.Regex(r'#[+-]?[0-9]+').set_parse_action(lambda r: int(r[0][1:]))
hex_const = pp.Regex(r'[xX][+-]?[0-9a-fA-F]+\b').set_parse_action(lambda r: int(r[0][1:], 16))
bare_const = pp.Regex(r'[+-]?[0-9]+\b').set_parse_action(lambda r: int(r[0]))
const = dec_const | hex_const | bare_const

reserved = any_kw(MNEMONICS + DIRECTIVES) | pp.Regex(r'[Rr][0-7]\b')
labelname = ~reserved + id
target = const | labelname

label = g_stmt(labelname + pp.Optional(pp.Suppress(':')), FPP.on_label)

# Directives
orig = g_stmt(kw('.ORIG') + const, FPP.on_orig)
fill = g_stmt(kw('.FILL') + target, FPP.on_fill)
blkw = g_stmt(kw('.BLKW') + const + pp.Optional(const), FPP.on_blkw)
stringz = g_stmt(kw('.STRINGZ') + pp.QuotedString('"', esc_char='\\'), FPP.on_stringz)
end = g_stmt(kw('.END'), FPP.on_end)

directive = orig | fill | blkw | stringz | end

# Instructions
arith = g_stmt(any_kw(['ADD', 'AND']) + reg + comma + reg + comma + (reg | const), FPP.on_arith)
not_cmd = g_stmt(kw('NOT') + reg + comma + reg, FPP.on_not)
br = g_stmt(any_kw(BR_MNEMONICS) + target, FPP.on_br)
jmp = g_stmt(any_kw(['JMP', 'JSRR']) + reg, FPP.on_jmp)
ret = g_stmt(kw('RET'), FPP.on_ret)
jsr = g_stmt(kw('JSR') + target, FPP.on_jsr)
pcrel = g_stmt(any_kw(PCREL_MNEMONICS) + reg + comma + target, FPP.on_pcrel)
base_offset = g_stmt(any_kw(['LDR', 'STR']) + reg + comma + reg + comma + const, FPP.on_base_offset)
trap = g_stmt(kw('TRAP') + const, FPP.on_trap)
trap_alias = g_stmt(any_kw([v.name for v in TrapVector]), FPP.on_trap_alias)
rti = g_stmt(kw('RTI'), FPP.on_rti)

instruction = arith \
    | not_cmd \
    | br \
    | jmp \
    | ret \
    | jsr \
    | pcrel \
    | base_offset \
    | trap \
    | trap_alias \
    | rti

cmd = directive | instruction

statement = (label + pp.Optional(cmd)) | cmd

# Fail on unknown statement
unknown = g_stmt(pp.Regex(r'[^\s;][^\n;]*'), FPP.on_fail)

program = pp.ZeroOrMore(statement | unknown)
program.ignore(comment)
