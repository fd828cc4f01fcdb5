import logging as lg
import struct
from pathlib import Path

import lc3vm.sasm.grammar as grammar
from lc3vm.sasm.fpp import FPP, AsmError, check_signed


def first_pass(source: str) -> FPP:
    fpp = FPP()
    actions = grammar.program.parse_string(source, parse_all=True)

    for (func, arg) in actions:  # type: ignore
        if fpp.ended:
            break

        func(fpp, arg)

    if fpp.origin is None:
        raise AsmError('Missing .ORIG')

    return fpp


def assemble(source: str) -> bytes:
    fpp = first_pass(source)

    # Second pass
    words = [fpp.origin]

    for (t, d) in fpp.cmd_list:
        if t == 'word':
            words.append(d)

        if t == 'ref':
            (address, base, labelname, width) = d
            offset = fpp.resolve(labelname) - (address + 1)
            words.append(base | check_signed(offset, width, f'Offset to {labelname}'))

        if t == 'abs':
            words.append(fpp.resolve(d))

    lg.info(f'Assembled {len(words) - 1} words @ 0x{fpp.origin:04X}')

    # Dumping results
    return struct.pack(f'>{len(words)}H', *words)


def assemble_file(filepath: str | Path) -> bytes:
    if isinstance(filepath, str):
        filepath = Path(filepath)

    lg.debug(f'Assembling file {filepath}')
    return assemble(filepath.read_text())
