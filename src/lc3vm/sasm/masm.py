from pathlib import Path
import logging as lg
import sys

import click

from lc3vm.sasm.asm import assemble_file
from lc3vm.sasm.fpp import AsmError


EXIT_ASM_ERROR = 1


@click.command()
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.argument('source', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument('binary', type=Path)
def compile(verbose: bool, source: Path, binary: Path):
    lg.basicConfig(level=lg.DEBUG if verbose else lg.INFO)
    lg.info('LC3 ASM')

    try:
        image = assemble_file(source)
    except AsmError as e:
        lg.error(f'{source}: {e}')
        click.echo(f'{source}: {e}', err=True)
        sys.exit(EXIT_ASM_ERROR)

    binary.parent.mkdir(parents=True, exist_ok=True)
    binary.write_bytes(image)


if __name__ == '__main__':
    compile()
