import sys
from pathlib import Path
import logging as lg
import traceback
from typing import Tuple

import click
from click.core import ParameterSource

from lc3vm.common.settings import RunSettings, load_settings
from lc3vm.runtime.console import Console, TerminalConsole
from lc3vm.runtime.memory import create_bus
from lc3vm.runtime.image import ImageLoadError, load_image, load_bytes
import lc3vm.runtime.cpu as cpu


EXIT_HALT = 0
EXIT_LOAD_FAIL = 1
EXIT_USAGE = 2
EXIT_INPUT_CLOSED = 3
EXIT_ILLEGAL = 4
EXIT_INTERRUPT = -2
EXIT_EXEC_ERROR = 100


def create_machine(console: Console, settings: RunSettings | None = None) -> cpu.CPU:
    bus = create_bus(console)
    return cpu.CPU(bus, console, settings)


def execute(proc: cpu.CPU):
    while proc.running:
        proc.exec_next()

    lg.info('Execution halted gracefully')
    proc.regs.debug_dump()


def execute_images(images: list[bytes], console: Console, settings: RunSettings | None = None) -> cpu.CPU:
    proc = create_machine(console, settings)

    for image in images:
        load_bytes(proc.bus, image)

    execute(proc)
    return proc


def from_command_line(name: str, value: bool) -> bool | None:
    ''' Flag value if it was given explicitly, None keeps the config file value '''
    ctx = click.get_current_context()

    if ctx.get_parameter_source(name) == ParameterSource.COMMANDLINE:
        return value

    return None


@click.command()
@click.option('-v', '--verbose/--quiet', default=False, help='Sets logging level to debug')
@click.option('--strict/--no-strict', default=False, help='Fault on RTI, reserved opcode and unknown traps')
@click.option('-c', '--config', type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help='TOML file with an [lc3vm] table')
@click.argument('images', nargs=-1, type=Path)
def run(verbose: bool, strict: bool, config: Path | None, images: Tuple[Path, ...]):
    settings = load_settings(config) if config else RunSettings()
    settings.update(verbose=from_command_line('verbose', verbose),
                    strict=from_command_line('strict', strict))

    lg.basicConfig(level=lg.DEBUG if settings.verbose else lg.INFO)
    lg.info('LC3VM')

    if not images:
        click.echo('lc3vm [image-file]...')
        sys.exit(EXIT_USAGE)

    console = TerminalConsole(click.get_binary_stream('stdin'), click.get_binary_stream('stdout'))
    proc = create_machine(console, settings)

    try:
        for path in images:
            load_image(proc.bus, path)

    except ImageLoadError as e:
        lg.error(str(e))
        click.echo(f'failed to load image: {e.path}')
        sys.exit(EXIT_LOAD_FAIL)

    try:
        with console:
            execute(proc)

        sys.exit(EXIT_HALT)

    except KeyboardInterrupt:
        click.echo()
        lg.info('Execution halted by the user')
        sys.exit(EXIT_INTERRUPT)

    except EOFError:
        lg.info('Execution halted, console input closed')
        sys.exit(EXIT_INPUT_CLOSED)

    except cpu.IllegalInstruction as e:
        lg.error(f'Execution halted on {e}')
        proc.regs.debug_dump()
        sys.exit(EXIT_ILLEGAL)

    except Exception as e:
        lg.info(f'Execution halted on general error {e}')
        traceback.print_exc()
        sys.exit(EXIT_EXEC_ERROR)


if __name__ == '__main__':
    run()
