import tomllib
import logging as lg
from pathlib import Path


class RunSettings:
    verbose: bool
    strict: bool

    def __init__(self):
        self.verbose = False
        self.strict = False     # Fault on RTI, reserved opcode and unknown traps

    def update(
        self,
        verbose: bool | None = None,
        strict: bool | None = None
    ):
        if verbose is not None:
            self.verbose = verbose

        if strict is not None:
            self.strict = strict

        return self


def load_settings(config_path: Path) -> RunSettings:
    ''' Reads the [lc3vm] table of a TOML file '''

    lg.debug(f'Loading settings from {config_path}')
    config = tomllib.loads(config_path.read_text())
    section = config.get('lc3vm', {})

    unknown = set(section) - {'verbose', 'strict'}

    if unknown:
        raise UserWarning(f'Unknown settings {sorted(unknown)} in {config_path}')

    return RunSettings().update(
        verbose=section.get('verbose'),
        strict=section.get('strict')
    )
