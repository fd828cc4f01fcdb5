import pytest

import lc3vm.runtime.emulator as emulator
from lc3vm.common.settings import RunSettings
from lc3vm.runtime.console import BufferedConsole


@pytest.fixture
def console():
    yield BufferedConsole()


@pytest.fixture
def machine(console):
    yield emulator.create_machine(console)


@pytest.fixture
def strict_machine(console):
    yield emulator.create_machine(console, RunSettings().update(strict=True))
