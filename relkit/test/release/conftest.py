from __future__ import annotations

import pytest

from relkit.core.config import Config
from relkit.output.console import MockConsole
from relkit.release.context import WorkflowContext

from ._fakes import FakeHosting, FakeWorkingCopy


@pytest.fixture
def hosting() -> FakeHosting:
    return FakeHosting()


@pytest.fixture
def working_copy(hosting: FakeHosting) -> FakeWorkingCopy:
    return FakeWorkingCopy(hosting=hosting)


@pytest.fixture
def console() -> MockConsole:
    return MockConsole()


@pytest.fixture
def ctx(hosting: FakeHosting, working_copy: FakeWorkingCopy, console: MockConsole) -> WorkflowContext:
    return WorkflowContext(hosting=hosting, config=Config(), console=console, working_copy=working_copy)


@pytest.fixture
def dry_ctx(hosting: FakeHosting, working_copy: FakeWorkingCopy, console: MockConsole) -> WorkflowContext:
    return WorkflowContext(
        hosting=hosting,
        config=Config(),
        console=console,
        dry_run=True,
        working_copy=working_copy,
    )
