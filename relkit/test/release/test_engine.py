from __future__ import annotations

from relkit.core.result import Ok
from relkit.release.context import WorkflowContext
from relkit.release.engine import run_intent
from relkit.release.model import CreateReleaseBranch

from ._fakes import FakeHosting, commit


def test_dispatches_by_intent_type(ctx: WorkflowContext, hosting: FakeHosting) -> None:
    hosting.add_commit("main", commit("m1", "init"))
    hosting.files[(".release-please-manifest.json", "main")] = '{".": "0.4.2"}'

    result = run_intent(ctx, CreateReleaseBranch())

    assert isinstance(result, Ok)
    assert "release/v0.5" in hosting.branches
