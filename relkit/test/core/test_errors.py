from __future__ import annotations

from relkit.core.errors import ExitCode


def test_only_two_exit_codes() -> None:
    assert [int(c) for c in ExitCode] == [0, 1]


def test_is_success() -> None:
    assert ExitCode.OK.is_success
    assert not ExitCode.FAILURE.is_success
    assert str(ExitCode.FAILURE) == "failure"
