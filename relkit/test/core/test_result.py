"""Tests for relkit.core.result module."""

from __future__ import annotations

import pytest

from relkit.core.result import Err, Ok, Result, is_err, is_ok


class TestOk:
    def test_value_and_flags(self) -> None:
        result = Ok("sha")
        assert result.value == "sha"
        assert result.is_ok()
        assert not result.is_err()
        assert result.unwrap() == "sha"

    def test_map(self) -> None:
        assert Ok(2).map(lambda v: v * 3) == Ok(6)

    def test_repr(self) -> None:
        assert repr(Ok(1)) == "Ok(1)"


class TestErr:
    def test_error_and_flags(self) -> None:
        result = Err("boom")
        assert result.error == "boom"
        assert result.is_err()
        assert not result.is_ok()

    def test_unwrap_raises(self) -> None:
        with pytest.raises(ValueError, match="boom"):
            Err("boom").unwrap()

    def test_map_is_identity(self) -> None:
        err: Err[str] = Err("boom")
        assert err.map(lambda v: v) is err


def test_type_guards() -> None:
    good: Result[int, str] = Ok(1)
    bad: Result[int, str] = Err("x")
    assert is_ok(good) and not is_err(good)
    assert is_err(bad) and not is_ok(bad)


def test_pattern_matching() -> None:
    result: Result[int, str] = Ok(5)
    match result:
        case Ok(value):
            assert value == 5
        case Err(_):
            pytest.fail("expected Ok")
