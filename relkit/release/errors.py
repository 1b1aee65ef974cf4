"""Error payload for the release engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ReleaseErrorKind = Literal[
    "config",
    "not_found",
    "conflict",
    "invalid_input",
    "api_failed",
    "git_failed",
]


@dataclass(frozen=True, slots=True)
class ReleaseError:
    """Canonical error returned by hosting, git and workflow layers.

    ``hint`` carries the underlying tool output or a suggested next step and
    is printed verbatim by the CLI.
    """

    kind: ReleaseErrorKind
    message: str
    hint: str | None = None

    def pretty(self) -> str:
        if self.hint:
            return f"{self.message} (hint: {self.hint})"
        return self.message
