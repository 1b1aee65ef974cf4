"""Version and tag-name parsing.

Pure string/number helpers; no repository access.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from relkit.core.result import Err, Ok, Result
from relkit.release.errors import ReleaseError

_VERSION_RE = re.compile(
    r"^v?(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)(?:-[0-9A-Za-z.-]+)?(?:\+[0-9A-Za-z.-]+)?$"
)
_BACKPORT_LABEL_RE = re.compile(r"^backport/(v(?:0|[1-9]\d*)\.(?:0|[1-9]\d*))$")
_RELEASE_TITLE_RE = re.compile(r"release\s+(\d+\.\d+\.\d+)")


@dataclass(frozen=True, slots=True, order=True)
class SemVer:
    major: int
    minor: int
    patch: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    @property
    def major_minor(self) -> str:
        return f"{self.major}.{self.minor}"


def parse_version(text: str) -> SemVer | None:
    """Parse ``1.15.0`` / ``v1.15.0`` (pre-release and build suffixes ignored)."""
    m = _VERSION_RE.match(text.strip())
    if m is None:
        return None
    return SemVer(int(m.group(1)), int(m.group(2)), int(m.group(3)))


def next_minor(version: str) -> Result[str, ReleaseError]:
    """``1.15.0`` -> ``1.16``."""
    v = parse_version(version)
    if v is None:
        return Err(
            ReleaseError(
                kind="invalid_input",
                message=f"invalid version: {version}",
                hint="expected X.Y.Z",
            )
        )
    return Ok(f"{v.major}.{v.minor + 1}")


def major_minor(tag: str) -> Result[str, ReleaseError]:
    """``v1.15.0`` -> ``1.15``."""
    v = parse_version(tag)
    if v is None:
        return Err(
            ReleaseError(
                kind="config",
                message=f"invalid release tag: {tag}",
                hint="expected vX.Y.Z",
            )
        )
    return Ok(v.major_minor)


def rc_tag_name(version: str, rc_number: int) -> str:
    return f"v{version}-rc.{rc_number}"


def rc_tag_pattern(version: str) -> re.Pattern[str]:
    """Full-name match for ``v<version>-rc.<N>``.

    Anchored at both ends so ``v1.15.0`` never picks up ``v1.150.0-rc.3``.
    """
    return re.compile(rf"^v{re.escape(version)}-rc\.(\d+)$")


def parse_backport_label(label: str) -> Result[str, ReleaseError]:
    """``backport/v1.15`` -> ``v1.15``."""
    m = _BACKPORT_LABEL_RE.match(label.strip())
    if m is None:
        return Err(
            ReleaseError(
                kind="config",
                message=f"invalid backport label: {label}",
                hint="expected backport/vX.Y",
            )
        )
    return Ok(m.group(1))


def release_version_from_title(title: str) -> str | None:
    """Version announced by a release-please PR title (``... release 1.15.0``)."""
    m = _RELEASE_TITLE_RE.search(title)
    if m is None:
        return None
    return m.group(1)
