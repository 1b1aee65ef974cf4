from __future__ import annotations

from collections.abc import Iterable

from relkit.release.model import RepoTag
from relkit.release.version import rc_tag_pattern


def rc_tags_for_version(tags: Iterable[RepoTag], version: str) -> list[tuple[int, RepoTag]]:
    """RC tags of ``version`` with their sequence numbers, ascending."""
    pattern = rc_tag_pattern(version)
    out: list[tuple[int, RepoTag]] = []
    for tag in tags:
        m = pattern.match(tag.name)
        if m is None:
            continue
        out.append((int(m.group(1)), tag))
    out.sort(key=lambda item: item[0])
    return out


def next_rc_number(tag_names: Iterable[str], version: str) -> int:
    """``max(N) + 1`` over existing ``v<version>-rc.<N>`` names, or 0."""
    pattern = rc_tag_pattern(version)
    numbers = [int(m.group(1)) for name in tag_names if (m := pattern.match(name)) is not None]
    if not numbers:
        return 0
    return max(numbers) + 1
