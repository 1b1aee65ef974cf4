from __future__ import annotations

from relkit.core.config import HistoryConfig
from relkit.core.result import Ok
from relkit.release.history import commit_exists, find_commit

from ._fakes import FakeHosting, commit


def _hosting_with(titles: list[str]) -> FakeHosting:
    hosting = FakeHosting()
    for i, title in enumerate(titles):
        hosting.add_commit("main", commit(f"c{i}", title))
    return hosting


def test_matches_marker_prefix_of_title() -> None:
    hosting = _hosting_with(["chore: backport #42 foo", "feat: unrelated"])

    found = find_commit(hosting, branch="main", pattern="chore: backport #42")
    assert isinstance(found, Ok)
    assert found.value is not None
    assert found.value.sha == "c0"

    other = find_commit(hosting, branch="main", pattern="chore: backport #43")
    assert other == Ok(None)


def test_only_first_line_is_compared() -> None:
    hosting = _hosting_with(["fix: thing\n\nchore: backport #42"])
    assert commit_exists(hosting, branch="main", pattern="chore: backport #42") == Ok(False)


def test_newest_match_wins() -> None:
    hosting = _hosting_with(["feat: a (#7)", "fix: b (#7)"])
    found = find_commit(hosting, branch="main", pattern="(#7)")
    assert isinstance(found, Ok)
    assert found.value is not None
    assert found.value.title == "fix: b (#7)"


def test_search_stops_at_page_ceiling() -> None:
    # Marker is the oldest of 30 commits; only 2 pages of 10 are scanned.
    titles = ["chore: sync marker"] + [f"feat: change {i}" for i in range(29)]
    hosting = _hosting_with(titles)
    limits = HistoryConfig(page_size=10, max_pages=2)

    assert commit_exists(hosting, branch="main", pattern="chore: sync marker", limits=limits) == Ok(False)
    pages = [c for c in hosting.calls if c[0] == "list_commits"]
    assert len(pages) == 2


def test_search_stops_at_short_page() -> None:
    hosting = _hosting_with(["feat: one", "feat: two"])
    assert find_commit(hosting, branch="main", pattern="nope") == Ok(None)
    pages = [c for c in hosting.calls if c[0] == "list_commits"]
    assert len(pages) == 1
