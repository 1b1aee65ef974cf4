from __future__ import annotations

from relkit.release.templates import (
    backport_body,
    backport_branch,
    backport_marker,
    forwardport_branch,
    forwardport_marker,
    release_candidate_body,
    sync_branch,
    sync_marker,
)

from ._fakes import pull_request


def test_names_and_markers() -> None:
    assert backport_marker(42) == "chore: backport #42"
    assert backport_branch(42, "v1.15") == "backport/pr-42-to-v1.15"
    assert forwardport_marker(9, "main") == "chore: forwardport release-please #9 to main"
    assert forwardport_branch(9, "main") == "forwardport/pr-9-to-main"
    assert sync_marker("release/v1.15", "v1.15.1", "main") == "chore: sync release/v1.15 at v1.15.1 to main"
    assert sync_branch("1.15") == "sync/release-v1.15"


def test_backport_body_carries_original_pr() -> None:
    pr = pull_request(42, title="fix: crash", body="Details here.", author="dev")
    body = backport_body(pr, target_branch="release/v1.15")
    assert body.startswith("## Backport of #42\n")
    assert "- **Title:** fix: crash" in body
    assert "- **Author:** @dev" in body
    assert "Details here." in body
    assert body.endswith("\n")


def test_backport_body_without_description() -> None:
    body = backport_body(pull_request(42, body=""), target_branch="release/v1.15")
    assert "_No description._" in body


def test_release_candidate_body_links_pr() -> None:
    body = release_candidate_body(version="1.15.0", rc_number=2, slug="acme/widget", pr_number=7)
    assert "## Release candidate 2 for v1.15.0" in body
    assert "(https://github.com/acme/widget/pull/7)" in body
