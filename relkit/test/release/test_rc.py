from __future__ import annotations

from relkit.core.result import Err, Ok
from relkit.output.console import MockConsole
from relkit.release.context import WorkflowContext
from relkit.release.model import CreateReleaseCandidate
from relkit.release.rc import create_release_candidate, find_release_pr

from ._fakes import FakeHosting, pull_request


def _seed(hosting: FakeHosting) -> None:
    hosting.prs[7] = pull_request(
        7,
        title="chore(main): release 1.15.0",
        head_ref="release-please--branches--main",
        head_sha="rchead",
        state="open",
        merged=False,
        labels=("autorelease: pending",),
    )
    hosting.tags.update(
        {
            "v1.15.0-rc.0": "old0",
            "v1.15.0-rc.2": "old2",
            "v1.150.0-rc.9": "other",
        }
    )


def test_tags_next_candidate_and_drafts_release(
    ctx: WorkflowContext, hosting: FakeHosting, console: MockConsole
) -> None:
    _seed(hosting)

    result = create_release_candidate(ctx, CreateReleaseCandidate())

    assert isinstance(result, Ok)
    assert result.value.status == "done"
    names = [m[0] for m in hosting.mutations]
    assert names == ["create_tag_object", "create_ref", "create_release"]
    assert hosting.mutations[0][1:] == ("v1.15.0-rc.3", "Release candidate v1.15.0-rc.3", "rchead")
    assert hosting.tags["v1.15.0-rc.3"] == "rchead"

    release = hosting.releases[-1]
    assert (release.tag, release.draft, release.prerelease) == ("v1.15.0-rc.3", True, True)
    assert "https://github.com/acme/widget/pull/7" in hosting.last_release_body
    assert console.find("v1.15.0-rc.3")


def test_rerun_on_same_commit_is_noop(ctx: WorkflowContext, hosting: FakeHosting) -> None:
    _seed(hosting)
    assert isinstance(create_release_candidate(ctx, CreateReleaseCandidate()), Ok)
    hosting.calls.clear()

    again = create_release_candidate(ctx, CreateReleaseCandidate())

    assert isinstance(again, Ok)
    assert again.value.status == "noop"
    assert hosting.mutations == []


def test_resumes_when_tag_exists_without_release(ctx: WorkflowContext, hosting: FakeHosting) -> None:
    _seed(hosting)
    hosting.tags["v1.15.0-rc.3"] = "rchead"

    result = create_release_candidate(ctx, CreateReleaseCandidate())

    assert isinstance(result, Ok)
    assert [m[0] for m in hosting.mutations] == ["create_release"]
    assert hosting.releases[-1].tag == "v1.15.0-rc.3"


def test_new_commit_gets_new_candidate(ctx: WorkflowContext, hosting: FakeHosting) -> None:
    _seed(hosting)
    hosting.tags["v1.15.0-rc.3"] = "previous-head"

    result = create_release_candidate(ctx, CreateReleaseCandidate())

    assert isinstance(result, Ok)
    assert "v1.15.0-rc.4" in hosting.tags


def test_first_candidate_is_rc0(ctx: WorkflowContext, hosting: FakeHosting) -> None:
    hosting.prs[7] = pull_request(7, title="chore(main): release 2.0.0", head_sha="h", state="open", merged=False)

    result = create_release_candidate(ctx, CreateReleaseCandidate())

    assert isinstance(result, Ok)
    assert "v2.0.0-rc.0" in hosting.tags


def test_explicit_version_and_ref(ctx: WorkflowContext, hosting: FakeHosting) -> None:
    hosting.branches["release/v1.15"] = "relhead"

    result = create_release_candidate(ctx, CreateReleaseCandidate(version="1.15.1", ref="release/v1.15"))

    assert isinstance(result, Ok)
    assert hosting.tags["v1.15.1-rc.0"] == "relhead"
    assert "No release PR" in hosting.last_release_body


def test_dry_run(dry_ctx: WorkflowContext, hosting: FakeHosting, console: MockConsole) -> None:
    _seed(hosting)

    result = create_release_candidate(dry_ctx, CreateReleaseCandidate())

    assert isinstance(result, Ok)
    assert result.value.status == "dry_run"
    assert hosting.mutations == []
    assert console.find("dry-run: Would create tag v1.15.0-rc.3 on rchead")


def test_no_release_pr(ctx: WorkflowContext) -> None:
    result = create_release_candidate(ctx, CreateReleaseCandidate())
    assert isinstance(result, Err)
    assert result.error.kind == "not_found"


def test_title_without_version(ctx: WorkflowContext, hosting: FakeHosting) -> None:
    hosting.prs[3] = pull_request(3, title="chore(main): release soon", state="open", merged=False)
    result = create_release_candidate(ctx, CreateReleaseCandidate(pr_number=3))
    assert isinstance(result, Err)
    assert result.error.kind == "invalid_input"


def test_find_release_pr_prefers_label() -> None:
    by_title = pull_request(1, title="chore(main): release 1.0.0", state="open")
    by_label = pull_request(2, title="release stuff", state="open", labels=("autorelease: pending",))
    assert find_release_pr([by_title, by_label]) == by_label
    assert find_release_pr([by_title]) == by_title
    assert find_release_pr([pull_request(3, title="feat: x")]) is None
