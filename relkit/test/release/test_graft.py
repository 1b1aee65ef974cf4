from __future__ import annotations

from relkit.core.result import Err, Ok
from relkit.release.graft import squash_graft, tag_commit

from ._fakes import FakeHosting, commit


def test_squash_graft_is_content_exact() -> None:
    hosting = FakeHosting()
    hosting.add_commit("release/v1.15", commit("r1", "chore: release 1.15.1", tree="T-release", parents=("r0",)))
    hosting.add_commit("main", commit("m1", "feat: trunk work", tree="T-main"))

    result = squash_graft(hosting, source_sha="r1", dest_sha="m1", message="chore: sync")
    assert isinstance(result, Ok)

    grafted = hosting.commits[result.value]
    assert grafted.tree_sha == "T-release"
    assert grafted.parents == ("m1",)
    assert grafted.message == "chore: sync"


def test_squash_graft_missing_source() -> None:
    result = squash_graft(FakeHosting(), source_sha="gone", dest_sha="m1", message="x")
    assert isinstance(result, Err)
    assert result.error.kind == "not_found"


def test_tag_commit_writes_object_then_ref() -> None:
    hosting = FakeHosting()
    result = tag_commit(hosting, version="1.15.0", rc_number=3, commit_sha="c1")

    assert result == Ok("v1.15.0-rc.3")
    names = [m[0] for m in hosting.mutations]
    assert names == ["create_tag_object", "create_ref"]
    assert hosting.mutations[0][2] == "Release candidate v1.15.0-rc.3"
    assert hosting.mutations[1][1] == "refs/tags/v1.15.0-rc.3"
    assert hosting.tags["v1.15.0-rc.3"] == "c1"


def test_tag_commit_stops_when_object_fails() -> None:
    hosting = FakeHosting(fail_on="create_tag_object")
    result = tag_commit(hosting, version="1.15.0", rc_number=0, commit_sha="c1")
    assert isinstance(result, Err)
    assert [m[0] for m in hosting.mutations] == ["create_tag_object"]
