from __future__ import annotations

import base64
import binascii
from urllib.parse import quote

from relkit.core.config import RepoTarget
from relkit.core.result import Err, Ok, Result
from relkit.core.structured import (
    StrDict,
    as_str_dict,
    get_bool,
    get_int,
    get_list,
    get_raw_str,
    get_str,
    get_table,
)
from relkit.github.api import GhTransport, fetch_all_pages, fetch_page, gh_api_json, with_query
from relkit.release.errors import ReleaseError
from relkit.release.model import CommitInfo, PullRequest, Release, RepoTag

# Annotated tags can point at other tag objects; real repos never nest deeply.
_MAX_TAG_PEEL_DEPTH = 5


def _unexpected(what: str, hint: str | None = None) -> Err[ReleaseError]:
    return Err(ReleaseError(kind="api_failed", message=f"unexpected {what} payload", hint=hint))


def parse_commit(data: StrDict) -> CommitInfo | None:
    """Parse either a REST ``commits`` item or a git-data ``git/commits`` object."""
    sha = get_str(data, "sha")
    if sha is None:
        return None

    # REST commits nest the git data under "commit"; git/commits is flat.
    inner = get_table(data, "commit") or data
    message = get_raw_str(inner, "message")
    if message is None:
        return None

    tree_sha: str | None = None
    tree = get_table(inner, "tree")
    if tree is not None:
        tree_sha = get_str(tree, "sha")

    parents: list[str] = []
    for item in get_list(data, "parents") or []:
        parent = as_str_dict(item)
        if parent is None:
            continue
        parent_sha = get_str(parent, "sha")
        if parent_sha is not None:
            parents.append(parent_sha)

    return CommitInfo(sha=sha, message=message, tree_sha=tree_sha, parents=tuple(parents))


def parse_pull_request(data: StrDict) -> PullRequest | None:
    number = get_int(data, "number")
    title = get_raw_str(data, "title")
    head = get_table(data, "head")
    base = get_table(data, "base")
    if number is None or title is None or head is None or base is None:
        return None

    head_ref = get_str(head, "ref")
    head_sha = get_str(head, "sha")
    base_ref = get_str(base, "ref")
    if head_ref is None or head_sha is None or base_ref is None:
        return None

    user = get_table(data, "user") or {}
    labels: list[str] = []
    for item in get_list(data, "labels") or []:
        label = as_str_dict(item)
        if label is None:
            continue
        name = get_str(label, "name")
        if name is not None:
            labels.append(name)

    # The list endpoint has no "merged" flag, only merged_at.
    merged = get_bool(data, "merged") or get_str(data, "merged_at") is not None

    return PullRequest(
        number=number,
        title=title,
        body=get_raw_str(data, "body") or "",
        author=get_str(user, "login") or "ghost",
        head_ref=head_ref,
        head_sha=head_sha,
        base_ref=base_ref,
        state=get_str(data, "state") or "open",
        merged=merged,
        merge_commit_sha=get_str(data, "merge_commit_sha"),
        html_url=get_str(data, "html_url") or "",
        labels=tuple(labels),
    )


def parse_release(data: StrDict) -> Release | None:
    tag = get_str(data, "tag_name")
    if tag is None:
        return None
    return Release(
        tag=tag,
        html_url=get_str(data, "html_url") or "",
        draft=get_bool(data, "draft") or False,
        prerelease=get_bool(data, "prerelease") or False,
    )


def parse_tag(data: StrDict) -> RepoTag | None:
    name = get_str(data, "name")
    commit = get_table(data, "commit")
    if name is None or commit is None:
        return None
    sha = get_str(commit, "sha")
    if sha is None:
        return None
    return RepoTag(name=name, commit_sha=sha)


def _ref_path(ref: str) -> str:
    """``refs/heads/x`` -> ``heads/x`` as the git/refs endpoints expect."""
    return ref.removeprefix("refs/")


class GitHubClient:
    """``HostingProtocol`` implementation over ``gh api``."""

    def __init__(self, target: RepoTarget, transport: GhTransport) -> None:
        self._target = target
        self._transport = transport

    @property
    def slug(self) -> str:
        return self._target.slug

    @property
    def web_url(self) -> str:
        return self._target.web_url

    def _endpoint(self, path: str) -> str:
        return f"repos/{self.slug}/{path}"

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def _get_ref_object(self, ref: str) -> Result[StrDict | None, ReleaseError]:
        obj = gh_api_json(self._transport, self._endpoint(f"git/ref/{_ref_path(ref)}"))
        if isinstance(obj, Err):
            if obj.error.kind == "not_found":
                return Ok(None)
            return obj

        data = as_str_dict(obj.value)
        target = get_table(data, "object") if data is not None else None
        if target is None:
            return _unexpected("ref", hint=ref)
        return Ok(target)

    def get_branch_sha(self, branch: str) -> Result[str | None, ReleaseError]:
        target = self._get_ref_object(f"refs/heads/{branch}")
        if isinstance(target, Err) or target.value is None:
            return target
        sha = get_str(target.value, "sha")
        if sha is None:
            return _unexpected("branch ref", hint=branch)
        return Ok(sha)

    def get_tag_commit_sha(self, tag: str) -> Result[str | None, ReleaseError]:
        target = self._get_ref_object(f"refs/tags/{tag}")
        if isinstance(target, Err) or target.value is None:
            return target

        obj = target.value
        for _ in range(_MAX_TAG_PEEL_DEPTH):
            sha = get_str(obj, "sha")
            kind = get_str(obj, "type")
            if sha is None:
                return _unexpected("tag ref", hint=tag)
            if kind != "tag":
                return Ok(sha)

            peeled = gh_api_json(self._transport, self._endpoint(f"git/tags/{sha}"))
            if isinstance(peeled, Err):
                return peeled
            data = as_str_dict(peeled.value)
            inner = get_table(data, "object") if data is not None else None
            if inner is None:
                return _unexpected("tag object", hint=tag)
            obj = inner

        return Err(
            ReleaseError(
                kind="api_failed",
                message=f"tag {tag} nests more than {_MAX_TAG_PEEL_DEPTH} tag objects",
            )
        )

    def get_commit(self, ref: str) -> Result[CommitInfo | None, ReleaseError]:
        obj = gh_api_json(
            self._transport,
            self._endpoint(f"commits/{quote(ref, safe='')}"),
            missing_ok_unprocessable=True,
        )
        if isinstance(obj, Err):
            if obj.error.kind == "not_found":
                return Ok(None)
            return obj

        data = as_str_dict(obj.value)
        commit = parse_commit(data) if data is not None else None
        if commit is None:
            return _unexpected("commit", hint=ref)
        return Ok(commit)

    def list_commits(
        self, branch: str, *, page: int, per_page: int
    ) -> Result[list[CommitInfo], ReleaseError]:
        raw = fetch_page(
            self._transport,
            with_query(self._endpoint("commits"), sha=branch),
            page=page,
            per_page=per_page,
        )
        if isinstance(raw, Err):
            return raw

        out: list[CommitInfo] = []
        for item in raw.value:
            data = as_str_dict(item)
            commit = parse_commit(data) if data is not None else None
            if commit is not None:
                out.append(commit)
        return Ok(out)

    def list_tags(self) -> Result[list[RepoTag], ReleaseError]:
        raw = fetch_all_pages(self._transport, self._endpoint("tags"))
        if isinstance(raw, Err):
            return raw

        out: list[RepoTag] = []
        for item in raw.value:
            data = as_str_dict(item)
            tag = parse_tag(data) if data is not None else None
            if tag is not None:
                out.append(tag)
        return Ok(out)

    def list_releases(self) -> Result[list[Release], ReleaseError]:
        raw = fetch_all_pages(self._transport, self._endpoint("releases"))
        if isinstance(raw, Err):
            return raw

        out: list[Release] = []
        for item in raw.value:
            data = as_str_dict(item)
            release = parse_release(data) if data is not None else None
            if release is not None:
                out.append(release)
        return Ok(out)

    def list_open_prs(
        self, *, head: str | None = None, base: str | None = None
    ) -> Result[list[PullRequest], ReleaseError]:
        params: dict[str, str | int] = {"state": "open"}
        if head is not None:
            params["head"] = f"{self._target.owner}:{head}"
        if base is not None:
            params["base"] = base

        raw = fetch_all_pages(self._transport, with_query(self._endpoint("pulls"), **params))
        if isinstance(raw, Err):
            return raw

        out: list[PullRequest] = []
        for item in raw.value:
            data = as_str_dict(item)
            pr = parse_pull_request(data) if data is not None else None
            if pr is not None:
                out.append(pr)
        return Ok(out)

    def get_pr(self, number: int) -> Result[PullRequest | None, ReleaseError]:
        obj = gh_api_json(self._transport, self._endpoint(f"pulls/{number}"))
        if isinstance(obj, Err):
            if obj.error.kind == "not_found":
                return Ok(None)
            return obj

        data = as_str_dict(obj.value)
        pr = parse_pull_request(data) if data is not None else None
        if pr is None:
            return _unexpected("pull request", hint=f"#{number}")
        return Ok(pr)

    def get_file_text(self, path: str, *, ref: str) -> Result[str | None, ReleaseError]:
        # Contents API: no local checkout needed.
        endpoint = with_query(self._endpoint(f"contents/{path}"), ref=ref)
        obj = gh_api_json(self._transport, endpoint)
        if isinstance(obj, Err):
            if obj.error.kind == "not_found":
                return Ok(None)
            return obj

        data = as_str_dict(obj.value)
        if data is None:
            return _unexpected("contents", hint=endpoint)

        enc = get_str(data, "encoding")
        content = get_str(data, "content")
        if enc != "base64" or content is None:
            return Err(
                ReleaseError(
                    kind="api_failed",
                    message=f"unexpected contents encoding for {path}@{ref}",
                    hint=endpoint,
                )
            )

        try:
            raw = base64.b64decode(content, validate=False)
        except (binascii.Error, ValueError) as e:
            return Err(
                ReleaseError(
                    kind="api_failed",
                    message=f"failed to decode contents: {e}",
                    hint=endpoint,
                )
            )

        try:
            return Ok(raw.decode("utf-8"))
        except UnicodeDecodeError as e:
            return Err(
                ReleaseError(
                    kind="api_failed",
                    message=f"invalid UTF-8 in {path}@{ref}: {e}",
                    hint=endpoint,
                )
            )

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create_ref(self, ref: str, sha: str) -> Result[None, ReleaseError]:
        result = gh_api_json(
            self._transport,
            self._endpoint("git/refs"),
            method="POST",
            fields={"ref": ref, "sha": sha},
        )
        if isinstance(result, Err):
            return result
        return Ok(None)

    def update_ref(self, ref: str, sha: str) -> Result[None, ReleaseError]:
        result = gh_api_json(
            self._transport,
            self._endpoint(f"git/refs/{_ref_path(ref)}"),
            method="PATCH",
            fields={"sha": sha},
            typed_fields={"force": "true"},
        )
        if isinstance(result, Err):
            return result
        return Ok(None)

    def _created_sha(self, result: Result[object, ReleaseError], what: str) -> Result[str, ReleaseError]:
        if isinstance(result, Err):
            return result
        data = as_str_dict(result.value)
        sha = get_str(data, "sha") if data is not None else None
        if sha is None:
            return _unexpected(what)
        return Ok(sha)

    def create_tag_object(
        self, *, tag: str, message: str, commit_sha: str
    ) -> Result[str, ReleaseError]:
        result = gh_api_json(
            self._transport,
            self._endpoint("git/tags"),
            method="POST",
            fields={"tag": tag, "message": message, "object": commit_sha, "type": "commit"},
        )
        return self._created_sha(result, "tag object")

    def create_commit(
        self, *, message: str, tree_sha: str, parents: list[str]
    ) -> Result[str, ReleaseError]:
        result = gh_api_json(
            self._transport,
            self._endpoint("git/commits"),
            method="POST",
            fields={"message": message, "tree": tree_sha},
            array_fields={"parents": parents},
        )
        return self._created_sha(result, "commit")

    def create_pr(
        self, *, head: str, base: str, title: str, body: str
    ) -> Result[PullRequest, ReleaseError]:
        result = gh_api_json(
            self._transport,
            self._endpoint("pulls"),
            method="POST",
            fields={"title": title, "head": head, "base": base, "body": body},
        )
        if isinstance(result, Err):
            return result
        data = as_str_dict(result.value)
        pr = parse_pull_request(data) if data is not None else None
        if pr is None:
            return _unexpected("created pull request")
        return Ok(pr)

    def create_release(
        self, *, tag: str, name: str, body: str, draft: bool, prerelease: bool
    ) -> Result[Release, ReleaseError]:
        result = gh_api_json(
            self._transport,
            self._endpoint("releases"),
            method="POST",
            fields={"tag_name": tag, "name": name, "body": body},
            typed_fields={
                "draft": "true" if draft else "false",
                "prerelease": "true" if prerelease else "false",
            },
        )
        if isinstance(result, Err):
            return result
        data = as_str_dict(result.value)
        release = parse_release(data) if data is not None else None
        if release is None:
            return _unexpected("created release")
        return Ok(release)
