"""Thin transport over ``gh api``.

relkit talks to the GitHub REST API exclusively through the GitHub CLI.
The bearer token from the run's ``RepoTarget`` is handed to ``gh`` through
``GH_TOKEN``; nothing is read from or written to gh's own credential store.
"""

from __future__ import annotations

import json
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Literal
from urllib.parse import urlencode

from relkit.core.result import Err, Ok, Result
from relkit.core.structured import as_obj_list
from relkit.platform.process import ProcessError, merged_env
from relkit.platform.process import run as run_process
from relkit.release.errors import ReleaseError

HttpMethod = Literal["GET", "POST", "PATCH"]

_NOT_FOUND_MARKERS = ("HTTP 404",)
# The commits endpoint answers 422 for strings that are not a known sha.
_UNPROCESSABLE_MARKER = "HTTP 422"


@dataclass(frozen=True, slots=True)
class GhTransport:
    """Where and as whom ``gh`` runs."""

    workdir: Path
    token: str

    def env(self) -> dict[str, str]:
        return merged_env({"GH_TOKEN": self.token, "GH_PROMPT_DISABLED": "1"})


def ensure_gh_available() -> Result[None, ReleaseError]:
    if shutil.which("gh") is None:
        return Err(
            ReleaseError(
                kind="config",
                message="gh: missing",
                hint="Install GitHub CLI: https://cli.github.com/",
            )
        )
    return Ok(None)


def with_query(endpoint: str, **params: str | int) -> str:
    """Append query parameters, keeping any already present."""
    if not params:
        return endpoint
    sep = "&" if "?" in endpoint else "?"
    return f"{endpoint}{sep}{urlencode(params)}"


def is_not_found(error: ProcessError, *, include_unprocessable: bool = False) -> bool:
    text = f"{error.stderr}\n{error.stdout}"
    if any(marker in text for marker in _NOT_FOUND_MARKERS):
        return True
    return include_unprocessable and _UNPROCESSABLE_MARKER in text


def build_api_command(
    endpoint: str,
    *,
    method: HttpMethod = "GET",
    fields: dict[str, str] | None = None,
    typed_fields: dict[str, str] | None = None,
    array_fields: dict[str, list[str]] | None = None,
) -> list[str]:
    cmd = [
        "gh",
        "api",
        "--method",
        method,
        "-H",
        "Accept: application/vnd.github+json",
        endpoint,
    ]
    for key, value in (fields or {}).items():
        cmd += ["-f", f"{key}={value}"]
    for key, value in (typed_fields or {}).items():
        cmd += ["-F", f"{key}={value}"]
    for key, values in (array_fields or {}).items():
        for value in values:
            cmd += ["-f", f"{key}[]={value}"]
    return cmd


def gh_api_json(
    transport: GhTransport,
    endpoint: str,
    *,
    method: HttpMethod = "GET",
    fields: dict[str, str] | None = None,
    typed_fields: dict[str, str] | None = None,
    array_fields: dict[str, list[str]] | None = None,
    missing_ok_unprocessable: bool = False,
) -> Result[object, ReleaseError]:
    """Call the API and decode the JSON response.

    A 404 (or a 422 when ``missing_ok_unprocessable``) becomes a
    ``not_found`` error so callers can tell absence from failure.
    """
    cmd = build_api_command(
        endpoint,
        method=method,
        fields=fields,
        typed_fields=typed_fields,
        array_fields=array_fields,
    )
    result = run_process(cmd, cwd=transport.workdir, env=transport.env())
    if isinstance(result, Err):
        error = result.error
        if is_not_found(error, include_unprocessable=missing_ok_unprocessable):
            return Err(
                ReleaseError(
                    kind="not_found",
                    message=f"not found: {endpoint}",
                    hint=error.detail,
                )
            )
        return Err(
            ReleaseError(
                kind="api_failed",
                message=f"gh api {method} {endpoint} failed",
                hint=error.detail,
            )
        )

    text = result.value.strip()
    if not text:
        return Ok(None)

    try:
        obj: object = json.loads(text)
    except json.JSONDecodeError as e:
        return Err(
            ReleaseError(
                kind="api_failed",
                message=f"gh api returned invalid JSON: {e}",
                hint=endpoint,
            )
        )
    return Ok(obj)


def fetch_all_pages(
    transport: GhTransport,
    endpoint: str,
    *,
    per_page: int = 100,
) -> Result[list[object], ReleaseError]:
    """Drain a paginated list endpoint.

    Stops at the first short page. Decisions about existing state must see
    every item, so there is no page ceiling here.
    """
    items: list[object] = []
    page = 1
    while True:
        result = fetch_page(transport, endpoint, page=page, per_page=per_page)
        if isinstance(result, Err):
            return result
        items.extend(result.value)
        if len(result.value) < per_page:
            return Ok(items)
        page += 1


def fetch_page(
    transport: GhTransport,
    endpoint: str,
    *,
    page: int,
    per_page: int,
) -> Result[list[object], ReleaseError]:
    paged = with_query(endpoint, per_page=per_page, page=page)
    result = gh_api_json(transport, paged)
    if isinstance(result, Err):
        return result
    raw = as_obj_list(result.value)
    if raw is None:
        return Err(
            ReleaseError(
                kind="api_failed",
                message=f"expected a JSON list from {endpoint}",
                hint=paged,
            )
        )
    return Ok(raw)
