"""release-please manifest reader."""

from __future__ import annotations

import json

from relkit.core.config import ManifestConfig
from relkit.core.result import Err, Ok, Result
from relkit.core.structured import as_str_dict, get_str
from relkit.github.hosting import HostingProtocol
from relkit.release.errors import ReleaseError


def parse_manifest(text: str, *, key: str, path: str) -> Result[str, ReleaseError]:
    """Version stored under ``key`` (``"."`` is the root package)."""
    try:
        obj: object = json.loads(text)
    except json.JSONDecodeError as e:
        return Err(
            ReleaseError(
                kind="invalid_input",
                message=f"invalid JSON in {path}: {e}",
            )
        )

    data = as_str_dict(obj)
    if data is None:
        return Err(
            ReleaseError(
                kind="invalid_input",
                message=f"{path} must contain a JSON object",
            )
        )

    version = get_str(data, key)
    if version is None:
        return Err(
            ReleaseError(
                kind="not_found",
                message=f"key {key!r} not found in {path}",
            )
        )
    return Ok(version)


def read_manifest_version(
    hosting: HostingProtocol,
    *,
    ref: str,
    manifest: ManifestConfig,
) -> Result[str, ReleaseError]:
    text = hosting.get_file_text(manifest.path, ref=ref)
    if isinstance(text, Err):
        return text
    if text.value is None:
        return Err(
            ReleaseError(
                kind="not_found",
                message=f"{manifest.path} not found at {ref}",
                hint=hosting.slug,
            )
        )
    return parse_manifest(text.value, key=manifest.root_key, path=manifest.path)
