"""Typed configuration loading and access.

Two sources feed a relkit run:

- ``.relkit.toml`` in the working copy (optional): branch naming, history
  search bounds, git identity and manifest location.
- The environment: ``GITHUB_TOKEN`` and ``GITHUB_REPOSITORY``.

Both are resolved before any network or git call is made, so configuration
errors never leave partial state behind.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_int, get_str, get_table

__all__ = [
    "CONFIG_FILE_NAME",
    "BranchesConfig",
    "Config",
    "ConfigError",
    "GitConfig",
    "HistoryConfig",
    "ManifestConfig",
    "RepoTarget",
    "load_config",
    "load_optional_config",
    "resolve_repo_target",
]

CONFIG_FILE_NAME = ".relkit.toml"

DEFAULT_TRUNK = "main"
DEFAULT_RELEASE_PREFIX = "release/"
DEFAULT_PAGE_SIZE = 100
DEFAULT_MAX_PAGES = 5
DEFAULT_GIT_USER_NAME = "github-actions[bot]"
DEFAULT_GIT_USER_EMAIL = "github-actions[bot]@users.noreply.github.com"
DEFAULT_REMOTE = "origin"
DEFAULT_MANIFEST_PATH = ".release-please-manifest.json"
DEFAULT_MANIFEST_ROOT_KEY = "."


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Configuration is missing or malformed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class BranchesConfig:
    trunk: str = DEFAULT_TRUNK
    release_prefix: str = DEFAULT_RELEASE_PREFIX

    def release_branch(self, major_minor: str) -> str:
        """``1.15`` -> ``release/v1.15``."""
        return f"{self.release_prefix}v{major_minor}"


@dataclass(frozen=True, slots=True)
class HistoryConfig:
    """Bounds for commit-history marker searches."""

    page_size: int = DEFAULT_PAGE_SIZE
    max_pages: int = DEFAULT_MAX_PAGES


@dataclass(frozen=True, slots=True)
class GitConfig:
    """Identity and remote used for working-copy commits."""

    user_name: str = DEFAULT_GIT_USER_NAME
    user_email: str = DEFAULT_GIT_USER_EMAIL
    remote: str = DEFAULT_REMOTE


@dataclass(frozen=True, slots=True)
class ManifestConfig:
    path: str = DEFAULT_MANIFEST_PATH
    root_key: str = DEFAULT_MANIFEST_ROOT_KEY


def _int_or(table: StrDict, key: str, default: int) -> int:
    # 0 is a value to validate, not a missing one.
    value = get_int(table, key)
    return default if value is None else value


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    branches: BranchesConfig = field(default_factory=BranchesConfig)
    history: HistoryConfig = field(default_factory=HistoryConfig)
    git: GitConfig = field(default_factory=GitConfig)
    manifest: ManifestConfig = field(default_factory=ManifestConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML)."""
        branches: StrDict = get_table(data, "branches") or {}
        history: StrDict = get_table(data, "history") or {}
        git: StrDict = get_table(data, "git") or {}
        manifest: StrDict = get_table(data, "manifest") or {}

        return cls(
            branches=BranchesConfig(
                trunk=get_str(branches, "trunk") or DEFAULT_TRUNK,
                release_prefix=get_str(branches, "release_prefix") or DEFAULT_RELEASE_PREFIX,
            ),
            history=HistoryConfig(
                page_size=_int_or(history, "page_size", DEFAULT_PAGE_SIZE),
                max_pages=_int_or(history, "max_pages", DEFAULT_MAX_PAGES),
            ),
            git=GitConfig(
                user_name=get_str(git, "user_name") or DEFAULT_GIT_USER_NAME,
                user_email=get_str(git, "user_email") or DEFAULT_GIT_USER_EMAIL,
                remote=get_str(git, "remote") or DEFAULT_REMOTE,
            ),
            manifest=ManifestConfig(
                path=get_str(manifest, "path") or DEFAULT_MANIFEST_PATH,
                root_key=get_str(manifest, "root_key") or DEFAULT_MANIFEST_ROOT_KEY,
            ),
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ConfigError("Config root must be a TOML table", path=path))
    return Ok(data)


def _validate(config: Config, path: Path) -> Result[Config, ConfigError]:
    if config.history.page_size < 1 or config.history.page_size > 100:
        return Err(ConfigError("history.page_size must be between 1 and 100", path=path))
    if config.history.max_pages < 1:
        return Err(ConfigError("history.max_pages must be at least 1", path=path))
    if not config.branches.release_prefix.endswith("/"):
        return Err(ConfigError("branches.release_prefix must end with '/'", path=path))
    return Ok(config)


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and validate configuration from a TOML file."""
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result
    return _validate(Config.from_dict(result.value), path)


def load_optional_config(path: Path) -> Result[Config, ConfigError]:
    """Like ``load_config`` but a missing file yields the defaults."""
    if not path.exists():
        return Ok(Config())
    return load_config(path)


@dataclass(frozen=True, slots=True)
class RepoTarget:
    """The hosted repository a run operates on."""

    owner: str
    name: str
    token: str

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.name}"

    @property
    def web_url(self) -> str:
        return f"https://github.com/{self.slug}"


def resolve_repo_target(
    *,
    owner: str | None,
    name: str | None,
    env: Mapping[str, str],
) -> Result[RepoTarget, ConfigError]:
    """Combine ``--owner/--repo`` with ``GITHUB_TOKEN`` / ``GITHUB_REPOSITORY``.

    Explicit flags win; either missing half falls back to the combined
    ``GITHUB_REPOSITORY`` value.
    """
    token = env.get("GITHUB_TOKEN", "").strip()
    if not token:
        return Err(ConfigError("GITHUB_TOKEN environment variable is required"))

    owner = (owner or "").strip()
    name = (name or "").strip()
    if not owner or not name:
        combined = env.get("GITHUB_REPOSITORY", "").strip()
        if combined:
            parts = combined.split("/", 1)
            if len(parts) == 2:
                owner = owner or parts[0].strip()
                name = name or parts[1].strip()

    if not owner or not name:
        return Err(
            ConfigError(
                "repository owner and name are required "
                "(use --owner and --repo, or set GITHUB_REPOSITORY=owner/repo)"
            )
        )

    return Ok(RepoTarget(owner=owner, name=name, token=token))
