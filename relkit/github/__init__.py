"""GitHub adapter: ``gh api`` transport and the hosting client."""

from relkit.github.api import GhTransport, ensure_gh_available
from relkit.github.client import GitHubClient
from relkit.github.hosting import HostingProtocol

__all__ = [
    "GhTransport",
    "GitHubClient",
    "HostingProtocol",
    "ensure_gh_available",
]
