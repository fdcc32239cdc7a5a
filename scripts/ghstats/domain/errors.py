"""
Domain Layer - Fetch Errors
---------------------------
Every failure of a fetcher (HTTP status, transport error, malformed payload)
collapses into one of these. The status code never leaves the
infrastructure layer; callers only ever see the human-readable message.
"""

from __future__ import annotations

PROFILE_FETCH_FAILED    = "Failed to fetch user data"
REPOSITORY_FETCH_FAILED = "Failed to fetch repositories"


class FetchError(Exception):
    """Base class for any failed read against the remote API."""

    default_message = "Failed to fetch GitHub data"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ProfileFetchError(FetchError):
    """Raised when the account resource cannot be read."""

    default_message = PROFILE_FETCH_FAILED


class RepositoryFetchError(FetchError):
    """Raised when the repository list cannot be read."""

    default_message = REPOSITORY_FETCH_FAILED
