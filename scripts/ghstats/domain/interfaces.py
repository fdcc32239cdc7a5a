"""
Domain Layer - Interfaces (Abstract Contracts)
-----------------------------------------------
The application layer depends on these, never on the concrete GitHubClient.
Tests swap in fakes without touching the orchestrator.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from .entities import Profile, Repository

DEFAULT_MAX_REPOS = 6


class IProfileFetcher(ABC):
    """Contract for anything that can read one account resource."""

    @abstractmethod
    async def fetch_profile(self, identifier: str) -> Profile:
        """
        Fetch the account named by `identifier`.

        Raises:
            ProfileFetchError - on any non-success response or transport error
        """
        ...


class IRepositoryFetcher(ABC):
    """Contract for anything that can list an account's repositories."""

    @abstractmethod
    async def fetch_repositories(self, identifier: str, max_repos: int = DEFAULT_MAX_REPOS) -> list[Repository]:
        """
        Fetch at most `max_repos` repositories, most recently updated first.

        Raises:
            RepositoryFetchError - on any non-success response or transport error
        """
        ...
