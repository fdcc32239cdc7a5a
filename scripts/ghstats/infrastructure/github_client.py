from __future__ import annotations

import logging
from urllib.parse import quote

import httpx

from ghstats.domain.entities import Profile, Repository
from ghstats.domain.errors import ProfileFetchError, RepositoryFetchError
from ghstats.domain.interfaces import DEFAULT_MAX_REPOS, IProfileFetcher, IRepositoryFetcher

log = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"
API_VERSION    = "2022-11-28"
MAX_PAGE_SIZE  = 100   # GitHub REST caps per_page at 100
LOW_RATE_LIMIT = 10


class GitHubClient(IProfileFetcher, IRepositoryFetcher):
    """
    Concrete implementation of both fetcher contracts for GitHub's REST API.

    The constructor receives an httpx.AsyncClient (injected) rather than
    creating one internally. The caller owns the client lifecycle; tests
    pass one built on httpx.MockTransport.

    No retries: any non-2xx response, transport error or malformed payload
    becomes a single FetchError subclass for the orchestrator to report.
    """

    def __init__(self, client: httpx.AsyncClient, token: str | None = None, api_url: str = GITHUB_API_URL) -> None:
        self._client  = client
        self._api_url = api_url.rstrip("/")
        self._headers = {
            "Accept":               "application/vnd.github+json",
            "X-GitHub-Api-Version": API_VERSION,
        }
        if token:
            self._headers["Authorization"] = f"Bearer {token}"

    # Anti-Corruption Layer
    @staticmethod
    def _count(data: dict, key: str) -> int:
        """Read a non-negative integer counter; a missing key counts as 0."""
        value = data.get(key, 0)
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise TypeError(f"{key} must be a non-negative integer, got {value!r}")
        return value

    @staticmethod
    def _parse_profile(data: dict) -> Profile:
        """
        Translate the /users/{login} payload into a Profile.
        Raises KeyError/TypeError on a malformed payload.
        """
        return Profile(
            login        = data["login"],
            name         = data.get("name"),
            avatar_url   = data["avatar_url"],
            bio          = data.get("bio"),
            followers    = GitHubClient._count(data, "followers"),
            following    = GitHubClient._count(data, "following"),
            public_repos = GitHubClient._count(data, "public_repos"),
        )

    @staticmethod
    def _parse_repository(node: dict) -> Repository | None:
        """
        Translate one element of the /repos payload into a Repository.

        GitHub sends:            We store as:
          "id"                →  repo_id
          "stargazers_count"  →  star_count
          "forks_count"       →  fork_count

        If GitHub renames a field, fix it HERE only - nowhere else.
        """
        try:
            return Repository(
                repo_id     = node["id"],
                name        = node["name"],
                description = node.get("description"),
                html_url    = node["html_url"],
                language    = node.get("language"),
                star_count  = GitHubClient._count(node, "stargazers_count"),
                fork_count  = GitHubClient._count(node, "forks_count"),
                topics      = tuple(node.get("topics") or ()),
            )
        except (KeyError, TypeError) as exc:
            log.debug("Skipping malformed repository %s: %s", node.get("id") if isinstance(node, dict) else node, exc)
            return None

    async def _get_json(self, path: str, params: dict | None = None) -> object:
        """
        Issue one GET and return the decoded JSON body.
        Raises httpx.HTTPStatusError / httpx.RequestError / ValueError.
        """
        response = await self._client.get(
            f"{self._api_url}{path}",
            headers=self._headers,
            params=params,
        )

        remaining = response.headers.get("X-RateLimit-Remaining")
        if remaining is not None and remaining.isdigit() and int(remaining) < LOW_RATE_LIMIT:
            log.warning("Rate limit low (%s requests remaining)", remaining)

        response.raise_for_status()
        return response.json()

    # IProfileFetcher implementation
    async def fetch_profile(self, identifier: str) -> Profile:
        path = f"/users/{quote(identifier, safe='')}"
        try:
            data = await self._get_json(path)
            profile = self._parse_profile(data)
        except httpx.HTTPStatusError as exc:
            log.warning("Profile request for %s failed with HTTP %d", identifier, exc.response.status_code)
            raise ProfileFetchError() from exc
        except httpx.RequestError as exc:
            log.warning("Profile request for %s failed: %s", identifier, exc)
            raise ProfileFetchError() from exc
        except (KeyError, TypeError, ValueError) as exc:
            log.warning("Malformed profile payload for %s: %s", identifier, exc)
            raise ProfileFetchError() from exc

        log.debug("Fetched profile %s (%d public repos)", profile.login, profile.public_repos)
        return profile

    # IRepositoryFetcher implementation
    async def fetch_repositories(self, identifier: str, max_repos: int = DEFAULT_MAX_REPOS) -> list[Repository]:
        path = f"/users/{quote(identifier, safe='')}/repos"
        params = {
            "sort":     "updated",
            "per_page": min(max_repos, MAX_PAGE_SIZE),
        }
        try:
            data = await self._get_json(path, params)
        except httpx.HTTPStatusError as exc:
            log.warning("Repository request for %s failed with HTTP %d", identifier, exc.response.status_code)
            raise RepositoryFetchError() from exc
        except (httpx.RequestError, ValueError) as exc:
            log.warning("Repository request for %s failed: %s", identifier, exc)
            raise RepositoryFetchError() from exc

        if not isinstance(data, list):
            log.warning("Expected a list of repositories for %s, got %s", identifier, type(data).__name__)
            raise RepositoryFetchError()

        # Apply anti-corruption layer to every node
        repos = [parsed for node in data if (parsed := self._parse_repository(node)) is not None]
        repos = repos[:max_repos]

        log.debug("Fetched %d repositories for %s", len(repos), identifier)
        return repos
