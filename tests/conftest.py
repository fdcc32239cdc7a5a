"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator, Callable

import httpx
import pytest
import pytest_asyncio

from ghstats.domain.entities import Profile, Repository
from ghstats.infrastructure.github_client import GitHubClient

API_URL = "https://api.example.test"


def make_repo(repo_id: int, stars: int, forks: int, language: str | None) -> Repository:
    """Build a Repository with only the fields the stats care about varied."""
    return Repository(
        repo_id=repo_id,
        name=f"repo-{repo_id}",
        description=None,
        html_url=f"https://github.com/octocat/repo-{repo_id}",
        language=language,
        star_count=stars,
        fork_count=forks,
    )


@pytest.fixture
def profile_payload() -> dict:
    """JSON body of GET /users/octocat."""
    return {
        "login": "octocat",
        "id": 583231,
        "name": "The Octocat",
        "avatar_url": "https://avatars.githubusercontent.com/u/583231?v=4",
        "bio": None,
        "followers": 100,
        "following": 9,
        "public_repos": 8,
    }


@pytest.fixture
def repos_payload() -> list[dict]:
    """JSON body of GET /users/octocat/repos with three repositories."""
    return [
        {
            "id": 1,
            "name": "hello-world",
            "description": "My first repository",
            "html_url": "https://github.com/octocat/hello-world",
            "language": "Go",
            "stargazers_count": 10,
            "forks_count": 2,
            "topics": ["demo", "go"],
        },
        {
            "id": 2,
            "name": "spoon-knife",
            "description": None,
            "html_url": "https://github.com/octocat/spoon-knife",
            "language": "Go",
            "stargazers_count": 5,
            "forks_count": 1,
            "topics": [],
        },
        {
            "id": 3,
            "name": "notes",
            "description": None,
            "html_url": "https://github.com/octocat/notes",
            "language": None,
            "stargazers_count": 0,
            "forks_count": 0,
        },
    ]


@pytest.fixture
def profile() -> Profile:
    return Profile(
        login="octocat",
        name="The Octocat",
        avatar_url="https://avatars.githubusercontent.com/u/583231?v=4",
        bio=None,
        followers=100,
        following=9,
        public_repos=8,
    )


@pytest.fixture
def requests_seen() -> list[httpx.Request]:
    """Every request that reached the mock transport, in order."""
    return []


@pytest.fixture
def repo_factory() -> Callable[..., Repository]:
    return make_repo


@pytest_asyncio.fixture
async def make_client(requests_seen: list[httpx.Request]) -> AsyncGenerator[Callable, None]:
    """
    Factory for an httpx.AsyncClient backed by httpx.MockTransport.

    `routes` maps a URL path to either (status, json_body) or an exception
    instance to raise from the transport.
    """
    clients: list[httpx.AsyncClient] = []

    def factory(routes: dict) -> httpx.AsyncClient:
        def handler(request: httpx.Request) -> httpx.Response:
            requests_seen.append(request)
            route = routes.get(request.url.path)
            if route is None:
                return httpx.Response(404, json={"message": "Not Found"})
            if isinstance(route, Exception):
                raise route
            status, body = route
            return httpx.Response(status, json=body)

        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        clients.append(client)
        return client

    yield factory

    for client in clients:
        await client.aclose()


@pytest.fixture
def octocat_client(make_client, profile_payload, repos_payload) -> GitHubClient:
    """GitHubClient wired to a mock API that knows about octocat."""
    http = make_client({
        "/users/octocat": (200, profile_payload),
        "/users/octocat/repos": (200, repos_payload),
    })
    return GitHubClient(client=http, token="test-token", api_url=API_URL)
