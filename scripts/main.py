"""
main.py - Dependency Wiring (Composition Root)
------------------------------------------------
This file has ONE job: wire the pieces together, run one fetch cycle and
report the outcome.

It does NOT contain any business logic. It just:
  1. Reads configuration from environment variables and argv
  2. Creates the concrete GitHubClient around an httpx.AsyncClient
  3. Injects it into the ProfileStatsOrchestrator (as both fetchers)
  4. Calls refresh(username, max_repos)
  5. Prints the outcome and exits

Dependency graph:
                   main.py  (wires everything)
                      │
                      ▼
          ProfileStatsOrchestrator ──► aggregate()
                 │           │
                 ▼           ▼
       IProfileFetcher  IRepositoryFetcher
                 └─────┬─────┘
                       ▼
                 GitHubClient ──► httpx.AsyncClient
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
import sys

import httpx

# Application layer
from ghstats.application.orchestrator import ProfileStatsOrchestrator
from ghstats.application.theme import ThemeToggle
from ghstats.domain.entities import FetchOutcome, Success, Theme
from ghstats.domain.interfaces import DEFAULT_MAX_REPOS

# Infrastructure layer
from ghstats.infrastructure.github_client import GITHUB_API_URL, GitHubClient

log = logging.getLogger(__name__)

HTTP_TIMEOUT = 30.0


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
        datefmt="%H:%M:%S",
    )


def _read_env() -> tuple[str | None, str]:
    """
    Read optional environment variables.
    Unauthenticated requests work, just with a lower rate limit.
    """
    token   = os.environ.get("GITHUB_TOKEN") or None
    api_url = os.environ.get("GITHUB_API_URL") or GITHUB_API_URL

    if token is None:
        log.info("GITHUB_TOKEN not set - using unauthenticated requests")

    return token, api_url


def format_outcome(outcome: FetchOutcome, theme: Theme) -> str:
    """Plain-text summary of an outcome, one fact per line."""
    if not isinstance(outcome, Success):
        return outcome.to_dict().get("message", "Loading...")

    profile = outcome.profile
    stats   = outcome.stats
    lines = [
        f"{profile.display_name} (@{profile.login})  [{theme.value}]",
    ]
    if profile.bio:
        lines.append(profile.bio)
    lines.append(
        f"{profile.followers} followers | {stats.total_stars} stars | "
        f"{stats.total_forks} forks | {profile.public_repos} repos"
    )
    lines.append("")
    lines.append("Repositories:")
    for repo in outcome.repositories:
        language = f" [{repo.language}]" if repo.language else ""
        lines.append(f"  {repo.name}{language} ★{repo.star_count} ⑂{repo.fork_count}  {repo.html_url}")
    lines.append("")
    lines.append("Languages:")
    for point in stats.chart_data():
        lines.append(f"  {point.name:<16} {point.value}")
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Dependency wiring
# ---------------------------------------------------------------------------

async def build_and_run(username: str,max_repos: int,theme: Theme,as_json: bool = False,client: httpx.AsyncClient | None = None) -> int:
    """
    Wires all dependencies together and executes one fetch cycle.
    Returns the process exit code: 0 on success, 1 on failure.

    `client` may be injected (tests); otherwise one is created and closed here.
    """
    token, api_url = _read_env()
    owns_client = client is None
    if client is None:
        client = httpx.AsyncClient(timeout=HTTP_TIMEOUT)

    try:
        github_client = GitHubClient(
            client  = client,       # injected - GitHubClient doesn't create this
            token   = token,
            api_url = api_url,
        )
        orchestrator = ProfileStatsOrchestrator(
            profile_fetcher    = github_client,   # injected IProfileFetcher
            repository_fetcher = github_client,   # injected IRepositoryFetcher
        )

        outcome = await orchestrator.refresh(username, max_repos)

        if as_json:
            print(json.dumps(outcome.to_dict(), indent=2))
        else:
            print(format_outcome(outcome, theme))

        if isinstance(outcome, Success):
            log.info("✅ Success | %s | %d repos", username, len(outcome.repositories))
            return 0

        log.error("❌ Failed | %s", outcome.to_dict().get("message"))
        return 1

    finally:
        if owns_client:
            await client.aclose()


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Fetch a GitHub profile and summarise its repositories"
    )
    parser.add_argument("username", help="GitHub login to query")
    parser.add_argument(
        "--max-repos",
        type    = int,
        default = DEFAULT_MAX_REPOS,
        help    = f"Number of recently updated repos to fetch (default: {DEFAULT_MAX_REPOS})",
    )
    parser.add_argument(
        "--theme",
        choices = [t.value for t in Theme],
        default = Theme.LIGHT.value,
        help    = "Initial presentation theme (default: light)",
    )
    parser.add_argument("--json", action="store_true", help="Print the outcome as JSON")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    if args.max_repos < 1:
        parser.error("--max-repos must be at least 1")
    return args


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    _configure_logging(args.verbose)
    theme = ThemeToggle(args.theme).current
    return asyncio.run(build_and_run(args.username, args.max_repos, theme, as_json=args.json))


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
