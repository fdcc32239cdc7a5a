from __future__ import annotations
import asyncio
import logging
from ghstats.domain.entities import Failure, FetchOutcome, Pending, Success
from ghstats.domain.errors import FetchError
from ghstats.domain.interfaces import DEFAULT_MAX_REPOS, IProfileFetcher, IRepositoryFetcher
from .stats import aggregate

log = logging.getLogger(__name__)

GENERIC_FAILURE = "Failed to fetch GitHub data"


class ProfileStatsOrchestrator:
    """
    Runs fetch cycles and owns the single FetchOutcome value.

    All dependencies are injected - this class creates NOTHING itself:
      - IProfileFetcher     → how to read the account (injected)
      - IRepositoryFetcher  → how to list its repositories (injected)

    Every cycle gets a generation id. A cycle commits its outcome only if
    its id is still the latest, so a slow cycle for an old identifier can
    never overwrite the outcome of a newer one.
    """

    def __init__(self,profile_fetcher: IProfileFetcher,repository_fetcher: IRepositoryFetcher) -> None:
        self._profile_fetcher    = profile_fetcher
        self._repository_fetcher = repository_fetcher
        self._outcome: FetchOutcome = Pending()
        self._generation = 0
        self._params: tuple[str, int] | None = None
        self._task: asyncio.Task | None = None

    @property
    def outcome(self) -> FetchOutcome:
        return self._outcome

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def params(self) -> tuple[str, int] | None:
        return self._params

    def _begin(self, identifier: str, max_repos: int) -> int:
        """Validate, bump the generation and enter Pending. Returns the new generation."""
        if not identifier or not identifier.strip():
            raise ValueError("identifier must be a non-empty string")
        if max_repos < 1:
            raise ValueError(f"max_repos must be at least 1, got {max_repos}")

        self._generation += 1
        self._params  = (identifier, max_repos)
        self._outcome = Pending()
        log.info("Cycle #%d | %s | max_repos=%d", self._generation, identifier, max_repos)
        return self._generation

    async def _run_cycle(self, identifier: str, max_repos: int) -> FetchOutcome:
        """Profile first, then repositories. Never two requests in flight."""
        try:
            profile = await self._profile_fetcher.fetch_profile(identifier)
            repos   = await self._repository_fetcher.fetch_repositories(identifier, max_repos)
            stats   = aggregate(repos)
        except FetchError as exc:
            log.warning("Fetch failed for %s: %s", identifier, exc.message)
            return Failure(message=exc.message)
        except Exception as exc:
            log.error("Unexpected error fetching %s: %s", identifier, exc, exc_info=True)
            return Failure(message=GENERIC_FAILURE)

        return Success(profile=profile, repositories=tuple(repos), stats=stats)

    def _commit(self, generation: int, outcome: FetchOutcome) -> bool:
        if generation != self._generation:
            log.info("Discarding stale result of cycle #%d (latest is #%d)", generation, self._generation)
            return False
        self._outcome = outcome
        log.info("Cycle #%d finished | %s", generation, outcome.status)
        return True

    async def refresh(self, identifier: str, max_repos: int = DEFAULT_MAX_REPOS) -> FetchOutcome:
        """
        Run one full cycle for (identifier, max_repos).

        Returns the outcome this cycle produced. If a newer cycle started
        while this one was awaiting I/O, the result is returned to this
        caller but NOT written to self.outcome.
        """
        generation = self._begin(identifier, max_repos)
        outcome    = await self._run_cycle(identifier, max_repos)
        self._commit(generation, outcome)
        return outcome

    async def reload(self) -> FetchOutcome:
        """Explicit caller-initiated refresh with the latest parameters."""
        if self._params is None:
            raise RuntimeError("No parameters to reload; call refresh() first")
        identifier, max_repos = self._params
        return await self.refresh(identifier, max_repos)

    async def _run_and_commit(self, generation: int, identifier: str, max_repos: int) -> FetchOutcome:
        outcome = await self._run_cycle(identifier, max_repos)
        self._commit(generation, outcome)
        return outcome

    def update(self, identifier: str, max_repos: int = DEFAULT_MAX_REPOS) -> asyncio.Task | None:
        """
        Parameter-change trigger. Starts a new cycle in the background when
        (identifier, max_repos) differs from the latest parameters, and
        cancels the cycle it supersedes. Returns the scheduled task, or
        None when the parameters are unchanged.

        Must be called from inside a running event loop.
        """
        if self._params == (identifier, max_repos):
            return None

        generation = self._begin(identifier, max_repos)

        if self._task is not None and not self._task.done():
            log.debug("Cancelling superseded cycle task")
            self._task.cancel()

        self._task = asyncio.get_running_loop().create_task(
            self._run_and_commit(generation, identifier, max_repos)
        )
        return self._task
