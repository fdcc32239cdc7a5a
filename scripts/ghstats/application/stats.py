from __future__ import annotations
import logging
from collections.abc import Iterable
from ghstats.domain.entities import DerivedStats, Repository

log = logging.getLogger(__name__)


def aggregate(repositories: Iterable[Repository]) -> DerivedStats:
    """
    Single pass over the repositories: sum stars and forks, and count
    repositories per language. Repositories without a language are not
    tallied. Totals and tally contents do not depend on input order.
    """
    total_stars = 0
    total_forks = 0
    language_counts: dict[str, int] = {}

    for repo in repositories:
        total_stars += repo.star_count
        total_forks += repo.fork_count
        if repo.language is not None:
            language_counts[repo.language] = language_counts.get(repo.language, 0) + 1

    log.debug(
        "Aggregated stats | stars=%d | forks=%d | languages=%d",
        total_stars, total_forks, len(language_counts),
    )
    return DerivedStats(
        total_stars     = total_stars,
        total_forks     = total_forks,
        language_counts = language_counts,
    )
