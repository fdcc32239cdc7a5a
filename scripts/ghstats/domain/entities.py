from __future__ import annotations
from dataclasses import asdict, dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import ClassVar, Mapping, Union


@dataclass(frozen=True)
class Profile:
    """
    Immutable domain entity representing a GitHub account.

    Created once per fetch cycle from the /users/{login} response and
    replaced wholesale on the next cycle, never patched in place.
    """
    login:        str
    name:         str | None
    avatar_url:   str
    bio:          str | None
    followers:    int
    following:    int
    public_repos: int

    @property
    def display_name(self) -> str:
        """The account's name, falling back to the login when unset."""
        return self.name or self.login


@dataclass(frozen=True)
class Repository:
    """
    Immutable domain entity representing one public repository.

    Field names are OURS (snake_case), not GitHub's.
    "stargazers_count" becomes star_count, "forks_count" becomes fork_count.
    """
    repo_id:     int
    name:        str
    description: str | None
    html_url:    str
    language:    str | None
    star_count:  int
    fork_count:  int
    topics:      tuple[str, ...] = ()


@dataclass(frozen=True)
class LanguageShare:
    """One chart point: a language and how many repositories use it."""
    name:  str
    value: int


@dataclass(frozen=True)
class DerivedStats:
    """
    Aggregates computed from a repository collection.

    Never fetched and never cached: rebuilt from the repositories of every
    cycle. language_counts is a read-only view that keeps first-appearance
    order; equality and hashing ignore that order.
    """
    total_stars:     int
    total_forks:     int
    language_counts: Mapping[str, int] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "language_counts", MappingProxyType(dict(self.language_counts)))

    def __hash__(self) -> int:
        return hash((self.total_stars, self.total_forks, frozenset(self.language_counts.items())))

    def chart_data(self) -> list[LanguageShare]:
        return [LanguageShare(name, value) for name, value in self.language_counts.items()]


# Fetch outcome: a tagged union of exactly three states.

@dataclass(frozen=True)
class Pending:
    """A cycle has started and has not resolved yet."""
    status: ClassVar[str] = "pending"

    def to_dict(self) -> dict:
        return {"status": self.status}


@dataclass(frozen=True)
class Success:
    """Both fetches succeeded; stats are derived from exactly these repositories."""
    status: ClassVar[str] = "success"

    profile:      Profile
    repositories: tuple[Repository, ...]
    stats:        DerivedStats

    def to_dict(self) -> dict:
        return {
            "status":       self.status,
            "profile":      asdict(self.profile),
            "repositories": [asdict(repo) for repo in self.repositories],
            "stats": {
                "total_stars":     self.stats.total_stars,
                "total_forks":     self.stats.total_forks,
                "language_counts": dict(self.stats.language_counts),
                "chart_data":      [asdict(point) for point in self.stats.chart_data()],
            },
        }


@dataclass(frozen=True)
class Failure:
    """The cycle failed; message is shown to the user verbatim."""
    status: ClassVar[str] = "failure"

    message: str

    def to_dict(self) -> dict:
        return {"status": self.status, "message": self.message}


FetchOutcome = Union[Pending, Success, Failure]


class Theme(str, Enum):
    """Presentation theme. Has no effect on fetched data."""
    LIGHT = "light"
    DARK  = "dark"
