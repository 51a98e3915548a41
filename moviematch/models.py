"""Core domain dataclasses shared across all moviematch modules."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

import config


class QuestionCategory(str, Enum):
    """Preference axes a question can ask about.

    ``LANGUAGE`` is retired: question data may still carry it, but no weight,
    filter rule or scorer exists for it.
    """

    GENRE = "genre"
    MOOD = "mood"
    ERA = "era"
    LENGTH = "length"
    RATING = "rating"
    PLATFORM = "platform"
    LANGUAGE = "language"


RETIRED_CATEGORIES = frozenset({QuestionCategory.LANGUAGE})

ACTIVE_CATEGORIES: tuple[QuestionCategory, ...] = tuple(
    c for c in QuestionCategory if c not in RETIRED_CATEGORIES
)


def selection_key(selection: str | float) -> str:
    """Return the option-value key for a selection (``28.0`` becomes ``"28"``)."""
    if isinstance(selection, float) and selection.is_integer():
        return str(int(selection))
    return str(selection)


@dataclass(frozen=True)
class Option:
    """One selectable value of a :class:`Question`.

    Attributes:
        value: Wire-level selection key stored in answers.
        label: Human-readable label.
        tmdb_genre_id: Catalogue genre id, for genre options.
        provider_id: Catalogue watch-provider id, for platform options.
    """

    value: str
    label: str = ""
    tmdb_genre_id: int | None = None
    provider_id: int | None = None


@dataclass(frozen=True)
class Question:
    """A preference question from the catalogue.

    Attributes:
        id: Unique question identifier referenced by answers.
        category: The preference axis this question asks about.
        options: Ordered selectable options.
        order: Display order; lower comes first.
        text: Prompt shown to the user.
    """

    id: int
    category: QuestionCategory
    options: tuple[Option, ...] = ()
    order: int = 0
    text: str = ""

    def resolve(self, selections: tuple[str | float, ...], attr: str) -> list[int]:
        """Map selected option values to the option attribute *attr*.

        Options without a value for *attr* are skipped. The result follows
        option order and contains no duplicates.
        """
        wanted = {selection_key(s) for s in selections}
        resolved: list[int] = []
        for option in self.options:
            mapped = getattr(option, attr)
            if option.value in wanted and mapped is not None and mapped not in resolved:
                resolved.append(mapped)
        return resolved


@dataclass(frozen=True)
class SingleValue:
    """A single-select answer payload."""

    value: str | float

    def selections(self) -> tuple[str | float, ...]:
        return (self.value,)


@dataclass(frozen=True)
class MultiValue:
    """A multi-select answer payload."""

    values: tuple[str | float, ...]

    def selections(self) -> tuple[str | float, ...]:
        return self.values


AnswerValue = Union[SingleValue, MultiValue]


@dataclass(frozen=True)
class Answer:
    """One user's answer to one question within a matching round."""

    question_id: int
    value: AnswerValue

    def selections(self) -> tuple[str | float, ...]:
        return self.value.selections()


@dataclass(frozen=True)
class CandidateMovie:
    """A movie record from the external catalogue, used as scoring input.

    Attributes:
        id: Catalogue (TMDB) id.
        title: Display title.
        genre_ids: Catalogue genre ids.
        vote_average: Mean vote on a 0-10 scale.
        release_date: ``YYYY-MM-DD`` string; may be empty.
        runtime: Runtime in minutes, ``None`` when the catalogue omitted it.
        original_language: ISO 639-1 code.
        poster_path: Catalogue poster path, carried through untouched.
        overview: Synopsis, carried through untouched.
        popularity: Catalogue popularity, used only for local sorting.
        provider_ids: Watch providers offering the movie, where known.
    """

    id: int
    title: str
    genre_ids: tuple[int, ...] = ()
    vote_average: float = 0.0
    release_date: str = ""
    runtime: int | None = None
    original_language: str = ""
    poster_path: str | None = None
    overview: str = ""
    popularity: float = 0.0
    provider_ids: tuple[int, ...] = ()

    @property
    def release_year(self) -> int | None:
        """The four-digit release year, or ``None`` if the date is unusable."""
        try:
            return int(self.release_date[:4])
        except (TypeError, ValueError):
            return None

    def poster_url(self, size: str = "w500") -> str | None:
        """Return the poster image URL at *size*, or ``None`` without a poster."""
        if not self.poster_path:
            return None
        return f"{config.TMDB_IMAGE_BASE}/{size}{self.poster_path}"


@dataclass(frozen=True)
class ScoredMovie:
    """A :class:`CandidateMovie` with its compatibility score and rank.

    Attributes:
        movie: The scored catalogue record.
        match_score: Compatibility in ``[0, 1]``.
        rank: 1-based position in the ranked list.
    """

    movie: CandidateMovie
    match_score: float
    rank: int

    def to_record(self) -> dict[str, Any]:
        """Flatten into the row shape a caller persists for the round."""
        return {
            "tmdb_id": self.movie.id,
            "title": self.movie.title,
            "poster_path": self.movie.poster_path or "",
            "overview": self.movie.overview,
            "release_year": self.movie.release_year,
            "genres": [str(g) for g in self.movie.genre_ids],
            "vote_average": self.movie.vote_average,
            "match_score": self.match_score,
            "rank": self.rank,
        }


CatalogFilter = dict[str, Union[str, int, float]]


@dataclass
class RoundResult:
    """Outcome of one matching round.

    Attributes:
        catalog_filter: The synthesized filter sent to the catalogue.
        ranked: Every candidate, scored and ranked.
        selected: The top-N slice of *ranked* offered to the pair.
        used_fallback: Whether the broadened catalogue query ran.
    """

    catalog_filter: CatalogFilter
    ranked: list[ScoredMovie] = field(default_factory=list)
    selected: list[ScoredMovie] = field(default_factory=list)
    used_fallback: bool = False
