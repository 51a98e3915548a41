"""Movie catalogue collaborators: the discover interface and an in-memory provider."""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from typing import Any

import config
from moviematch.models import CandidateMovie, CatalogFilter

logger = logging.getLogger(__name__)


class MovieCatalogue(ABC):
    """The external movie catalogue, seen from a matching round.

    Implementations translate a :data:`~moviematch.models.CatalogFilter`
    into whatever query their backend understands.  They may return fewer
    movies than requested, and may raise on transport failure; the
    :class:`~moviematch.engine.MatchingEngine` absorbs such failures.
    """

    @abstractmethod
    def discover(self, catalog_filter: CatalogFilter) -> list[CandidateMovie]:
        """Return the movies matching *catalog_filter*, in catalogue order."""


def parse_movie(record: Mapping[str, Any]) -> CandidateMovie | None:
    """Build a :class:`CandidateMovie` from a TMDB-style discover record.

    Missing optional fields fall back to empty defaults.

    Returns:
        The movie, or ``None`` if the record has no usable integer ``id``.
    """
    movie_id = record.get("id")
    if isinstance(movie_id, bool) or not isinstance(movie_id, int):
        logger.warning("Skipping movie record without an integer id: %r", movie_id)
        return None

    runtime = record.get("runtime")
    return CandidateMovie(
        id=movie_id,
        title=str(record.get("title") or ""),
        genre_ids=tuple(g for g in record.get("genre_ids") or () if isinstance(g, int)),
        vote_average=_as_float(record.get("vote_average")),
        release_date=str(record.get("release_date") or ""),
        runtime=runtime if isinstance(runtime, int) and runtime > 0 else None,
        original_language=str(record.get("original_language") or ""),
        poster_path=record.get("poster_path") or None,
        overview=str(record.get("overview") or ""),
        popularity=_as_float(record.get("popularity")),
        provider_ids=tuple(
            p for p in record.get("provider_ids") or () if isinstance(p, int)
        ),
    )


def parse_movies(records: Iterable[Mapping[str, Any]]) -> list[CandidateMovie]:
    """Parse every usable record, keeping input order."""
    movies = (parse_movie(record) for record in records)
    return [m for m in movies if m is not None]


class InMemoryMovieCatalogue(MovieCatalogue):
    """Answers discover queries from a local list of movies.

    Mirrors the discover semantics of the remote catalogue closely enough for
    offline rounds and tests: comma-separated genre lists require every
    genre, pipe-separated lists require any; vote, release-date and runtime
    bounds are inclusive; results are sorted as requested and paged.

    All public methods are thread-safe.

    Args:
        movies: Initial catalogue contents.
        page_size: Movies per discover page.
    """

    _SORT_KEYS = {
        "popularity.desc": lambda m: m.popularity,
        "vote_average.desc": lambda m: m.vote_average,
        "primary_release_date.desc": lambda m: m.release_date,
    }

    def __init__(
        self,
        movies: Iterable[CandidateMovie] = (),
        page_size: int = config.CATALOGUE_PAGE_SIZE,
    ) -> None:
        self._lock = threading.RLock()
        self._movies: dict[int, CandidateMovie] = {}
        self._page_size = page_size
        self.replace(movies)

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    def replace(self, movies: Iterable[CandidateMovie]) -> None:
        """Swap in a new catalogue; later duplicates of an id win."""
        new_movies = {movie.id: movie for movie in movies}
        with self._lock:
            self._movies = new_movies
        logger.info("Movie catalogue loaded: %d movies.", len(new_movies))

    def get_movie(self, movie_id: int) -> CandidateMovie | None:
        with self._lock:
            return self._movies.get(movie_id)

    def discover(self, catalog_filter: CatalogFilter) -> list[CandidateMovie]:
        """Return one page of movies matching *catalog_filter*."""
        with self._lock:
            movies = list(self._movies.values())

        matching = [m for m in movies if _matches(m, catalog_filter)]
        sort_key = self._SORT_KEYS.get(str(catalog_filter.get("sort_by", "")))
        if sort_key is not None:
            matching.sort(key=sort_key, reverse=True)

        page = max(1, int(catalog_filter.get("page", 1)))
        start = (page - 1) * self._page_size
        result = matching[start:start + self._page_size]
        logger.debug(
            "Discover matched %d of %d movies; returning %d (page %d).",
            len(matching),
            len(movies),
            len(result),
            page,
        )
        return result


# ---------------------------------------------------------------------------
# Filter evaluation
# ---------------------------------------------------------------------------


def _matches(movie: CandidateMovie, catalog_filter: CatalogFilter) -> bool:
    genres = catalog_filter.get("with_genres")
    if genres and not _id_list_matches(str(genres), movie.genre_ids):
        return False

    providers = catalog_filter.get("with_watch_providers")
    if providers and not _id_list_matches(str(providers), movie.provider_ids):
        return False

    min_vote = catalog_filter.get("vote_average.gte")
    if min_vote is not None and movie.vote_average < float(min_vote):
        return False

    released_after = catalog_filter.get("primary_release_date.gte")
    released_before = catalog_filter.get("primary_release_date.lte")
    if released_after or released_before:
        if not movie.release_date:
            return False
        released = _full_date(movie.release_date)
        if released_after and released < _full_date(str(released_after)):
            return False
        if released_before and released > _full_date(str(released_before)):
            return False

    min_runtime = catalog_filter.get("with_runtime.gte")
    max_runtime = catalog_filter.get("with_runtime.lte")
    if min_runtime is not None or max_runtime is not None:
        # Unknown runtimes pass.
        if movie.runtime is not None:
            if min_runtime is not None and movie.runtime < float(min_runtime):
                return False
            if max_runtime is not None and movie.runtime > float(max_runtime):
                return False

    return True


_DATE_TEMPLATE = "0000-01-01"


def _full_date(value: str) -> str:
    """Pad a partial ISO date (``"2015"``, ``"2015-06"``) to the first day it covers."""
    return value + _DATE_TEMPLATE[len(value):]


def _id_list_matches(spec: str, ids: tuple[int, ...]) -> bool:
    """``"1,2"`` requires every id, ``"1|2"`` requires any."""
    if "|" in spec:
        wanted = _parse_ids(spec.split("|"))
        return any(i in ids for i in wanted)
    wanted = _parse_ids(spec.split(","))
    return all(i in ids for i in wanted)


def _parse_ids(parts: list[str]) -> list[int]:
    ids: list[int] = []
    for part in parts:
        try:
            ids.append(int(part))
        except ValueError:
            logger.warning("Ignoring non-numeric id %r in catalogue filter.", part)
    return ids


def _as_float(value: Any) -> float:
    if isinstance(value, bool):
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0
