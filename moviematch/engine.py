"""Matching engine: runs one round from two answer sets to a ranked shortlist."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

import config
from moviematch.catalogue import MovieCatalogue
from moviematch.filters import broadened_filter, synthesize_filter
from moviematch.models import Answer, CandidateMovie, CatalogFilter, Question, RoundResult
from moviematch.scoring import rank_movies, select_top

logger = logging.getLogger(__name__)


class MatchingEngine:
    """Orchestrates filter synthesis, catalogue lookup and ranking for a pair.

    Round sequence:

    =====  ==============================================================
    Step   Action
    =====  ==============================================================
    1      Synthesize a catalogue filter from both users' answers
    2      Discover candidates; drop any either user has already seen
    3      Fewer than *min_candidates* left: run the broadened query and
           merge unseen newcomers (de-duplicated by id), up to
           *max_selection* candidates in total
    4      Score and rank every candidate
    5      Select the top ``max(min_selection, min(max_selection, n))``
    =====  ==============================================================

    Callers must only start a round once both answer sets are complete, and
    must not run two rounds for the same pair concurrently; the engine itself
    holds no per-round state.

    Args:
        catalogue: The :class:`~moviematch.catalogue.MovieCatalogue` to query.
        min_candidates: Unseen candidate count below which the broadened
            fallback query runs.
        min_selection: Lower bound of the top-N selection.
        max_selection: Upper bound of the top-N selection.

    Raises:
        ValueError: If the selection bounds are inconsistent.
    """

    def __init__(
        self,
        catalogue: MovieCatalogue,
        min_candidates: int = config.MIN_CANDIDATES,
        min_selection: int = config.MIN_SELECTION,
        max_selection: int = config.MAX_SELECTION,
    ) -> None:
        if min_selection < 1 or max_selection < min_selection:
            raise ValueError(
                f"invalid selection bounds: min={min_selection} max={max_selection}"
            )
        self._catalogue = catalogue
        self._min_candidates = min_candidates
        self._min_selection = min_selection
        self._max_selection = max_selection

    def run_round(
        self,
        answers_a: Sequence[Answer],
        answers_b: Sequence[Answer],
        questions: Sequence[Question],
        seen_ids: Iterable[int] = (),
    ) -> RoundResult:
        """Produce the ranked shortlist for one matching round.

        Args:
            answers_a: First user's complete answers.
            answers_b: Second user's complete answers.
            questions: The round's question catalogue.
            seen_ids: Catalogue ids either user has marked as seen.

        Returns:
            A :class:`~moviematch.models.RoundResult`.  An empty
            ``selected`` list means no movie could be found; callers surface
            that to the pair.
        """
        seen = set(seen_ids)
        catalog_filter = synthesize_filter(answers_a, answers_b, questions)

        candidates = self._unseen(self._discover(catalog_filter), seen)
        used_fallback = False

        if len(candidates) < self._min_candidates:
            used_fallback = True
            candidates = self._fill_from_fallback(candidates, seen)

        ranked = rank_movies(candidates, answers_a, answers_b, questions)
        selected = select_top(ranked, self._min_selection, self._max_selection)

        if not selected:
            logger.info("Matching round found no candidates for filter %s", catalog_filter)
        else:
            logger.info(
                "Matching round ranked %d candidates, selected %d (fallback=%s).",
                len(ranked),
                len(selected),
                used_fallback,
            )
        return RoundResult(
            catalog_filter=catalog_filter,
            ranked=ranked,
            selected=selected,
            used_fallback=used_fallback,
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _discover(self, catalog_filter: CatalogFilter) -> list[CandidateMovie]:
        """Query the catalogue; a failing catalogue counts as no results."""
        try:
            return list(self._catalogue.discover(catalog_filter))
        except Exception:
            logger.exception("Catalogue discover failed for filter %s", catalog_filter)
            return []

    @staticmethod
    def _unseen(movies: Iterable[CandidateMovie], seen: set[int]) -> list[CandidateMovie]:
        """Drop seen movies and repeated ids, keeping catalogue order."""
        kept: list[CandidateMovie] = []
        kept_ids: set[int] = set()
        for movie in movies:
            if movie.id in seen or movie.id in kept_ids:
                continue
            kept.append(movie)
            kept_ids.add(movie.id)
        return kept

    def _fill_from_fallback(
        self,
        candidates: list[CandidateMovie],
        seen: set[int],
    ) -> list[CandidateMovie]:
        """Merge broadened-query results after *candidates*.

        Args:
            candidates: Unseen results of the synthesized query.
            seen: Ids to exclude.

        Returns:
            *candidates* followed by unseen newcomers, capped at
            ``max_selection`` entries.
        """
        logger.debug(
            "Only %d unseen candidates; running broadened catalogue query.",
            len(candidates),
        )
        present = {movie.id for movie in candidates}
        additional = self._unseen(self._discover(broadened_filter()), seen | present)
        return (candidates + additional)[: self._max_selection]
