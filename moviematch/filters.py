"""Filter synthesizer: turns two users' answers into one catalogue query.

The filter is a coarse pre-filter, so every rule leans inclusive: where the
two users disagree the broader choice wins, and the fine-grained judgement is
left to :mod:`moviematch.scoring`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Optional, TypeVar

import config
from moviematch.answers import (
    answers_by_question,
    question_for,
    rating_threshold,
    text_selections,
)
from moviematch.models import Answer, CatalogFilter, Question, QuestionCategory
from moviematch.tables import (
    ANY,
    DEFAULT_MIN_VOTE_AVERAGE,
    DEFAULT_SORT,
    ERA_DATE_RANGES,
    RUNTIME_RANGES,
)

logger = logging.getLogger(__name__)

_Rule = Callable[[CatalogFilter, Question, Optional[Answer], Optional[Answer]], None]

# Bound of a bucket range: ISO date strings or runtime minutes.
_T = TypeVar("_T", str, int)


def synthesize_filter(
    answers_a: Sequence[Answer],
    answers_b: Sequence[Answer],
    questions: Sequence[Question],
) -> CatalogFilter:
    """Build the catalogue query for a matching round.

    Starts from a permissive default (``vote_average.gte=5`` sorted by
    popularity) and lets each category present in *questions* write its own
    keys. Missing or malformed answers fall back to permissive defaults; this
    function never raises.

    Args:
        answers_a: First user's answers.
        answers_b: Second user's answers.
        questions: The round's question catalogue.

    Returns:
        A fresh :data:`~moviematch.models.CatalogFilter`.
    """
    catalog_filter: CatalogFilter = {
        "sort_by": DEFAULT_SORT,
        "vote_average.gte": DEFAULT_MIN_VOTE_AVERAGE,
    }
    by_question_a = answers_by_question(answers_a)
    by_question_b = answers_by_question(answers_b)

    for category, rule in _RULES.items():
        question = question_for(questions, category)
        if question is None:
            continue
        rule(
            catalog_filter,
            question,
            by_question_a.get(question.id),
            by_question_b.get(question.id),
        )

    logger.debug("Synthesized catalogue filter: %s", catalog_filter)
    return catalog_filter


def broadened_filter() -> CatalogFilter:
    """Return the unfiltered, popularity-sorted fallback query."""
    return {"sort_by": DEFAULT_SORT, "page": 1}


# ---------------------------------------------------------------------------
# Per-category rules
# ---------------------------------------------------------------------------


def _apply_genre(
    catalog_filter: CatalogFilter,
    question: Question,
    answer_a: Answer | None,
    answer_b: Answer | None,
) -> None:
    genre_ids = _combine_ids(
        _resolved(question, answer_a, "tmdb_genre_id"),
        _resolved(question, answer_b, "tmdb_genre_id"),
    )
    if genre_ids:
        catalog_filter["with_genres"] = ",".join(str(i) for i in genre_ids)


def _apply_rating(
    catalog_filter: CatalogFilter,
    question: Question,
    answer_a: Answer | None,
    answer_b: Answer | None,
) -> None:
    catalog_filter["vote_average.gte"] = min(
        rating_threshold(answer_a), rating_threshold(answer_b)
    )


def _apply_era(
    catalog_filter: CatalogFilter,
    question: Question,
    answer_a: Answer | None,
    answer_b: Answer | None,
) -> None:
    start, end = _union(
        bucket_range(answer_a, ERA_DATE_RANGES), bucket_range(answer_b, ERA_DATE_RANGES)
    )
    catalog_filter["primary_release_date.gte"] = start
    catalog_filter["primary_release_date.lte"] = end


def _apply_length(
    catalog_filter: CatalogFilter,
    question: Question,
    answer_a: Answer | None,
    answer_b: Answer | None,
) -> None:
    low, high = _union(
        bucket_range(answer_a, RUNTIME_RANGES), bucket_range(answer_b, RUNTIME_RANGES)
    )
    full_low, full_high = RUNTIME_RANGES[ANY]
    if low > full_low or high < full_high:
        catalog_filter["with_runtime.gte"] = low
        catalog_filter["with_runtime.lte"] = high


def _apply_platform(
    catalog_filter: CatalogFilter,
    question: Question,
    answer_a: Answer | None,
    answer_b: Answer | None,
) -> None:
    provider_ids = _combine_ids(
        _resolved(question, answer_a, "provider_id"),
        _resolved(question, answer_b, "provider_id"),
    )
    if provider_ids:
        catalog_filter["with_watch_providers"] = "|".join(str(i) for i in provider_ids)
        catalog_filter["watch_region"] = config.WATCH_REGION


# Each rule writes a disjoint set of keys, so order does not matter.
_RULES: dict[QuestionCategory, _Rule] = {
    QuestionCategory.GENRE: _apply_genre,
    QuestionCategory.RATING: _apply_rating,
    QuestionCategory.ERA: _apply_era,
    QuestionCategory.LENGTH: _apply_length,
    QuestionCategory.PLATFORM: _apply_platform,
}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def bucket_range(
    answer: Answer | None, table: Mapping[str, tuple[_T, _T]]
) -> tuple[_T, _T]:
    """Union of the ranges of the known buckets *answer* selects.

    Unanswered, all-unknown, or ``any`` selections yield the full ``any``
    range of *table*.
    """
    buckets = [b for b in text_selections(answer) if b in table]
    if not buckets or ANY in buckets:
        return table[ANY]
    return min(table[b][0] for b in buckets), max(table[b][1] for b in buckets)


def _union(range_a: tuple[_T, _T], range_b: tuple[_T, _T]) -> tuple[_T, _T]:
    return min(range_a[0], range_b[0]), max(range_a[1], range_b[1])


def _resolved(question: Question, answer: Answer | None, attr: str) -> list[int] | None:
    if answer is None:
        return None
    return question.resolve(answer.selections(), attr)


def _combine_ids(ids_a: list[int] | None, ids_b: list[int] | None) -> list[int]:
    """Intersection of both users' ids, falling back to their union.

    ``None`` marks a user who did not answer; the other user's ids are then
    used alone.
    """
    if ids_a is None:
        return list(ids_b or [])
    if ids_b is None:
        return list(ids_a)
    common = [i for i in ids_a if i in ids_b]
    if common:
        return common
    return list(dict.fromkeys(ids_a + ids_b))
