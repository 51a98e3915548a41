"""Compatibility scoring and ranking for a pair of users.

Each active category with a question in the round yields one sub-score per
user.  The two are combined with a geometric mean, so a movie only scores
well on an axis if *both* users would accept it there.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

import config
from moviematch.answers import answers_by_question, question_for
from moviematch.models import (
    ACTIVE_CATEGORIES,
    Answer,
    CandidateMovie,
    Question,
    ScoredMovie,
)
from moviematch.scorers.base import NEUTRAL_SCORE, CategoryScorer
from moviematch.scorers.registry import SCORERS
from moviematch.tables import CATEGORY_WEIGHTS

logger = logging.getLogger(__name__)

# Display curve: raw [0, 1] is stretched into the 55%-98% band.
_CURVE_OFFSET = 0.55
_CURVE_SPAN = 0.43


@dataclass(frozen=True)
class _CategoryPlan:
    """Everything needed to score one category, resolved once per round."""

    scorer: CategoryScorer
    question: Question
    answer_a: Answer | None
    answer_b: Answer | None
    weight: float


def compute_match_score(
    movie: CandidateMovie,
    answers_a: Sequence[Answer],
    answers_b: Sequence[Answer],
    questions: Sequence[Question],
) -> float:
    """Return the pair's compatibility with *movie* in ``[0, 1]``.

    Deterministic: identical inputs always give a bit-identical result.

    Args:
        movie: The candidate to score.
        answers_a: First user's answers.
        answers_b: Second user's answers.
        questions: The round's question catalogue.

    Returns:
        The curved match score, ``0.55 + raw * 0.43``.
    """
    return _score(movie, _plan_round(answers_a, answers_b, questions))


def combine_category_scores(
    scores_a: Sequence[float],
    scores_b: Sequence[float],
    weights: Sequence[float],
) -> float:
    """Weighted mean of per-category geometric means, in ``[0, 1]``.

    Returns :data:`~moviematch.scorers.base.NEUTRAL_SCORE` when no weight is
    given.
    """
    w = np.asarray(weights, dtype=np.float64)
    total_weight = w.sum()
    if w.size == 0 or total_weight <= 0.0:
        return NEUTRAL_SCORE
    combined = np.sqrt(
        np.asarray(scores_a, dtype=np.float64) * np.asarray(scores_b, dtype=np.float64)
    )
    return float(np.dot(combined, w) / total_weight)


def rank_movies(
    movies: Sequence[CandidateMovie],
    answers_a: Sequence[Answer],
    answers_b: Sequence[Answer],
    questions: Sequence[Question],
) -> list[ScoredMovie]:
    """Score every movie and rank them best-first.

    The sort is stable: movies with equal scores keep their input order.
    Ranks are 1-based and dense over the output, whose length always equals
    ``len(movies)``.

    Args:
        movies: Candidates in catalogue fetch order.
        answers_a: First user's answers.
        answers_b: Second user's answers.
        questions: The round's question catalogue.

    Returns:
        One :class:`~moviematch.models.ScoredMovie` per input movie.
    """
    if not movies:
        return []

    plan = _plan_round(answers_a, answers_b, questions)
    scores = np.array([_score(movie, plan) for movie in movies], dtype=np.float64)
    order = np.argsort(-scores, kind="stable")

    ranked = [
        ScoredMovie(movie=movies[index], match_score=float(scores[index]), rank=rank)
        for rank, index in enumerate(order, start=1)
    ]
    logger.debug(
        "Ranked %d movies over %d categories; top score %.3f",
        len(ranked),
        len(plan),
        ranked[0].match_score,
    )
    return ranked


def select_top(
    ranked: Sequence[ScoredMovie],
    minimum: int = config.MIN_SELECTION,
    maximum: int = config.MAX_SELECTION,
) -> list[ScoredMovie]:
    """Take the top ``max(minimum, min(maximum, len(ranked)))`` movies.

    Never returns more movies than *ranked* holds.
    """
    return list(ranked[: max(minimum, min(maximum, len(ranked)))])


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _plan_round(
    answers_a: Sequence[Answer],
    answers_b: Sequence[Answer],
    questions: Sequence[Question],
) -> list[_CategoryPlan]:
    """Resolve the categories that take part in this round's scoring.

    A category takes part when the round has a question for it and at least
    one user answered that question.
    """
    by_question_a = answers_by_question(answers_a)
    by_question_b = answers_by_question(answers_b)

    plan: list[_CategoryPlan] = []
    for category in ACTIVE_CATEGORIES:
        question = question_for(questions, category)
        if question is None:
            continue
        answer_a = by_question_a.get(question.id)
        answer_b = by_question_b.get(question.id)
        if answer_a is None and answer_b is None:
            continue
        plan.append(
            _CategoryPlan(
                scorer=SCORERS[category],
                question=question,
                answer_a=answer_a,
                answer_b=answer_b,
                weight=CATEGORY_WEIGHTS[category],
            )
        )
    return plan


def _score(movie: CandidateMovie, plan: Sequence[_CategoryPlan]) -> float:
    scores_a = [p.scorer.score(movie, p.answer_a, p.question) for p in plan]
    scores_b = [p.scorer.score(movie, p.answer_b, p.question) for p in plan]
    raw = combine_category_scores(scores_a, scores_b, [p.weight for p in plan])
    return min(1.0, max(0.0, _CURVE_OFFSET + raw * _CURVE_SPAN))
