"""Era scorer: release year against the user's preferred eras."""

from __future__ import annotations

from moviematch.answers import text_selections
from moviematch.models import Answer, CandidateMovie, Question, QuestionCategory
from moviematch.scorers.base import NEUTRAL_SCORE, CategoryScorer
from moviematch.tables import ANY, ERA_YEAR_RANGES

_MIN_SCORE = 0.1
_DECAY_YEARS = 15


class EraScorer(CategoryScorer):
    """Full credit inside any selected era, decaying partial credit outside.

    Outside every selected era the best bucket wins, scored
    ``max(0.1, 1 - distance / 15)`` with *distance* in years to that
    bucket's nearest boundary.  A movie without a usable release year scores
    neutral.
    """

    category = QuestionCategory.ERA

    def score_answer(
        self,
        movie: CandidateMovie,
        answer: Answer,
        question: Question,
    ) -> float:
        buckets = [b for b in text_selections(answer) if b in ERA_YEAR_RANGES]
        year = movie.release_year
        if not buckets or year is None:
            return NEUTRAL_SCORE
        if ANY in buckets:
            return 1.0

        best = _MIN_SCORE
        for bucket in buckets:
            start, end = ERA_YEAR_RANGES[bucket]
            if start <= year <= end:
                return 1.0
            distance = min(abs(year - start), abs(year - end))
            best = max(best, 1.0 - distance / _DECAY_YEARS)
        return best
