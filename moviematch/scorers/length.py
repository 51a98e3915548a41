"""Length scorer: runtime against the user's preferred length buckets."""

from __future__ import annotations

from moviematch.answers import text_selections
from moviematch.models import Answer, CandidateMovie, Question, QuestionCategory
from moviematch.scorers.base import NEUTRAL_SCORE, CategoryScorer
from moviematch.tables import ANY, RUNTIME_RANGES, RUNTIME_TOLERANCE

_TOLERATED_SCORE = 0.5
_MISS_SCORE = 0.2


class LengthScorer(CategoryScorer):
    """Full credit inside a selected bucket, bucket-specific partial credit near it.

    Runtime is often missing from discover results; an unknown runtime
    scores neutral.  Outside every selected bucket, a runtime inside a
    bucket's tolerance window (e.g. up to 110 minutes for ``short``) earns
    0.5, anything else 0.2.
    """

    category = QuestionCategory.LENGTH

    def score_answer(
        self,
        movie: CandidateMovie,
        answer: Answer,
        question: Question,
    ) -> float:
        buckets = [b for b in text_selections(answer) if b in RUNTIME_RANGES]
        runtime = movie.runtime
        if not buckets or runtime is None:
            return NEUTRAL_SCORE
        if ANY in buckets:
            return 1.0

        best = _MISS_SCORE
        for bucket in buckets:
            low, high = RUNTIME_RANGES[bucket]
            if low <= runtime <= high:
                return 1.0
            tolerated_low, tolerated_high = RUNTIME_TOLERANCE[bucket]
            if tolerated_low <= runtime <= tolerated_high:
                best = _TOLERATED_SCORE
        return best
