"""Rating scorer: vote average against the user's minimum rating."""

from __future__ import annotations

from moviematch.answers import numeric_selections
from moviematch.models import Answer, CandidateMovie, Question, QuestionCategory
from moviematch.scorers.base import NEUTRAL_SCORE, CategoryScorer

_NEAR_MISS_SCORE = 0.7
_NEAR_MISS_MARGIN = 1.0
_MIN_SCORE = 0.1


class RatingScorer(CategoryScorer):
    """Scores a movie's vote average against the lowest threshold selected.

    At or above the threshold scores 1.0, within one point below 0.7, and
    further below ``max(0.1, vote / threshold)``.
    """

    category = QuestionCategory.RATING

    def score_answer(
        self,
        movie: CandidateMovie,
        answer: Answer,
        question: Question,
    ) -> float:
        thresholds = numeric_selections(answer)
        if not thresholds:
            return NEUTRAL_SCORE
        threshold = min(thresholds)

        vote = movie.vote_average
        if vote >= threshold or threshold <= 0:
            return 1.0
        if vote >= threshold - _NEAR_MISS_MARGIN:
            return _NEAR_MISS_SCORE
        return max(_MIN_SCORE, min(1.0, vote / threshold))
