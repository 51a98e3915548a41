"""Platform scorer: a soft bonus for users with a platform preference."""

from __future__ import annotations

from moviematch.answers import text_selections
from moviematch.models import Answer, CandidateMovie, Question, QuestionCategory
from moviematch.scorers.base import NEUTRAL_SCORE, CategoryScorer
from moviematch.tables import ANY

_PREFERENCE_SCORE = 0.8


class PlatformScorer(CategoryScorer):
    """Advisory score for the platform axis.

    Provider availability is enforced by the catalogue filter, so every
    candidate already satisfies it.  The scorer still contributes 0.8 for a
    user with a concrete platform choice and 0.5 otherwise.
    """

    category = QuestionCategory.PLATFORM

    def score_answer(
        self,
        movie: CandidateMovie,
        answer: Answer,
        question: Question,
    ) -> float:
        if any(selection != ANY for selection in text_selections(answer)):
            return _PREFERENCE_SCORE
        return NEUTRAL_SCORE
