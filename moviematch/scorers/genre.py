"""Genre scorer: overlap between a movie's genres and the user's picks."""

from __future__ import annotations

from moviematch.models import Answer, CandidateMovie, Question, QuestionCategory
from moviematch.scorers.base import NEUTRAL_SCORE, CategoryScorer

_NO_OVERLAP_SCORE = 0.1
_OVERLAP_FLOOR = 0.6


class GenreScorer(CategoryScorer):
    """Scores the share of a movie's genres that the user selected.

    With ``f`` the fraction of the movie's genre ids inside the user's
    selection, any overlap maps to ``0.6 + 0.4 * f`` and no overlap to 0.1.
    A movie with no genre ids counts as no overlap.
    """

    category = QuestionCategory.GENRE

    def score_answer(
        self,
        movie: CandidateMovie,
        answer: Answer,
        question: Question,
    ) -> float:
        selected = set(question.resolve(answer.selections(), "tmdb_genre_id"))
        if not selected:
            return NEUTRAL_SCORE
        if not movie.genre_ids:
            return _NO_OVERLAP_SCORE

        matching = sum(1 for genre_id in movie.genre_ids if genre_id in selected)
        if matching == 0:
            return _NO_OVERLAP_SCORE
        fraction = matching / len(movie.genre_ids)
        return _OVERLAP_FLOOR + (1.0 - _OVERLAP_FLOOR) * fraction
