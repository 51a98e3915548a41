"""Mood scorer: moods map loosely onto genre combinations."""

from __future__ import annotations

from moviematch.answers import text_selections
from moviematch.models import Answer, CandidateMovie, Question, QuestionCategory
from moviematch.scorers.base import NEUTRAL_SCORE, CategoryScorer
from moviematch.tables import MOOD_GENRES, TMDB_GENRE_NAMES

_NO_MATCH_SCORE = 0.15
_MATCH_FLOOR = 0.6
_PER_MATCH = 0.1


class MoodScorer(CategoryScorer):
    """Counts the movie's genres that deliver any of the user's moods.

    The genre sets of every selected mood are pooled; zero matches score
    0.15, otherwise ``min(1.0, 0.6 + 0.1 * matches)``.
    """

    category = QuestionCategory.MOOD

    def score_answer(
        self,
        movie: CandidateMovie,
        answer: Answer,
        question: Question,
    ) -> float:
        moods = [m for m in text_selections(answer) if m in MOOD_GENRES]
        if not moods:
            return NEUTRAL_SCORE

        wanted: set[str] = set()
        for mood in moods:
            wanted.update(MOOD_GENRES[mood])

        matches = sum(
            1 for genre_id in movie.genre_ids if TMDB_GENRE_NAMES.get(genre_id) in wanted
        )
        if matches == 0:
            return _NO_MATCH_SCORE
        return min(1.0, _MATCH_FLOOR + _PER_MATCH * matches)
