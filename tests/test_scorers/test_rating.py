"""Tests for RatingScorer."""

from __future__ import annotations

import pytest

from moviematch.models import Answer, CandidateMovie, MultiValue, SingleValue
from moviematch.scorers.rating import RatingScorer


@pytest.fixture
def scorer() -> RatingScorer:
    return RatingScorer()


class TestScore:
    def test_meets_threshold(self, scorer, rating_question, action_movie) -> None:
        answer = Answer(5, SingleValue("7"))
        assert scorer.score(action_movie, answer, rating_question) == 1.0

    def test_within_one_point(self, scorer, rating_question, action_movie) -> None:
        answer = Answer(5, SingleValue(8.0))
        assert scorer.score(action_movie, answer, rating_question) == pytest.approx(0.7)

    def test_ratio_below_margin(self, scorer, rating_question, horror_movie) -> None:
        answer = Answer(5, SingleValue("8"))
        assert scorer.score(horror_movie, answer, rating_question) == pytest.approx(5.2 / 8)

    def test_ratio_floors(self, scorer, rating_question) -> None:
        movie = CandidateMovie(id=1, title="Panned", vote_average=0.5)
        answer = Answer(5, SingleValue("8"))
        assert scorer.score(movie, answer, rating_question) == pytest.approx(0.1)

    def test_lowest_selection_used(self, scorer, rating_question, action_movie) -> None:
        answer = Answer(5, MultiValue(("8", "7")))
        assert scorer.score(action_movie, answer, rating_question) == 1.0

    def test_non_numeric_is_neutral(self, scorer, rating_question, action_movie) -> None:
        answer = Answer(5, SingleValue("great"))
        assert scorer.score(action_movie, answer, rating_question) == 0.5

    def test_zero_threshold(self, scorer, rating_question) -> None:
        movie = CandidateMovie(id=1, title="Unrated", vote_average=0.0)
        answer = Answer(5, SingleValue(0.0))
        assert scorer.score(movie, answer, rating_question) == 1.0
