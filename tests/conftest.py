"""Shared pytest fixtures for all moviematch tests."""

from __future__ import annotations

import pytest

from moviematch.models import CandidateMovie, Option, Question, QuestionCategory

# ---------------------------------------------------------------------------
# Question fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def genre_question() -> Question:
    return Question(
        id=1,
        category=QuestionCategory.GENRE,
        options=(
            Option("action", "Action", tmdb_genre_id=28),
            Option("comedy", "Comedy", tmdb_genre_id=35),
            Option("horror", "Horror", tmdb_genre_id=27),
            Option("drama", "Drama", tmdb_genre_id=18),
            Option("romance", "Romance", tmdb_genre_id=10749),
            Option("scifi", "Sci-Fi", tmdb_genre_id=878),
        ),
        order=1,
    )


@pytest.fixture
def mood_question() -> Question:
    return Question(
        id=2,
        category=QuestionCategory.MOOD,
        options=tuple(
            Option(m, m.title())
            for m in ("romantic", "thrilling", "funny", "epic", "dark", "chill")
        ),
        order=2,
    )


@pytest.fixture
def era_question() -> Question:
    return Question(
        id=3,
        category=QuestionCategory.ERA,
        options=tuple(
            Option(e, e) for e in ("classic", "90s", "2000s", "2010s", "recent", "any")
        ),
        order=3,
    )


@pytest.fixture
def length_question() -> Question:
    return Question(
        id=4,
        category=QuestionCategory.LENGTH,
        options=tuple(Option(b, b.title()) for b in ("short", "medium", "long", "any")),
        order=4,
    )


@pytest.fixture
def rating_question() -> Question:
    return Question(
        id=5,
        category=QuestionCategory.RATING,
        options=(Option("6", "6+"), Option("7", "7+"), Option("8", "8+")),
        order=5,
    )


@pytest.fixture
def platform_question() -> Question:
    return Question(
        id=6,
        category=QuestionCategory.PLATFORM,
        options=(
            Option("netflix", "Netflix", provider_id=8),
            Option("prime", "Prime Video", provider_id=9),
            Option("disney", "Disney+", provider_id=337),
            Option("any", "Anything"),
        ),
        order=6,
    )


@pytest.fixture
def all_questions(
    genre_question,
    mood_question,
    era_question,
    length_question,
    rating_question,
    platform_question,
) -> list[Question]:
    """One question per active category, in display order."""
    return [
        genre_question,
        mood_question,
        era_question,
        length_question,
        rating_question,
        platform_question,
    ]


# ---------------------------------------------------------------------------
# Movie fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def action_movie() -> CandidateMovie:
    return CandidateMovie(
        id=101,
        title="Fast Lane",
        genre_ids=(28, 53),
        vote_average=7.4,
        release_date="2015-06-12",
        runtime=115,
        original_language="en",
        poster_path="/fast.jpg",
        overview="Cars and chases.",
        popularity=90.0,
        provider_ids=(8,),
    )


@pytest.fixture
def romance_movie() -> CandidateMovie:
    return CandidateMovie(
        id=102,
        title="Paris Letters",
        genre_ids=(10749, 18),
        vote_average=6.8,
        release_date="2004-02-14",
        runtime=98,
        original_language="fr",
        popularity=40.0,
        provider_ids=(9,),
    )


@pytest.fixture
def horror_movie() -> CandidateMovie:
    return CandidateMovie(
        id=103,
        title="The Cellar",
        genre_ids=(27,),
        vote_average=5.2,
        release_date="1982-10-31",
        runtime=84,
        original_language="en",
        popularity=25.0,
        provider_ids=(337,),
    )


@pytest.fixture
def comedy_movie() -> CandidateMovie:
    return CandidateMovie(
        id=104,
        title="Office Hours",
        genre_ids=(35,),
        vote_average=6.1,
        release_date="2021-08-20",
        runtime=None,
        original_language="en",
        popularity=60.0,
        provider_ids=(8, 9),
    )


@pytest.fixture
def sample_movies(action_movie, romance_movie, horror_movie, comedy_movie) -> list[CandidateMovie]:
    """Four movies spanning genres, eras, lengths and providers."""
    return [action_movie, romance_movie, horror_movie, comedy_movie]
