"""Immutable lookup tables used by the filter synthesizer and the scorers."""

from __future__ import annotations

from types import MappingProxyType

from moviematch.models import QuestionCategory

# Category weights for the compatibility score. Sums to 1.0; the retired
# language category has no entry.
CATEGORY_WEIGHTS = MappingProxyType({
    QuestionCategory.GENRE: 0.30,
    QuestionCategory.MOOD: 0.20,
    QuestionCategory.ERA: 0.15,
    QuestionCategory.LENGTH: 0.10,
    QuestionCategory.RATING: 0.15,
    QuestionCategory.PLATFORM: 0.10,
})

ANY = "any"

# Era bucket -> inclusive release-date window.
ERA_DATE_RANGES = MappingProxyType({
    "classic": ("1950-01-01", "1989-12-31"),
    "90s": ("1990-01-01", "1999-12-31"),
    "2000s": ("2000-01-01", "2009-12-31"),
    "2010s": ("2010-01-01", "2019-12-31"),
    "recent": ("2020-01-01", "2030-12-31"),
    ANY: ("1950-01-01", "2030-12-31"),
})

ERA_YEAR_RANGES = MappingProxyType({
    bucket: (int(start[:4]), int(end[:4]))
    for bucket, (start, end) in ERA_DATE_RANGES.items()
})

# Length bucket -> inclusive runtime window in minutes.
RUNTIME_RANGES = MappingProxyType({
    "short": (0, 89),
    "medium": (90, 120),
    "long": (121, 400),
    ANY: (0, 400),
})

# Runtime window outside a length bucket that still earns partial credit.
RUNTIME_TOLERANCE = MappingProxyType({
    "short": (0, 110),
    "medium": (75, 140),
    "long": (100, 400),
})

DEFAULT_RATING_THRESHOLD = 6.0
DEFAULT_MIN_VOTE_AVERAGE = 5
DEFAULT_SORT = "popularity.desc"

TMDB_GENRE_NAMES = MappingProxyType({
    28: "Action",
    12: "Adventure",
    16: "Animation",
    35: "Comedy",
    80: "Crime",
    99: "Documentary",
    18: "Drama",
    10751: "Family",
    14: "Fantasy",
    36: "History",
    27: "Horror",
    10402: "Music",
    9648: "Mystery",
    10749: "Romance",
    878: "Science Fiction",
    10770: "TV Movie",
    53: "Thriller",
    10752: "War",
    37: "Western",
})

# Mood -> genre names that tend to deliver it.
MOOD_GENRES = MappingProxyType({
    "romantic": frozenset({"Romance", "Drama", "Comedy"}),
    "thrilling": frozenset({"Thriller", "Action", "Crime", "Mystery"}),
    "funny": frozenset({"Comedy", "Animation", "Family"}),
    "epic": frozenset({"Action", "Adventure", "Science Fiction", "Fantasy"}),
    "dark": frozenset({"Horror", "Thriller", "Crime"}),
    "chill": frozenset({"Comedy", "Drama", "Animation", "Family"}),
})
