"""Closed dispatch from each active category to its scorer.

The table is checked against :data:`~moviematch.models.ACTIVE_CATEGORIES`
and the weight table at import time, so adding a category without a scorer
or weight fails loudly instead of scoring neutral.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from moviematch.models import ACTIVE_CATEGORIES, QuestionCategory
from moviematch.scorers.base import CategoryScorer
from moviematch.scorers.era import EraScorer
from moviematch.scorers.genre import GenreScorer
from moviematch.scorers.length import LengthScorer
from moviematch.scorers.mood import MoodScorer
from moviematch.scorers.platform import PlatformScorer
from moviematch.scorers.rating import RatingScorer
from moviematch.tables import CATEGORY_WEIGHTS

SCORERS: Mapping[QuestionCategory, CategoryScorer] = MappingProxyType({
    scorer.category: scorer
    for scorer in (
        GenreScorer(),
        MoodScorer(),
        EraScorer(),
        LengthScorer(),
        RatingScorer(),
        PlatformScorer(),
    )
})


def check_exhaustive(
    scorers: Mapping[QuestionCategory, CategoryScorer],
    weights: Mapping[QuestionCategory, float],
) -> None:
    """Raise ``RuntimeError`` unless *scorers* and *weights* cover exactly the active categories."""
    active = set(ACTIVE_CATEGORIES)
    for name, table in (("scorer", scorers), ("weight", weights)):
        missing = active - set(table)
        extra = set(table) - active
        if missing or extra:
            raise RuntimeError(
                f"{name} table mismatch: missing={sorted(missing)} extra={sorted(extra)}"
            )


check_exhaustive(SCORERS, CATEGORY_WEIGHTS)
