"""Boundary normalisation of raw question and answer records.

Raw answers arrive loosely typed (string, number, list of either, sometimes a
boolean). They are decided into :class:`~moviematch.models.SingleValue` or
:class:`~moviematch.models.MultiValue` once, here, so scorers never have to
re-discriminate the wire shape.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from moviematch.models import (
    Answer,
    AnswerValue,
    MultiValue,
    Option,
    Question,
    QuestionCategory,
    SingleValue,
    selection_key,
)
from moviematch.tables import DEFAULT_RATING_THRESHOLD

logger = logging.getLogger(__name__)


def _scalar(raw: Any) -> str | float | None:
    # bool is an int subclass; reject it explicitly
    if isinstance(raw, bool):
        return None
    if isinstance(raw, str):
        return raw
    if isinstance(raw, (int, float)):
        try:
            return float(raw)
        except OverflowError:
            logger.warning("Ignoring out-of-range numeric answer: %r", raw)
            return None
    return None


def normalize_value(raw: Any) -> AnswerValue | None:
    """Decide the tagged shape of a raw answer value.

    Args:
        raw: The answer as stored on the wire.

    Returns:
        A :class:`SingleValue` or :class:`MultiValue`, or ``None`` when the
        value carries no usable selection.
    """
    if isinstance(raw, (list, tuple)):
        values = tuple(v for v in (_scalar(item) for item in raw) if v is not None)
        if len(values) < len(raw):
            logger.warning(
                "Dropped %d non-scalar item(s) from answer %r", len(raw) - len(values), raw
            )
        return MultiValue(values) if values else None

    value = _scalar(raw)
    if value is None:
        logger.warning("Ignoring answer value of unsupported shape: %r", raw)
        return None
    return SingleValue(value)


def parse_answers(records: Iterable[Mapping[str, Any]]) -> list[Answer]:
    """Build :class:`Answer` objects from ``{question_id, answer}`` records.

    Records with a missing or non-integer question id, or an unusable value,
    are skipped.
    """
    answers: list[Answer] = []
    for record in records:
        if not isinstance(record, Mapping):
            logger.warning("Skipping answer record that is not a mapping: %r", record)
            continue
        question_id = record.get("question_id")
        if isinstance(question_id, bool) or not isinstance(question_id, int):
            logger.warning("Skipping answer with invalid question_id: %r", question_id)
            continue
        value = normalize_value(record.get("answer"))
        if value is None:
            continue
        answers.append(Answer(question_id=question_id, value=value))
    return answers


def _option_id(raw: Any, name: str) -> int | None:
    """Coerce a catalogue id on an option to ``int``; unusable ids become ``None``."""
    if raw is None:
        return None
    if isinstance(raw, bool) or (isinstance(raw, float) and not raw.is_integer()):
        logger.warning("Ignoring option %s %r: not an integer id", name, raw)
        return None
    try:
        return int(raw)
    except (TypeError, ValueError, OverflowError):
        logger.warning("Ignoring option %s %r: not an integer id", name, raw)
        return None


def _parse_option(record: Any) -> Option:
    if not isinstance(record, Mapping):
        raise TypeError(f"option must be a mapping, got {type(record).__name__}")
    return Option(
        value=str(record.get("value", "")),
        label=str(record.get("label", "")),
        tmdb_genre_id=_option_id(record.get("tmdb_genre_id"), "tmdb_genre_id"),
        provider_id=_option_id(record.get("provider_id"), "provider_id"),
    )


def parse_questions(records: Iterable[Mapping[str, Any]]) -> list[Question]:
    """Build :class:`Question` objects sorted by display order.

    Non-mapping records, unknown categories and malformed fields or options
    are skipped.
    """
    questions: list[Question] = []
    for record in records:
        if not isinstance(record, Mapping):
            logger.warning("Skipping question record that is not a mapping: %r", record)
            continue
        try:
            category = QuestionCategory(record.get("category"))
        except ValueError:
            logger.warning(
                "Skipping question %r with unknown category %r",
                record.get("id"),
                record.get("category"),
            )
            continue
        try:
            question = Question(
                id=int(record["id"]),
                category=category,
                options=tuple(_parse_option(o) for o in record.get("options") or ()),
                order=int(record.get("order", 0)),
                text=str(record.get("text", "")),
            )
        except (KeyError, TypeError, ValueError, OverflowError):
            logger.warning("Skipping malformed question record: %r", record)
            continue
        questions.append(question)
    questions.sort(key=lambda q: q.order)
    return questions


def answers_by_question(answers: Iterable[Answer]) -> dict[int, Answer]:
    """Index answers by question id; a later answer replaces an earlier one."""
    return {answer.question_id: answer for answer in answers}


def question_for(
    questions: Sequence[Question], category: QuestionCategory
) -> Question | None:
    """Return the first question of *category* by display order, if any."""
    candidates = [q for q in questions if q.category == category]
    if not candidates:
        return None
    return min(candidates, key=lambda q: q.order)


def numeric_selections(answer: Answer | None) -> list[float]:
    """Return the selections of *answer* that parse as numbers."""
    if answer is None:
        return []
    numbers: list[float] = []
    for selection in answer.selections():
        try:
            number = float(selection)
        except ValueError:
            continue
        if math.isfinite(number):
            numbers.append(number)
    return numbers


def text_selections(answer: Answer | None) -> set[str]:
    """Return the selections of *answer* as lowercase strings."""
    if answer is None:
        return set()
    return {selection_key(s).lower() for s in answer.selections()}


def rating_threshold(answer: Answer | None) -> float:
    """The lowest numeric threshold *answer* selects, defaulting to 6."""
    return min(numeric_selections(answer), default=DEFAULT_RATING_THRESHOLD)
