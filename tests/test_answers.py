"""Tests for moviematch.answers boundary normalisation."""

from __future__ import annotations

import pytest

from moviematch.answers import (
    answers_by_question,
    normalize_value,
    numeric_selections,
    parse_answers,
    parse_questions,
    question_for,
    rating_threshold,
    text_selections,
)
from moviematch.models import Answer, MultiValue, QuestionCategory, SingleValue


class TestNormalizeValue:
    def test_string(self) -> None:
        assert normalize_value("action") == SingleValue("action")

    def test_int_becomes_float(self) -> None:
        assert normalize_value(7) == SingleValue(7.0)

    def test_list_of_strings(self) -> None:
        assert normalize_value(["action", "comedy"]) == MultiValue(("action", "comedy"))

    def test_list_of_numbers(self) -> None:
        assert normalize_value([7, 8]) == MultiValue((7.0, 8.0))

    def test_non_scalar_items_dropped(self) -> None:
        assert normalize_value(["action", {"x": 1}, None]) == MultiValue(("action",))

    def test_empty_list_is_none(self) -> None:
        assert normalize_value([]) is None

    @pytest.mark.parametrize("raw", [True, False, None, {"a": 1}])
    def test_unsupported_shapes_are_none(self, raw) -> None:
        assert normalize_value(raw) is None


class TestParseAnswers:
    def test_builds_answers(self) -> None:
        answers = parse_answers([
            {"question_id": 1, "answer": "action"},
            {"question_id": 5, "answer": [7, 8]},
        ])
        assert answers == [
            Answer(1, SingleValue("action")),
            Answer(5, MultiValue((7.0, 8.0))),
        ]

    def test_skips_bad_question_ids(self) -> None:
        answers = parse_answers([
            {"question_id": "1", "answer": "action"},
            {"question_id": True, "answer": "action"},
            {"answer": "action"},
        ])
        assert answers == []

    def test_skips_unusable_values(self) -> None:
        assert parse_answers([{"question_id": 1, "answer": True}]) == []

    def test_skips_out_of_range_numbers(self) -> None:
        assert parse_answers([{"question_id": 5, "answer": 10**400}]) == []

    def test_out_of_range_item_dropped_from_list(self) -> None:
        answers = parse_answers([{"question_id": 5, "answer": [10**400, 7]}])
        assert answers == [Answer(5, MultiValue((7.0,)))]

    def test_skips_non_mapping_records(self) -> None:
        answers = parse_answers(["action", None, {"question_id": 1, "answer": "comedy"}])
        assert answers == [Answer(1, SingleValue("comedy"))]


class TestParseQuestions:
    def test_builds_questions_sorted_by_order(self) -> None:
        questions = parse_questions([
            {"id": 2, "category": "mood", "order": 2, "options": [{"value": "dark"}]},
            {
                "id": 1,
                "category": "genre",
                "order": 1,
                "options": [{"value": "action", "label": "Action", "tmdb_genre_id": 28}],
            },
        ])
        assert [q.id for q in questions] == [1, 2]
        assert questions[0].category is QuestionCategory.GENRE
        assert questions[0].options[0].tmdb_genre_id == 28

    def test_keeps_retired_language_category(self) -> None:
        questions = parse_questions([{"id": 7, "category": "language", "options": []}])
        assert questions[0].category is QuestionCategory.LANGUAGE

    def test_skips_unknown_category(self) -> None:
        assert parse_questions([{"id": 1, "category": "vibes"}]) == []

    def test_skips_record_without_id(self) -> None:
        assert parse_questions([{"category": "genre"}]) == []

    def test_skips_non_mapping_records(self) -> None:
        questions = parse_questions(["genre", 7, {"id": 2, "category": "mood"}])
        assert [q.id for q in questions] == [2]

    def test_skips_question_with_non_mapping_option(self) -> None:
        records = [{"id": 1, "category": "genre", "options": ["action"]}]
        assert parse_questions(records) == []

    def test_string_catalogue_ids_coerced_to_int(self) -> None:
        questions = parse_questions([
            {
                "id": 1,
                "category": "genre",
                "options": [{"value": "action", "tmdb_genre_id": "28"}],
            },
            {
                "id": 6,
                "category": "platform",
                "options": [{"value": "netflix", "provider_id": 8.0}],
            },
        ])
        assert questions[0].options[0].tmdb_genre_id == 28
        assert questions[1].options[0].provider_id == 8

    @pytest.mark.parametrize("raw", [True, "drama", 28.5, [28], float("inf")])
    def test_unusable_catalogue_ids_dropped(self, raw) -> None:
        questions = parse_questions([
            {"id": 1, "category": "genre", "options": [{"value": "x", "tmdb_genre_id": raw}]},
        ])
        assert questions[0].options[0].tmdb_genre_id is None


class TestLookupHelpers:
    def test_answers_by_question_last_wins(self) -> None:
        index = answers_by_question([
            Answer(1, SingleValue("action")),
            Answer(1, SingleValue("comedy")),
        ])
        assert index[1].value == SingleValue("comedy")

    def test_question_for_picks_lowest_order(self, genre_question) -> None:
        later = type(genre_question)(id=11, category=QuestionCategory.GENRE, order=9)
        assert question_for([later, genre_question], QuestionCategory.GENRE) is genre_question

    def test_question_for_missing_category(self, genre_question) -> None:
        assert question_for([genre_question], QuestionCategory.ERA) is None

    def test_numeric_selections_skip_text_and_non_finite(self) -> None:
        answer = Answer(5, MultiValue(("7", "great", 8.0, "nan")))
        assert numeric_selections(answer) == [7.0, 8.0]

    def test_text_selections_lowercase(self) -> None:
        answer = Answer(3, MultiValue(("90s", "Recent")))
        assert text_selections(answer) == {"90s", "recent"}


class TestRatingThreshold:
    def test_minimum_of_selections(self) -> None:
        assert rating_threshold(Answer(5, MultiValue((8.0, 7.0)))) == 7.0

    def test_unanswered_defaults_to_six(self) -> None:
        assert rating_threshold(None) == 6.0

    def test_unparseable_defaults_to_six(self) -> None:
        assert rating_threshold(Answer(5, SingleValue("whatever"))) == 6.0
