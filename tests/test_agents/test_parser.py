"""Tests for the reply parser."""

import pytest

from quizbust.agents.parser import (
    parse_leading_int,
    parse_quiz_response,
    parse_quiz_response_or_raise,
    strip_code_fence,
)
from quizbust.errors import ParseError


class TestDelimitedReplies:
    """Test the semicolon-delimited reply format."""

    def test_parses_science_reply(self):
        """Test the H2O example."""
        question = parse_quiz_response("Science;3;What is H2O?;Water;Salt;Sugar;Oil;1")

        assert question is not None
        assert question.category == "Science"
        assert question.difficulty == 3
        assert question.question_text == "What is H2O?"
        assert question.choices == ["Water", "Salt", "Sugar", "Oil"]
        assert question.correct_index == 0

    def test_parses_math_reply(self):
        """Test the 2+2 example."""
        question = parse_quiz_response("Math;2;2+2=?;3;4;5;6;2")

        assert question is not None
        assert question.correct_index == 1
        assert len(question.choices) == 4

    @pytest.mark.parametrize(
        "correct_field, expected_index",
        [("4", 3), ("3.", 2), ("**2**", 1), (" 1\n", 0), ("Answer: 4", 3)],
    )
    def test_strips_decoration_from_correct_number(self, correct_field: str, expected_index: int):
        """Test that non-digits around the answer number are ignored."""
        question = parse_quiz_response(f"Art;1;Who?;A;B;C;D;{correct_field}")

        assert question is not None
        assert question.correct_index == expected_index

    def test_fields_are_stripped(self):
        """Test that whitespace around fields is removed."""
        question = parse_quiz_response(" History ; 4 ; When? ; 1066 ; 1215 ; 1492 ; 1776 ; 1 ")

        assert question is not None
        assert question.category == "History"
        assert question.difficulty == 4
        assert question.choices == ["1066", "1215", "1492", "1776"]

    def test_difficulty_with_suffix(self):
        """Test that '3/5' is read as difficulty 3."""
        question = parse_quiz_response("Art;3/5;Who?;A;B;C;D;1")

        assert question is not None
        assert question.difficulty == 3

    @pytest.mark.parametrize(
        "reply",
        [
            "Science;3;What?;A;B",
            "a;b;c;d;e",
            "Science;3;What?;A;B;C;D;1;extra",
            "no delimiters at all",
        ],
    )
    def test_wrong_field_count_is_unparsable(self, reply: str):
        """Test that anything other than 8 fields fails."""
        assert parse_quiz_response(reply) is None

    def test_non_numeric_difficulty_is_unparsable(self):
        """Test that a non-numeric difficulty fails."""
        assert parse_quiz_response("Science;hard;What?;A;B;C;D;1") is None

    def test_missing_correct_number_is_unparsable(self):
        """Test that an answer field without digits fails."""
        assert parse_quiz_response("Science;3;What?;A;B;C;D;none") is None

    @pytest.mark.parametrize("difficulty", ["0", "6", "-1"])
    def test_out_of_range_difficulty_is_unparsable(self, difficulty: str):
        """Test that difficulty outside 1-5 fails."""
        assert parse_quiz_response(f"Science;{difficulty};What?;A;B;C;D;1") is None

    @pytest.mark.parametrize("correct", ["0", "5", "12"])
    def test_out_of_range_correct_number_is_unparsable(self, correct: str):
        """Test that a correct choice outside 1-4 fails."""
        assert parse_quiz_response(f"Science;3;What?;A;B;C;D;{correct}") is None

    def test_empty_choice_is_unparsable(self):
        """Test that an empty choice fails."""
        assert parse_quiz_response("Science;3;What?;A;;C;D;1") is None

    def test_code_fenced_reply(self):
        """Test that a markdown fence around the record is ignored."""
        question = parse_quiz_response("```\nMath;2;2+2=?;3;4;5;6;2\n```")

        assert question is not None
        assert question.correct_index == 1


class TestJsonReplies:
    """Test the structured JSON reply format."""

    def test_parses_json_reply(self):
        """Test a valid JSON reply."""
        reply = (
            '{"category": "Math", "difficulty": 2, "question": "2+2=?", '
            '"choices": ["3", "4", "5", "6"], "correct_choice": 2}'
        )

        question = parse_quiz_response(reply)

        assert question is not None
        assert question.category == "Math"
        assert question.correct_index == 1

    def test_parses_fenced_json_reply(self):
        """Test a JSON reply inside a ```json fence."""
        reply = (
            '```json\n{"category": "Math", "difficulty": 5, "question": "Hard?", '
            '"choices": ["a", "b", "c", "d"], "correct_choice": 4}\n```'
        )

        question = parse_quiz_response(reply)

        assert question is not None
        assert question.difficulty == 5
        assert question.correct_index == 3

    @pytest.mark.parametrize(
        "reply",
        [
            '{"category": "Math", "difficulty": 2, "question": "?", "choices": ["a", "b", "c"], "correct_choice": 1}',
            '{"category": "Math", "difficulty": 9, "question": "?", "choices": ["a", "b", "c", "d"], "correct_choice": 1}',
            '{"category": "Math", "difficulty": 2, "question": "?", "choices": ["a", "b", "c", "d"], "correct_choice": 0}',
            '{"category": "Math", "difficulty": 2}',
            '{"category": "Math", broken json',
            '{"category": "Math", "difficulty": 2, "question": "?", "choices": ["a", "b", "c", "d"], "correct_choice": true}',
            '{"category": "Math", "difficulty": "3", "question": "?", "choices": ["a", "b", "c", "d"], "correct_choice": "2"}',
            '{"category": "Math", "difficulty": 2.5, "question": "?", "choices": ["a", "b", "c", "d"], "correct_choice": 1}',
            '{"category": "Math", "difficulty": 2, "question": "?", "choices": ["a", "b", "c", 4], "correct_choice": 1}',
        ],
    )
    def test_schema_violations_fail_closed(self, reply: str):
        """Test that any schema violation is unparsable."""
        assert parse_quiz_response(reply) is None


class TestParseOrRaise:
    """Test the raising variant."""

    def test_raises_parse_error_with_reason(self):
        """Test that the reason is reported."""
        with pytest.raises(ParseError, match="Expected 8 fields"):
            parse_quiz_response_or_raise("a;b;c")

    def test_empty_reply_raises(self):
        """Test that an empty reply fails."""
        with pytest.raises(ParseError):
            parse_quiz_response_or_raise("   ")

    def test_non_text_reply_raises(self):
        """Test that a missing reply fails."""
        with pytest.raises(ParseError):
            parse_quiz_response_or_raise(None)


class TestHelpers:
    """Test parser helpers."""

    @pytest.mark.parametrize("value, expected", [("3", 3), (" 4 out of 5", 4), ("2/5", 2)])
    def test_parse_leading_int(self, value: str, expected: int):
        """Test reading the leading integer."""
        assert parse_leading_int(value) == expected

    def test_parse_leading_int_rejects_text(self):
        """Test that text without a leading integer fails."""
        with pytest.raises(ValueError):
            parse_leading_int("three")

    def test_strip_code_fence_leaves_plain_text(self):
        """Test that unfenced text is only stripped."""
        assert strip_code_fence("  a;b  ") == "a;b"
