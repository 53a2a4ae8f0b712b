"""Reply Parser - Turns raw model replies into QuizQuestion objects.

Two reply formats are understood:

- the delimited record
  ``category;difficulty;question;choice1;choice2;choice3;choice4;correct``
  where ``correct`` is the 1-based number of the right choice, and
- a JSON object matching QuizQuestionReply.

Parsing is all-or-nothing: a reply either yields a complete, valid question or
nothing at all.
"""

import logging
import re

from pydantic import ValidationError

from quizbust.errors import ParseError
from quizbust.models.quiz import QuizQuestion, QuizQuestionReply

logger = logging.getLogger(__name__)

FIELD_COUNT = 8

_FENCE_RE = re.compile(r"^```[a-zA-Z]*\s*|\s*```$")
_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


def parse_quiz_response(response: str) -> QuizQuestion | None:
    """
    Parse a raw model reply into a question.

    Args:
        response: Raw reply text from the model

    Returns:
        The parsed QuizQuestion, or None if the reply is unparsable
    """
    try:
        return parse_quiz_response_or_raise(response)
    except ParseError as e:
        logger.info("Unparsable quiz reply: %s", e.message)
        return None


def parse_quiz_response_or_raise(response: str) -> QuizQuestion:
    """
    Parse a raw model reply, raising ParseError with the reason on failure.

    Args:
        response: Raw reply text from the model

    Returns:
        The parsed QuizQuestion

    Raises:
        ParseError: If the reply does not describe a valid question
    """
    if not isinstance(response, str):
        raise ParseError("Reply is not text")

    text = strip_code_fence(response)
    if not text:
        raise ParseError("Reply is empty")

    if text.startswith("{"):
        return parse_json_reply(text)
    return parse_delimited_reply(text)


def parse_delimited_reply(text: str) -> QuizQuestion:
    """
    Parse the semicolon-delimited reply format.

    Args:
        text: Reply text without code fences

    Returns:
        The parsed QuizQuestion

    Raises:
        ParseError: If the record is malformed or violates question invariants
    """
    parts = text.split(";")
    if len(parts) != FIELD_COUNT:
        raise ParseError(f"Expected {FIELD_COUNT} fields, got {len(parts)}")

    category, difficulty_field, question_text, *choices, correct_field = parts

    try:
        difficulty = parse_leading_int(difficulty_field)
        # The model likes to decorate the answer number ("2.", "**2**")
        correct_number = int(re.sub(r"\D", "", correct_field))
    except ValueError as e:
        raise ParseError(f"Non-numeric field: {e}") from e

    try:
        return QuizQuestion(
            category=category,
            difficulty=difficulty,
            question_text=question_text,
            choices=choices,
            correct_index=correct_number - 1,
        )
    except ValidationError as e:
        raise ParseError(f"Invalid question: {e.error_count()} validation error(s)") from e


def parse_json_reply(text: str) -> QuizQuestion:
    """
    Parse the structured JSON reply format. Any schema violation fails.

    Args:
        text: Reply text without code fences

    Returns:
        The parsed QuizQuestion

    Raises:
        ParseError: If the JSON does not match QuizQuestionReply
    """
    try:
        return QuizQuestionReply.model_validate_json(text).to_question()
    except ValidationError as e:
        raise ParseError(f"Reply does not match the question schema: {e.error_count()} error(s)") from e


def parse_leading_int(value: str) -> int:
    """
    Parse the integer at the start of a string ("3", " 3/5", "4 out of 5").

    Raises:
        ValueError: If the string does not start with an integer
    """
    match = _LEADING_INT_RE.match(value)
    if not match:
        raise ValueError(f"{value!r} does not start with an integer")
    return int(match.group(1))


def strip_code_fence(text: str) -> str:
    """Remove surrounding whitespace and a markdown code fence, if any."""
    return _FENCE_RE.sub("", text.strip()).strip()
