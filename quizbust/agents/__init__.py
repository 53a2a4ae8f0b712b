"""Question requesting and reply parsing."""

from .parser import parse_quiz_response, parse_quiz_response_or_raise
from .requester import (
    ChatModelRequester,
    ProxyRequester,
    QuizRequester,
    build_prompt,
    get_requester,
)

__all__ = [
    "parse_quiz_response",
    "parse_quiz_response_or_raise",
    "build_prompt",
    "get_requester",
    "QuizRequester",
    "ProxyRequester",
    "ChatModelRequester",
]
