"""Data models for QuizBust."""

from .quiz import QuizQuestion, QuizQuestionReply
from .session import (
    DEFAULT_WAGER,
    MIN_WAGER,
    STARTING_BALANCE,
    WAGER_CAP,
    WAGER_STEP,
    Phase,
    RoundOutcome,
    SessionState,
)

__all__ = [
    "QuizQuestion",
    "QuizQuestionReply",
    "Phase",
    "RoundOutcome",
    "SessionState",
    "STARTING_BALANCE",
    "DEFAULT_WAGER",
    "MIN_WAGER",
    "WAGER_STEP",
    "WAGER_CAP",
]
