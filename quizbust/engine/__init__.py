"""Quiz session engine: wagering state machine and game driver."""

from .actions import (
    Abandon,
    Action,
    AdjustWager,
    LockWager,
    NextQuestion,
    ProceedToWagering,
    QuestionReceived,
    RequestFailed,
    Restart,
    SelectChoice,
    SubmitAnswer,
    SubmitSubject,
)
from .game import QuizGame
from .scoring import compute_max_wager, potential_loss, potential_win, settle
from .transitions import new_session, reset, transition

__all__ = [
    "Action",
    "SubmitSubject",
    "QuestionReceived",
    "RequestFailed",
    "ProceedToWagering",
    "AdjustWager",
    "LockWager",
    "SelectChoice",
    "SubmitAnswer",
    "Abandon",
    "NextQuestion",
    "Restart",
    "QuizGame",
    "transition",
    "new_session",
    "reset",
    "compute_max_wager",
    "potential_win",
    "potential_loss",
    "settle",
]
