"""Player and system actions fed into the session state machine."""

from pydantic import BaseModel, Field

from quizbust.models.quiz import QuizQuestion


class Action(BaseModel):
    """Base class for all actions."""

    model_config = {"frozen": True}


class SubmitSubject(Action):
    """Ask for a question about a subject."""

    subject: str


class QuestionReceived(Action):
    """A request finished with a parsed question."""

    generation: int
    question: QuizQuestion


class RequestFailed(Action):
    """A request failed (transport or parse)."""

    generation: int
    message: str


class ProceedToWagering(Action):
    """Leave the preview and start wagering."""


class AdjustWager(Action):
    """Set the wager amount."""

    amount: int


class LockWager(Action):
    """Lock in the wager and show the question."""


class SelectChoice(Action):
    """Select one of the four choices."""

    index: int


class SubmitAnswer(Action):
    """Submit the selected choice."""


class Abandon(Action):
    """Give up on the current question and start over."""


class NextQuestion(Action):
    """Continue after a result."""


class Restart(Action):
    """Start a new game after losing everything."""
