"""Pydantic models for the in-memory game session."""

from enum import Enum

from pydantic import BaseModel, Field

from .quiz import QuizQuestion

STARTING_BALANCE = 5000
DEFAULT_WAGER = 100
MIN_WAGER = 10
WAGER_STEP = 10
WAGER_CAP = 1000


class Phase(str, Enum):
    """Stages of a game session."""

    INPUT = "input"
    PREVIEW = "preview"
    WAGERING = "wagering"
    QUESTION = "question"
    RESULT = "result"
    GAME_OVER = "game_over"


class RoundOutcome(BaseModel):
    """Settlement of one answered question."""

    selected_index: int = Field(..., ge=0, le=3)
    correct_index: int = Field(..., ge=0, le=3)
    is_correct: bool
    wager: int = Field(..., ge=0)
    difficulty: int = Field(..., ge=1, le=5)
    delta: int = Field(..., ge=0, description="wager x difficulty")
    balance_before: int = Field(..., ge=0)
    balance_after: int = Field(..., ge=0)

    model_config = {"frozen": True}


class SessionState(BaseModel):
    """One player's game session.

    Instances are immutable; every transition returns a new copy.
    """

    balance: int = Field(default=STARTING_BALANCE, ge=0)
    wager: int = Field(default=DEFAULT_WAGER, ge=0)
    max_wager: int = Field(default=DEFAULT_WAGER, ge=0)
    phase: Phase = Field(default=Phase.INPUT)
    subject: str = Field(default="", description="Last accepted subject")
    current_question: QuizQuestion | None = None
    selected_choice: int | None = Field(default=None, ge=0, le=3)
    answered: bool = False
    busy: bool = Field(
        default=False,
        description="A question request is outstanding",
    )
    generation: int = Field(
        default=0,
        ge=0,
        description="Tag of the latest request; replies with another tag are stale",
    )
    message: str | None = Field(
        default=None,
        description="Message to show the player (validation, transport or parse failure)",
    )
    last_outcome: RoundOutcome | None = None

    model_config = {"frozen": True}

    @property
    def is_game_over(self) -> bool:
        """Check whether the player has run out of money."""
        return self.phase == Phase.GAME_OVER

    def evolve(self, **changes) -> "SessionState":
        """Return a copy with the given fields replaced."""
        return self.model_copy(update=changes)
