"""Exception types for QuizBust.

Every failure a player can run into is one of these. They all carry a
message that is safe to show to the player.
"""


class QuizBustError(Exception):
    """Base class for all QuizBust errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class QuizValidationError(QuizBustError):
    """Invalid player input: empty subject, bad wager, missing selection."""


class TransportError(QuizBustError):
    """The request for a question failed or returned a non-success status."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ParseError(QuizBustError):
    """The model reply could not be turned into a question."""


class ConfigurationError(QuizBustError):
    """Required configuration (such as the provider API key) is missing."""
