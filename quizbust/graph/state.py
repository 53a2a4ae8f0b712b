"""State passed between the nodes of the question generation workflow."""

from typing import TypedDict

from quizbust.models.quiz import QuizQuestion


class GenerationState(TypedDict):
    """State for one question request."""

    subject: str
    generation: int
    raw_reply: str | None
    question: QuizQuestion | None
    error: str | None


def create_initial_state(subject: str, generation: int = 0) -> GenerationState:
    """
    Create the starting state for a question request.

    Args:
        subject: Subject the question should be about
        generation: Session generation the request belongs to

    Returns:
        GenerationState with nothing requested yet
    """
    return {
        "subject": subject,
        "generation": generation,
        "raw_reply": None,
        "question": None,
        "error": None,
    }
