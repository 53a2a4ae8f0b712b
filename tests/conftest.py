"""Shared test fixtures and configuration for pytest."""

import pytest

from quizbust.config.settings import Settings
from quizbust.engine.game import QuizGame
from quizbust.models.quiz import QuizQuestion
from quizbust.models.session import Phase, SessionState

SCIENCE_REPLY = "Science;3;What is H2O?;Water;Salt;Sugar;Oil;1"
MATH_REPLY = "Math;2;2+2=?;3;4;5;6;2"


class FakeRequester:
    """Requester that replays canned replies (or raises canned errors) in order."""

    def __init__(self, *replies):
        self.replies = list(replies)
        self.subjects: list[str] = []

    def request(self, subject: str) -> str:
        self.subjects.append(subject)
        reply = self.replies.pop(0) if len(self.replies) > 1 else self.replies[0]
        if isinstance(reply, Exception):
            raise reply
        return reply


@pytest.fixture
def settings() -> Settings:
    """Settings that do not depend on the environment."""
    return Settings(
        DEEPSEEK_API_KEY="test-key",
        PROVIDER_BASE_URL="https://provider.test/v1",
        MODEL_NAME="deepseek-chat",
        QUIZBUST_PROXY_URL=None,
        _env_file=None,
    )


@pytest.fixture
def math_question() -> QuizQuestion:
    """The 2+2 question, difficulty 2, correct answer B."""
    return QuizQuestion(
        category="Math",
        difficulty=2,
        question_text="2+2=?",
        choices=["3", "4", "5", "6"],
        correct_index=1,
    )


@pytest.fixture
def science_question() -> QuizQuestion:
    """The H2O question, difficulty 3, correct answer A."""
    return QuizQuestion(
        category="Science",
        difficulty=3,
        question_text="What is H2O?",
        choices=["Water", "Salt", "Sugar", "Oil"],
        correct_index=0,
    )


@pytest.fixture
def wagering_state(math_question: QuizQuestion) -> SessionState:
    """A fresh session sitting in the wagering phase with the math question."""
    return SessionState(
        phase=Phase.WAGERING,
        current_question=math_question,
        generation=1,
    )


@pytest.fixture
def question_state(wagering_state: SessionState) -> SessionState:
    """A fresh session showing the math question with a $100 wager."""
    return wagering_state.evolve(phase=Phase.QUESTION)


@pytest.fixture
def math_game() -> QuizGame:
    """A game whose requester always answers with the math question."""
    return QuizGame(FakeRequester(MATH_REPLY))
