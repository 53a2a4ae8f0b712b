"""Tests for Pydantic models."""

import pytest
from pydantic import ValidationError

from quizbust.models.quiz import QuizQuestion, QuizQuestionReply
from quizbust.models.session import Phase, SessionState


class TestQuizQuestion:
    """Test QuizQuestion model."""

    def test_create_valid_question(self, science_question: QuizQuestion):
        """Test creating a valid question."""
        assert science_question.category == "Science"
        assert science_question.difficulty == 3
        assert science_question.choices == ["Water", "Salt", "Sugar", "Oil"]
        assert science_question.correct_index == 0

    def test_correct_choice_helpers(self, math_question: QuizQuestion):
        """Test correct_choice and correct_letter."""
        assert math_question.correct_choice == "4"
        assert math_question.correct_letter == "B"

    def test_requires_four_choices(self):
        """Test that exactly four choices are required."""
        with pytest.raises(ValidationError):
            QuizQuestion(
                category="Test",
                difficulty=1,
                question_text="Pick one",
                choices=["a", "b", "c"],
                correct_index=0,
            )

    @pytest.mark.parametrize("correct_index", [-1, 4])
    def test_correct_index_must_be_in_range(self, correct_index: int):
        """Test that correct_index must be 0-3."""
        with pytest.raises(ValidationError):
            QuizQuestion(
                category="Test",
                difficulty=1,
                question_text="Pick one",
                choices=["a", "b", "c", "d"],
                correct_index=correct_index,
            )

    @pytest.mark.parametrize("difficulty", [0, 6])
    def test_difficulty_must_be_in_range(self, difficulty: int):
        """Test that difficulty must be 1-5."""
        with pytest.raises(ValidationError):
            QuizQuestion(
                category="Test",
                difficulty=difficulty,
                question_text="Pick one",
                choices=["a", "b", "c", "d"],
                correct_index=0,
            )

    def test_blank_choice_rejected(self):
        """Test that a whitespace-only choice is rejected."""
        with pytest.raises(ValidationError):
            QuizQuestion(
                category="Test",
                difficulty=1,
                question_text="Pick one",
                choices=["a", "  ", "c", "d"],
                correct_index=0,
            )

    def test_text_is_stripped(self):
        """Test that surrounding whitespace is removed."""
        question = QuizQuestion(
            category=" History ",
            difficulty=2,
            question_text=" When? ",
            choices=[" 1066", "1215 ", "1492", "1776"],
            correct_index=0,
        )

        assert question.category == "History"
        assert question.question_text == "When?"
        assert question.choices[0] == "1066"


class TestQuizQuestionReply:
    """Test the structured reply model."""

    def test_converts_to_zero_based_index(self):
        """Test that correct_choice is 1-based and converted."""
        reply = QuizQuestionReply(
            category="Math",
            difficulty=2,
            question="2+2=?",
            choices=["3", "4", "5", "6"],
            correct_choice=2,
        )

        question = reply.to_question()

        assert question.correct_index == 1
        assert question.question_text == "2+2=?"

    def test_rejects_unknown_keys(self):
        """Test that the schema is closed."""
        with pytest.raises(ValidationError):
            QuizQuestionReply(
                category="Math",
                difficulty=2,
                question="2+2=?",
                choices=["3", "4", "5", "6"],
                correct_choice=2,
                explanation="extra",
            )


class TestSessionState:
    """Test SessionState defaults."""

    def test_defaults(self):
        """Test that a new session starts with 5000 in the input phase."""
        state = SessionState()

        assert state.balance == 5000
        assert state.wager == 100
        assert state.phase == Phase.INPUT
        assert state.current_question is None
        assert state.selected_choice is None
        assert state.busy is False

    def test_evolve_returns_copy(self):
        """Test that evolve does not mutate the original."""
        state = SessionState()
        changed = state.evolve(balance=100)

        assert state.balance == 5000
        assert changed.balance == 100

    def test_state_is_frozen(self):
        """Test that sessions cannot be mutated in place."""
        state = SessionState()

        with pytest.raises(ValidationError):
            state.balance = 0
