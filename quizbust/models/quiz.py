"""Pydantic models for generated quiz questions."""

from pydantic import BaseModel, Field, field_validator

CHOICE_LETTERS = "ABCD"


class QuizQuestion(BaseModel):
    """A single generated multiple-choice question.

    The difficulty doubles as the payout multiplier for wagers.
    """

    category: str = Field(..., min_length=1, description="Short category label")
    difficulty: int = Field(..., ge=1, le=5, description="Difficulty out of 5")
    question_text: str = Field(..., min_length=1, description="The question text")
    choices: list[str] = Field(
        ...,
        min_length=4,
        max_length=4,
        description="Exactly four answer options, in display order",
    )
    correct_index: int = Field(
        ...,
        ge=0,
        le=3,
        description="Zero-based index of the correct choice",
    )

    @field_validator("category", "question_text")
    @classmethod
    def strip_text(cls, v: str) -> str:
        """Strip surrounding whitespace and reject blank values."""
        v = v.strip()
        if not v:
            raise ValueError("Value cannot be blank")
        return v

    @field_validator("choices")
    @classmethod
    def validate_choices(cls, v: list[str]) -> list[str]:
        """Ensure every choice has text."""
        cleaned = [choice.strip() for choice in v]
        for i, choice in enumerate(cleaned):
            if not choice:
                raise ValueError(f"Choice {CHOICE_LETTERS[i]} cannot be empty")
        return cleaned

    @property
    def correct_choice(self) -> str:
        """Text of the correct answer."""
        return self.choices[self.correct_index]

    @property
    def correct_letter(self) -> str:
        """Letter (A-D) of the correct answer."""
        return CHOICE_LETTERS[self.correct_index]

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "example": {
                "category": "Chemistry",
                "difficulty": 3,
                "question_text": "What is H2O?",
                "choices": ["Water", "Salt", "Sugar", "Oil"],
                "correct_index": 0,
            }
        },
    }


# Structured output model for LLM responses


class QuizQuestionReply(BaseModel):
    """JSON reply shape requested from the model in structured mode."""

    category: str = Field(..., description="1-3 word category")
    difficulty: int = Field(..., ge=1, le=5, description="Difficulty out of 5")
    question: str = Field(..., description="The question text")
    choices: list[str] = Field(..., min_length=4, max_length=4)
    correct_choice: int = Field(
        ...,
        ge=1,
        le=4,
        description="1-based number of the correct choice",
    )

    model_config = {"extra": "forbid", "strict": True}

    def to_question(self) -> QuizQuestion:
        """Convert to a QuizQuestion (zero-based correct index)."""
        return QuizQuestion(
            category=self.category,
            difficulty=self.difficulty,
            question_text=self.question,
            choices=self.choices,
            correct_index=self.correct_choice - 1,
        )
