"""QuizBust - a wagering trivia game driven by LLM-generated questions."""

__version__ = "0.1.0"
