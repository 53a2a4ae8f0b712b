"""LangGraph workflow and state for generating one question."""

from .state import GenerationState, create_initial_state
from .workflow import compile_workflow, create_generation_workflow

__all__ = [
    "GenerationState",
    "create_initial_state",
    "compile_workflow",
    "create_generation_workflow",
]
