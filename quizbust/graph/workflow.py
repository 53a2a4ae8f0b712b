"""LangGraph workflow definition for generating one question."""

import logging
from typing import Any, Callable, Literal

from langgraph.graph import END, StateGraph

from quizbust.agents.parser import parse_quiz_response_or_raise
from quizbust.agents.requester import QuizRequester
from quizbust.errors import QuizBustError
from quizbust.graph.state import GenerationState

logger = logging.getLogger(__name__)


def make_request_node(requester: QuizRequester) -> Callable[[GenerationState], dict[str, Any]]:
    """
    Build the node that fetches the raw reply.

    Args:
        requester: Requester used to reach the model

    Returns:
        Node function for the workflow
    """

    def request_reply(state: GenerationState) -> dict[str, Any]:
        try:
            raw_reply = requester.request(state["subject"])
        except QuizBustError as e:
            logger.info("Request for generation %d failed: %s", state["generation"], e.message)
            return {"raw_reply": None, "error": e.message}
        return {"raw_reply": raw_reply, "error": None}

    return request_reply


def parse_reply(state: GenerationState) -> dict[str, Any]:
    """
    Turn the raw reply into a question.

    Args:
        state: State containing raw_reply

    Returns:
        Dictionary with either question or error set
    """
    try:
        question = parse_quiz_response_or_raise(state["raw_reply"])
    except QuizBustError as e:
        logger.info("Reply for generation %d unparsable: %s", state["generation"], e.message)
        return {
            "question": None,
            "error": "Could not read a question from the model's reply. Please try again.",
        }
    return {"question": question, "error": None}


def should_parse(state: GenerationState) -> Literal["parse", "end"]:
    """
    Skip parsing when the request failed.

    Args:
        state: Current generation state

    Returns:
        "parse" if a reply arrived, "end" otherwise
    """
    if state.get("error") or state.get("raw_reply") is None:
        return "end"
    return "parse"


def create_generation_workflow(requester: QuizRequester) -> StateGraph:
    """
    Create the LangGraph workflow for one question.

    The workflow follows this structure:
    1. Request - Sends the prompt and receives the raw reply
    2. [Conditional] Stop if the request failed
    3. Parse - Validates the reply into a QuizQuestion

    Args:
        requester: Requester used by the request node

    Returns:
        StateGraph ready to compile
    """
    workflow = StateGraph(GenerationState)

    workflow.add_node("request", make_request_node(requester))
    workflow.add_node("parse", parse_reply)

    workflow.set_entry_point("request")

    workflow.add_conditional_edges(
        "request",
        should_parse,
        {
            "parse": "parse",
            "end": END,
        },
    )

    workflow.add_edge("parse", END)

    return workflow


def compile_workflow(requester: QuizRequester):
    """
    Compile the workflow and return it ready for execution.

    Args:
        requester: Requester used by the request node

    Returns:
        Compiled workflow
    """
    workflow = create_generation_workflow(requester)
    return workflow.compile()
