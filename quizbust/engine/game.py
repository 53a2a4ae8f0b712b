"""Game driver - runs the state machine and fetches questions when asked to."""

import logging

from quizbust.agents.requester import QuizRequester
from quizbust.engine.actions import (
    Abandon,
    Action,
    AdjustWager,
    LockWager,
    NextQuestion,
    ProceedToWagering,
    QuestionReceived,
    RequestFailed,
    Restart,
    SelectChoice,
    SubmitAnswer,
    SubmitSubject,
)
from quizbust.engine.transitions import new_session, transition
from quizbust.graph.state import create_initial_state
from quizbust.graph.workflow import compile_workflow
from quizbust.models.session import SessionState

logger = logging.getLogger(__name__)


class QuizGame:
    """One player's game.

    Every player action goes through ``dispatch``. When an action leaves the
    session waiting for a question, the generation workflow is run for that
    generation and its outcome is dispatched back in.
    """

    def __init__(self, requester: QuizRequester, state: SessionState | None = None):
        self.workflow = compile_workflow(requester)
        self.state = state or new_session()

    def dispatch(self, action: Action) -> SessionState:
        """Apply an action and fetch a question if the session now needs one."""
        before = self.state
        self.state = transition(before, action)

        if self.state.busy and self.state.generation != before.generation:
            self._fetch_question(self.state.subject, self.state.generation)
        return self.state

    def _fetch_question(self, subject: str, generation: int) -> None:
        logger.info("Requesting question %d about %r", generation, subject)
        result = self.workflow.invoke(create_initial_state(subject, generation))

        question = result.get("question")
        if question is not None:
            self.state = transition(self.state, QuestionReceived(generation=generation, question=question))
        else:
            message = result.get("error") or "Error fetching response"
            self.state = transition(self.state, RequestFailed(generation=generation, message=message))

    # Player actions

    def submit_subject(self, subject: str) -> SessionState:
        return self.dispatch(SubmitSubject(subject=subject))

    def proceed(self) -> SessionState:
        return self.dispatch(ProceedToWagering())

    def adjust_wager(self, amount: int) -> SessionState:
        return self.dispatch(AdjustWager(amount=amount))

    def lock_wager(self) -> SessionState:
        return self.dispatch(LockWager())

    def select(self, index: int) -> SessionState:
        return self.dispatch(SelectChoice(index=index))

    def submit_answer(self) -> SessionState:
        return self.dispatch(SubmitAnswer())

    def abandon(self) -> SessionState:
        return self.dispatch(Abandon())

    def next_question(self) -> SessionState:
        return self.dispatch(NextQuestion())

    def restart(self) -> SessionState:
        return self.dispatch(Restart())
