"""Session state machine.

``transition(state, action)`` is a pure function: it never performs I/O and
always returns a SessionState. Requests for questions are signalled by the
returned state being ``busy`` with a new ``generation``; the caller performs
the request and feeds back QuestionReceived or RequestFailed carrying that
generation.

Invalid player input never raises out of ``transition``. It leaves the phase
and balance untouched and sets ``message``.
"""

import logging
from typing import Callable

from quizbust.agents.requester import validate_subject
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
from quizbust.engine.scoring import compute_max_wager, default_wager, potential_win, settle
from quizbust.errors import QuizValidationError
from quizbust.models.quiz import CHOICE_LETTERS
from quizbust.models.session import MIN_WAGER, WAGER_STEP, Phase, RoundOutcome, SessionState

logger = logging.getLogger(__name__)

Handler = Callable[[SessionState, Action], SessionState]


def new_session(generation: int = 0) -> SessionState:
    """Create a session with the starting balance in the input phase."""
    return SessionState(generation=generation)


def reset(state: SessionState) -> SessionState:
    """Discard the session, keeping the generation moving so late replies are ignored."""
    return new_session(generation=state.generation + 1)


def transition(state: SessionState, action: Action) -> SessionState:
    """
    Apply one action to a session.

    Args:
        state: Current session
        action: Action to apply

    Returns:
        The next session state (the same object when the action is ignored)
    """
    handler = _HANDLERS.get(type(action))
    if handler is None:
        raise TypeError(f"Unknown action: {type(action).__name__}")

    try:
        return handler(state, action)
    except QuizValidationError as e:
        logger.debug("%s rejected: %s", type(action).__name__, e.message)
        return state.evolve(message=e.message)


def _ignored(state: SessionState, action: Action) -> SessionState:
    logger.debug("%s ignored in phase %s", type(action).__name__, state.phase.value)
    return state


def _submit_subject(state: SessionState, action: SubmitSubject) -> SessionState:
    if state.phase != Phase.INPUT or state.busy:
        return _ignored(state, action)

    subject = validate_subject(action.subject)
    return state.evolve(
        subject=subject,
        busy=True,
        generation=state.generation + 1,
        message=None,
    )


def _is_current_reply(state: SessionState, generation: int) -> bool:
    if not state.busy or generation != state.generation:
        logger.info(
            "Ignoring stale reply for generation %d (current %d)",
            generation,
            state.generation,
        )
        return False
    return True


def _question_received(state: SessionState, action: QuestionReceived) -> SessionState:
    """
    Install a fresh question and recompute max_wager from the balance.

    Only the first question of a session is shown in Preview; questions
    fetched from Result go straight to Wagering.
    """
    if not _is_current_reply(state, action.generation):
        return state

    max_wager = compute_max_wager(state.balance)
    next_phase = Phase.PREVIEW if state.phase == Phase.INPUT else Phase.WAGERING
    return state.evolve(
        current_question=action.question,
        max_wager=max_wager,
        wager=default_wager(max_wager),
        phase=next_phase,
        busy=False,
        selected_choice=None,
        answered=False,
        last_outcome=None,
        message=None,
    )


def _request_failed(state: SessionState, action: RequestFailed) -> SessionState:
    if not _is_current_reply(state, action.generation):
        return state
    return state.evolve(busy=False, message=action.message)


def _proceed_to_wagering(state: SessionState, action: ProceedToWagering) -> SessionState:
    if state.phase != Phase.PREVIEW:
        return _ignored(state, action)
    return state.evolve(phase=Phase.WAGERING, message=None)


def _adjust_wager(state: SessionState, action: AdjustWager) -> SessionState:
    if state.phase != Phase.WAGERING:
        return _ignored(state, action)

    amount = action.amount
    if amount % WAGER_STEP != 0:
        raise QuizValidationError(f"Wager must be a multiple of ${WAGER_STEP}")
    if amount < MIN_WAGER or amount > state.max_wager:
        raise QuizValidationError(
            f"Wager must be between ${MIN_WAGER} and ${state.max_wager}"
        )
    return state.evolve(wager=amount, message=None)


def _lock_wager(state: SessionState, action: LockWager) -> SessionState:
    if state.phase != Phase.WAGERING:
        return _ignored(state, action)

    if state.wager > state.balance:
        raise QuizValidationError(f"Insufficient funds! You only have ${state.balance}")
    return state.evolve(
        phase=Phase.QUESTION,
        selected_choice=None,
        answered=False,
        message=None,
    )


def _select_choice(state: SessionState, action: SelectChoice) -> SessionState:
    if state.phase != Phase.QUESTION or state.answered:
        return _ignored(state, action)

    if not 0 <= action.index < len(CHOICE_LETTERS):
        raise QuizValidationError("Choose one of A, B, C or D")
    return state.evolve(selected_choice=action.index, message=None)


def _submit_answer(state: SessionState, action: SubmitAnswer) -> SessionState:
    if state.phase != Phase.QUESTION or state.answered:
        return _ignored(state, action)
    if state.selected_choice is None:
        raise QuizValidationError("Select an answer first")

    question = state.current_question
    is_correct = state.selected_choice == question.correct_index
    new_balance = settle(state.balance, state.wager, question.difficulty, is_correct)

    outcome = RoundOutcome(
        selected_index=state.selected_choice,
        correct_index=question.correct_index,
        is_correct=is_correct,
        wager=state.wager,
        difficulty=question.difficulty,
        delta=potential_win(state.wager, question.difficulty),
        balance_before=state.balance,
        balance_after=new_balance,
    )
    logger.info(
        "Answer %s: balance %d -> %d",
        "correct" if is_correct else "wrong",
        state.balance,
        new_balance,
    )
    return state.evolve(
        balance=new_balance,
        answered=True,
        phase=Phase.RESULT,
        last_outcome=outcome,
        message=None,
    )


def _abandon(state: SessionState, action: Abandon) -> SessionState:
    if state.phase != Phase.QUESTION:
        return _ignored(state, action)
    return reset(state)


def _next_question(state: SessionState, action: NextQuestion) -> SessionState:
    if state.phase != Phase.RESULT or state.busy:
        return _ignored(state, action)

    if state.balance == 0:
        return state.evolve(phase=Phase.GAME_OVER, message=None)
    return state.evolve(
        busy=True,
        generation=state.generation + 1,
        selected_choice=None,
        answered=False,
        message=None,
    )


def _restart(state: SessionState, action: Restart) -> SessionState:
    if state.phase != Phase.GAME_OVER:
        return _ignored(state, action)
    return reset(state)


_HANDLERS: dict[type, Handler] = {
    SubmitSubject: _submit_subject,
    QuestionReceived: _question_received,
    RequestFailed: _request_failed,
    ProceedToWagering: _proceed_to_wagering,
    AdjustWager: _adjust_wager,
    LockWager: _lock_wager,
    SelectChoice: _select_choice,
    SubmitAnswer: _submit_answer,
    Abandon: _abandon,
    NextQuestion: _next_question,
    Restart: _restart,
}
