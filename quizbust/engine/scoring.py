"""Wager arithmetic."""

from quizbust.models.session import MIN_WAGER, WAGER_CAP, WAGER_STEP


def potential_win(wager: int, difficulty: int) -> int:
    """Amount won on a correct answer."""
    return wager * difficulty


def potential_loss(wager: int, difficulty: int) -> int:
    """Amount lost on a wrong answer. Always equal to potential_win."""
    return wager * difficulty


def compute_max_wager(balance: int) -> int:
    """Largest allowed wager: the balance rounded down to 10, capped at 1000."""
    return min(WAGER_CAP, (balance // WAGER_STEP) * WAGER_STEP)


def default_wager(max_wager: int, preferred: int = 100) -> int:
    """Starting wager for a new question, kept on the 10-step grid."""
    return max(MIN_WAGER, min(preferred, max_wager))


def settle(balance: int, wager: int, difficulty: int, is_correct: bool) -> int:
    """
    Apply a wager outcome to a balance.

    Args:
        balance: Balance before the answer
        wager: Amount wagered
        difficulty: Difficulty multiplier
        is_correct: Whether the answer was right

    Returns:
        New balance, never below zero
    """
    if is_correct:
        return balance + potential_win(wager, difficulty)
    return max(0, balance - potential_loss(wager, difficulty))
