"""Level and prize tables shared by the game models."""

QUESTION_LEVELS = range(0, 15)
MAX_LEVEL = QUESTION_LEVELS[-1]

PRIZES = (
    100, 200, 300, 500, 1000,
    2000, 4000, 8000, 16000, 32000,
    64000, 125000, 250000, 500000, 1000000,
)

# Reaching one of these levels guarantees its prize even after a later wrong answer
FIREPROOF_LEVELS = (4, 9, 14)


def prize_for_level(level: int) -> int:
    """Full prize for answering the question at ``level``."""
    if level not in QUESTION_LEVELS:
        raise IndexError(f"no prize for level {level}")
    return PRIZES[level]


def is_fireproof(level: int) -> bool:
    return level in FIREPROOF_LEVELS


def guaranteed_prize(answered_level: int) -> int:
    """Prize kept by a player whose last correct answer was at ``answered_level``.

    Returns 0 when no fireproof level has been passed yet, including
    ``answered_level == -1`` for a game with no correct answers.
    """
    passed = [lvl for lvl in FIREPROOF_LEVELS if lvl <= answered_level]
    return PRIZES[passed[-1]] if passed else 0
