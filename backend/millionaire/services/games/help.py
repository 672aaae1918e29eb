"""Lifeline generators.

Pure functions over display letters; the caller decides where results are
stored. ``rng`` is any object with the ``random.Random`` interface so tests
can pin the outcome.
"""

import random
from typing import Dict, List, Optional, Sequence

LETTERS = ('a', 'b', 'c', 'd')

FRIENDS = (
    'Vasily Petrovich',
    'Aunt Galya',
    'Professor Ivanov',
    'Cousin Misha',
    'Olga from accounting',
)


def fifty_fifty(correct_key: str, rng: Optional[random.Random] = None) -> List[str]:
    """Correct letter plus one random wrong letter, in alphabetical order."""
    rng = rng or random
    wrong = [k for k in LETTERS if k != correct_key]
    return sorted([correct_key, rng.choice(wrong)])


def audience_distribution(keys: Sequence[str], correct_key: str,
                          rng: Optional[random.Random] = None) -> Dict[str, int]:
    """Percent of audience votes for each letter.

    Every letter in LETTERS is present; letters outside ``keys`` get 0.
    Totals are 100 unless rounding leaves a remainder, which goes to the
    letter with the most votes.
    """
    rng = rng or random
    raw = {k: rng.randint(1, 45) for k in keys}
    # the hall is right most of the time
    if correct_key in raw and rng.random() < 0.8:
        raw[correct_key] += rng.randint(20, 60)

    total = sum(raw.values())
    votes = {k: 0 for k in LETTERS}
    for k, v in raw.items():
        votes[k] = 100 * v // total
    leader = max(raw, key=raw.get)
    votes[leader] += 100 - sum(votes.values())
    return votes


def friend_call(keys: Sequence[str], correct_key: str, accuracy: float = 0.7,
                rng: Optional[random.Random] = None) -> str:
    rng = rng or random
    key = correct_key if rng.random() < accuracy else rng.choice(list(keys))
    return f"{rng.choice(FRIENDS)} believes the answer is option {key.upper()}"
