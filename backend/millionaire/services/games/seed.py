"""Generated question pool for local databases and tests."""

from typing import List

from millionaire import db
from millionaire.models import Question
from .prizes import QUESTION_LEVELS


def generate_questions(per_level: int) -> List[Question]:
    """Add ``per_level`` questions to every level. The caller commits."""
    start = Question.query.count()
    added = []
    for _ in range(per_level):
        for level in QUESTION_LEVELS:
            num = start + len(added) + 1
            question = Question(
                text=f'Question {num} of level {level}: how much is {num} + {level}?',
                level=level,
                answer1=str(num + level),
                answer2=str(num + level + 1),
                answer3=str(num + level + 2),
                answer4=str(num + level + 3),
            )
            db.session.add(question)
            added.append(question)
    return added
