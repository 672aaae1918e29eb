import random
from typing import List, Optional

from flask import current_app

from millionaire import db
from millionaire.errors import DataUnavailable
from millionaire.models import Game, GameQuestion, Question, User, commit_session
from .prizes import QUESTION_LEVELS


def pick_question(level: int, rng: random.Random) -> Question:
    """Pick one question of ``level`` uniformly from the pool."""
    query = Question.query.filter_by(level=level)
    count = query.count()
    if count == 0:
        raise DataUnavailable(f"no questions available for level {level}", {'level': level})
    return query.order_by(Question.id).offset(rng.randrange(count)).first()


def shuffled_slots(rng: random.Random) -> List[int]:
    """Storage slots 1..4 in random order, dealt to letters a, b, c, d."""
    slots = [1, 2, 3, 4]
    rng.shuffle(slots)
    return slots


def create_game_for_user(user: User, rng: Optional[random.Random] = None) -> Game:
    """Deal a new game of one question per level to ``user``.

    Questions are picked before the game object exists so a gap in the
    pool leaves nothing behind in the session.
    """
    rng = rng or random.Random()
    questions = [pick_question(level, rng) for level in QUESTION_LEVELS]

    game = Game(user=user)
    for question in questions:
        a, b, c, d = shuffled_slots(rng)
        game.game_questions.append(GameQuestion(question=question, a=a, b=b, c=c, d=d))
    db.session.add(game)
    commit_session()

    current_app.logger.info(f"[new_game] game={game.id} user={user.id} questions={len(game.game_questions)}")
    return game
