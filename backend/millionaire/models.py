from millionaire import db
from millionaire.errors import InvalidState
from millionaire.services.games import help as lifelines
from millionaire.services.games.prizes import (
    MAX_LEVEL,
    QUESTION_LEVELS,
    guaranteed_prize,
    is_fireproof,
    prize_for_level,
)
from flask import current_app
from sqlalchemy.ext.mutable import MutableDict
from sqlalchemy.orm import validates
from datetime import datetime, timedelta, timezone

HELP_TYPES = ('fifty_fifty', 'audience_help', 'friend_call')


def utcnow():
    """Naive UTC timestamp, the form every DateTime column here stores."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def commit_session():
    try:
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise


class User(db.Model):
    __tablename__ = 'user'
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(64), nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=False, index=True)
    balance = db.Column(db.Integer, default=0, nullable=False)
    games = db.relationship('Game', back_populates='user', lazy='dynamic', order_by='Game.created_at.desc()')

    def __init__(self, **kwargs):
        super(User, self).__init__(**kwargs)
        if self.balance is None:
            self.balance = 0

    @classmethod
    def leaderboard(cls, limit=10):
        return cls.query.order_by(cls.balance.desc(), cls.id).limit(limit).all()

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'balance': self.balance,
        }


class Question(db.Model):
    __tablename__ = 'question'
    id = db.Column(db.Integer, primary_key=True)
    text = db.Column(db.Text, nullable=False)
    level = db.Column(db.Integer, nullable=False, index=True)
    # answer1 is always the correct one
    answer1 = db.Column(db.Text, nullable=False)
    answer2 = db.Column(db.Text, nullable=False)
    answer3 = db.Column(db.Text, nullable=False)
    answer4 = db.Column(db.Text, nullable=False)

    @validates('level')
    def validate_level(self, key, level):
        if level not in QUESTION_LEVELS:
            raise ValueError(f"question level must be within {QUESTION_LEVELS.start}..{MAX_LEVEL}, got {level}")
        return level


class GameQuestion(db.Model):
    """One question of one game, with its own shuffle of answers.

    a/b/c/d hold the storage slot (1..4) shown under each letter; slot 1
    is the correct answer. help_hash collects lifeline results keyed by
    help type.
    """
    __tablename__ = 'game_question'
    id = db.Column(db.Integer, primary_key=True)
    game_id = db.Column(db.Integer, db.ForeignKey('game.id'), nullable=False, index=True)
    question_id = db.Column(db.Integer, db.ForeignKey('question.id'), nullable=False)
    a = db.Column(db.Integer, nullable=False)
    b = db.Column(db.Integer, nullable=False)
    c = db.Column(db.Integer, nullable=False)
    d = db.Column(db.Integer, nullable=False)
    help_hash = db.Column(MutableDict.as_mutable(db.JSON), nullable=False, default=dict)

    game = db.relationship('Game', back_populates='game_questions')
    question = db.relationship('Question')

    def __init__(self, **kwargs):
        super(GameQuestion, self).__init__(**kwargs)
        if self.help_hash is None:
            self.help_hash = {}

    @property
    def text(self):
        return self.question.text

    @property
    def level(self):
        return self.question.level

    def variants(self):
        return {letter: getattr(self.question, f'answer{getattr(self, letter)}') for letter in lifelines.LETTERS}

    def correct_answer_key(self):
        return next(letter for letter in lifelines.LETTERS if getattr(self, letter) == 1)

    def answer_correct(self, letter):
        return letter == self.correct_answer_key()

    def add_fifty_fifty(self, rng=None):
        return self._store_help('fifty_fifty', lifelines.fifty_fifty(self.correct_answer_key(), rng=rng))

    def add_audience_help(self, rng=None):
        votes = lifelines.audience_distribution(self._keys_in_play(), self.correct_answer_key(), rng=rng)
        return self._store_help('audience_help', votes)

    def add_friend_call(self, rng=None):
        accuracy = current_app.config.get('FRIEND_CALL_ACCURACY', 0.7)
        message = lifelines.friend_call(self._keys_in_play(), self.correct_answer_key(), accuracy=accuracy, rng=rng)
        return self._store_help('friend_call', message)

    def apply_help(self, help_type, rng=None):
        if help_type not in HELP_TYPES:
            raise ValueError(f"unknown help type: {help_type!r}")
        return getattr(self, f'add_{help_type}')(rng=rng)

    def _keys_in_play(self):
        # after fifty-fifty only the two remaining letters are candidates
        return list(self.help_hash.get('fifty_fifty') or lifelines.LETTERS)

    def _store_help(self, key, value):
        if key in self.help_hash:
            raise InvalidState(f"{key} already used for this question", {'game_question_id': self.id})
        self.help_hash[key] = value
        db.session.add(self)
        commit_session()
        current_app.logger.info(f"[help] game_question={self.id} type={key}")
        return value

    def to_dict(self):
        return {
            'id': self.id,
            'text': self.text,
            'level': self.level,
            'variants': self.variants(),
            'help': dict(self.help_hash),
        }


class Game(db.Model):
    __tablename__ = 'game'
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False, index=True)
    current_level = db.Column(db.Integer, default=0, nullable=False)
    is_failed = db.Column(db.Boolean, default=False, nullable=False)
    prize = db.Column(db.Integer, default=0, nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    finished_at = db.Column(db.DateTime, nullable=True)
    # Lifelines, each usable once per game
    fifty_fifty_used = db.Column(db.Boolean, default=False, nullable=False)
    audience_help_used = db.Column(db.Boolean, default=False, nullable=False)
    friend_call_used = db.Column(db.Boolean, default=False, nullable=False)

    user = db.relationship('User', back_populates='games')
    game_questions = db.relationship(
        'GameQuestion', back_populates='game', order_by='GameQuestion.id', cascade='all, delete-orphan'
    )

    def __init__(self, **kwargs):
        super(Game, self).__init__(**kwargs)
        if self.current_level is None:
            self.current_level = 0
        if self.is_failed is None:
            self.is_failed = False
        if self.prize is None:
            self.prize = 0
        if self.created_at is None:
            self.created_at = utcnow()
        for help_type in HELP_TYPES:
            if getattr(self, f'{help_type}_used') is None:
                setattr(self, f'{help_type}_used', False)

    @classmethod
    def create_game_for_user(cls, user, rng=None):
        from millionaire.services.games.factory import create_game_for_user
        return create_game_for_user(user, rng=rng)

    @classmethod
    def get_for_update(cls, game_id):
        """Load a game with its row locked until the end of the transaction."""
        return cls.query.filter_by(id=game_id).with_for_update().first()

    @classmethod
    def in_progress_for(cls, user):
        return (
            cls.query.filter_by(user_id=user.id, finished_at=None)
            .order_by(cls.created_at.desc())
            .first()
        )

    @staticmethod
    def time_limit():
        return timedelta(minutes=current_app.config.get('GAME_TIME_LIMIT_MIN', 35))

    @property
    def previous_level(self):
        return self.current_level - 1

    @property
    def current_game_question(self):
        if 0 <= self.current_level < len(self.game_questions):
            return self.game_questions[self.current_level]
        return None

    @property
    def previous_game_question(self):
        if 0 <= self.previous_level < len(self.game_questions):
            return self.game_questions[self.previous_level]
        return None

    def finished(self):
        return self.finished_at is not None

    @property
    def status(self):
        """One of in_progress, won, fail, timeout, money. Never stored."""
        if not self.finished():
            return 'in_progress'
        if self.is_failed:
            if (self.finished_at - self.created_at) > self.time_limit():
                return 'timeout'
            return 'fail'
        if self.current_level > MAX_LEVEL:
            return 'won'
        return 'money'

    def time_out(self):
        """Finish an overdue game as failed. Returns True if the game timed out now."""
        if self.finished() or utcnow() - self.created_at <= self.time_limit():
            return False
        self._finish(guaranteed_prize(self.previous_level), failed=True)
        current_app.logger.info(f"[timeout] game={self.id} level={self.current_level} prize={self.prize}")
        return True

    def answer_current_question(self, letter):
        """Submit ``letter`` for the current question.

        Returns True when the answer was correct. A wrong letter, an
        unknown letter and an overdue game all end the game and return
        False.
        """
        if self.finished():
            raise InvalidState('game is already finished', {'game_id': self.id})
        if self.time_out():
            return False

        answered_level = self.current_level
        correct = self.current_game_question.answer_correct(letter)
        current_app.logger.info(f"[answer] game={self.id} level={answered_level} correct={correct}")

        if not correct:
            self._finish(guaranteed_prize(self.previous_level), failed=True)
            return False

        self.current_level += 1
        if answered_level == MAX_LEVEL:
            self._finish(prize_for_level(MAX_LEVEL), failed=False)
        else:
            if is_fireproof(answered_level):
                self.prize = guaranteed_prize(answered_level)
            db.session.add(self)
            commit_session()
        return True

    def take_money(self):
        """Cash out the prize of the last correctly answered level."""
        if self.finished():
            raise InvalidState('game is already finished', {'game_id': self.id})
        if self.current_level == 0:
            raise InvalidState('nothing to take before the first correct answer', {'game_id': self.id})
        if self.time_out():
            return None

        amount = prize_for_level(self.previous_level)
        self._finish(amount, failed=False)
        current_app.logger.info(f"[take_money] game={self.id} prize={amount}")
        return amount

    def use_help(self, help_type, rng=None):
        if help_type not in HELP_TYPES:
            raise ValueError(f"unknown help type: {help_type!r}")
        if self.finished():
            raise InvalidState('game is already finished', {'game_id': self.id})
        if self.time_out():
            raise InvalidState('game ran out of time', {'game_id': self.id})
        flag = f'{help_type}_used'
        if getattr(self, flag):
            raise InvalidState(f"{help_type} already used in this game", {'game_id': self.id})
        question = self.current_game_question
        if help_type in question.help_hash:
            raise InvalidState(f"{help_type} already used for this question", {'game_id': self.id})

        setattr(self, flag, True)
        db.session.add(self)
        # the question's commit persists the flag as well
        return question.apply_help(help_type, rng=rng)

    def _finish(self, amount, failed):
        self.prize = amount
        self.finished_at = utcnow()
        self.is_failed = failed
        # increment in SQL, the in-memory balance may be stale
        User.query.filter_by(id=self.user_id).update(
            {User.balance: User.balance + amount}, synchronize_session=False
        )
        db.session.add(self)
        commit_session()

    def to_dict(self):
        current = None if self.finished() else self.current_game_question
        return {
            'id': self.id,
            'user_id': self.user_id,
            'status': self.status,
            'current_level': self.current_level,
            'prize': self.prize,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'finished_at': self.finished_at.isoformat() if self.finished_at else None,
            'fifty_fifty_used': self.fifty_fifty_used,
            'audience_help_used': self.audience_help_used,
            'friend_call_used': self.friend_call_used,
            'current_question': current.to_dict() if current else None,
        }
