import os
import sys
import pytest

# Ensure the backend root (containing the `millionaire` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from millionaire import create_app, db


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    GAME_TIME_LIMIT_MIN = 35
    FRIEND_CALL_ACCURACY = 0.7
    LOG_LEVEL = 'DEBUG'


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        # Ensure models are imported so tables are created
        import millionaire.models  # noqa: F401
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def generate_questions(flask_app):
    """Adds `per_level` questions to each of the 15 levels and commits."""
    from millionaire.services.games.seed import generate_questions as _generate

    def _make(per_level):
        questions = _generate(per_level)
        db.session.commit()
        return questions

    return _make


@pytest.fixture()
def user(flask_app):
    from millionaire.models import User
    u = User(name='Vadim', email='vadim@example.com')
    db.session.add(u)
    db.session.commit()
    return u


@pytest.fixture()
def game_w_questions(user, generate_questions):
    from millionaire.models import Game
    generate_questions(1)
    return Game.create_game_for_user(user)


@pytest.fixture()
def game_question(game_w_questions):
    """First question of a game with the correct answer dealt under `b`."""
    gq = game_w_questions.game_questions[0]
    gq.a, gq.b, gq.c, gq.d = 2, 1, 4, 3
    db.session.commit()
    return gq
