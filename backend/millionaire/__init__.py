from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
import logging
import click
from config import Config

db = SQLAlchemy()
migrate = Migrate()

DEMO_USERS = [
    ('Vadim', 'vadim@example.com'),
    ('Irina', 'irina@example.com'),
    ('Kostya', 'kostya@example.com'),
]

def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(getattr(logging, str(flask_app.config.get('LOG_LEVEL', 'INFO')).upper()))

    db.init_app(flask_app)
    migrate.init_app(flask_app, db)

    @click.command('db-reset')
    def db_reset_command():
        """Drops, recreates, and seeds the database."""
        from millionaire.models import User
        from millionaire.services.games.seed import generate_questions
        with flask_app.app_context():
            db.drop_all()
            db.create_all()

            # Seed users
            for name, email in DEMO_USERS:
                db.session.add(User(name=name, email=email))

            generate_questions(4)
            db.session.commit()
            print('Database has been reset and seeded!')

    @click.command('seed-questions')
    @click.option('--per-level', default=4, show_default=True, help='Questions to add for each level.')
    def seed_questions_command(per_level):
        """Adds generated questions to every level."""
        from millionaire.services.games.seed import generate_questions
        with flask_app.app_context():
            added = generate_questions(per_level)
            db.session.commit()
            print(f'Added {len(added)} questions.')

    flask_app.cli.add_command(db_reset_command)
    flask_app.cli.add_command(seed_questions_command)

    return flask_app
