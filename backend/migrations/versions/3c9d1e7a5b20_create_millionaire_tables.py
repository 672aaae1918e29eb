"""create user, question, game and game_question tables

Revision ID: 3c9d1e7a5b20
Revises:
Create Date: 2026-10-19 00:00:00
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3c9d1e7a5b20'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'user',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=64), nullable=False),
        sa.Column('email', sa.String(length=120), nullable=False),
        sa.Column('balance', sa.Integer(), nullable=False, server_default='0'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_user_email', 'user', ['email'], unique=True)

    op.create_table(
        'question',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('text', sa.Text(), nullable=False),
        sa.Column('level', sa.Integer(), nullable=False),
        sa.Column('answer1', sa.Text(), nullable=False),
        sa.Column('answer2', sa.Text(), nullable=False),
        sa.Column('answer3', sa.Text(), nullable=False),
        sa.Column('answer4', sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_question_level', 'question', ['level'], unique=False)

    op.create_table(
        'game',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('current_level', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_failed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('prize', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('finished_at', sa.DateTime(), nullable=True),
        sa.Column('fifty_fifty_used', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('audience_help_used', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('friend_call_used', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.ForeignKeyConstraint(['user_id'], ['user.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_game_user_id', 'game', ['user_id'], unique=False)

    op.create_table(
        'game_question',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('game_id', sa.Integer(), nullable=False),
        sa.Column('question_id', sa.Integer(), nullable=False),
        sa.Column('a', sa.Integer(), nullable=False),
        sa.Column('b', sa.Integer(), nullable=False),
        sa.Column('c', sa.Integer(), nullable=False),
        sa.Column('d', sa.Integer(), nullable=False),
        sa.Column('help_hash', sa.JSON(), nullable=False),
        sa.ForeignKeyConstraint(['game_id'], ['game.id']),
        sa.ForeignKeyConstraint(['question_id'], ['question.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_game_question_game_id', 'game_question', ['game_id'], unique=False)


def downgrade():
    op.drop_index('ix_game_question_game_id', table_name='game_question')
    op.drop_table('game_question')
    op.drop_index('ix_game_user_id', table_name='game')
    op.drop_table('game')
    op.drop_index('ix_question_level', table_name='question')
    op.drop_table('question')
    op.drop_index('ix_user_email', table_name='user')
    op.drop_table('user')
