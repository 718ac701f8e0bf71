"""create cards, game_sessions and game_moves

Revision ID: 1a2b3c4d5e6f
Revises:
Create Date: 2025-09-02 00:00:00
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '1a2b3c4d5e6f'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)
    existing_tables = set(insp.get_table_names())

    if 'cards' not in existing_tables:
        op.create_table(
            'cards',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('title', sa.String(length=255), nullable=False),
            sa.Column('date_occurred', sa.Date(), nullable=False),
            sa.Column('category', sa.String(length=100), nullable=False),
            sa.Column('difficulty', sa.Integer(), nullable=False),
            sa.Column('description', sa.Text(), nullable=True),
            sa.Column('created_at', sa.DateTime(), nullable=True),
            sa.Column('updated_at', sa.DateTime(), nullable=True),
            sa.UniqueConstraint('title', 'date_occurred', name='uq_cards_title_date'),
            sa.CheckConstraint('difficulty >= 1 AND difficulty <= 5', name='ck_cards_difficulty'),
        )
        op.create_index('ix_cards_date_occurred', 'cards', ['date_occurred'])
        op.create_index('ix_cards_category', 'cards', ['category'])
        op.create_index('ix_cards_difficulty', 'cards', ['difficulty'])

    if 'game_sessions' not in existing_tables:
        op.create_table(
            'game_sessions',
            sa.Column('id', sa.String(length=36), primary_key=True),
            sa.Column('player_name', sa.String(length=100), nullable=False),
            sa.Column('difficulty_level', sa.Integer(), nullable=False),
            sa.Column('card_count', sa.Integer(), nullable=False),
            sa.Column('categories', sa.Text(), nullable=True),
            sa.Column('status', sa.String(length=20), nullable=False, server_default='active'),
            sa.Column('score', sa.Integer(), nullable=False, server_default='0'),
            sa.Column('total_moves', sa.Integer(), nullable=False, server_default='0'),
            sa.Column('correct_moves', sa.Integer(), nullable=False, server_default='0'),
            sa.Column('incorrect_moves', sa.Integer(), nullable=False, server_default='0'),
            sa.Column('hints_used', sa.Integer(), nullable=False, server_default='0'),
            sa.Column('timeline_card_ids', sa.Text(), nullable=True),
            sa.Column('hand_card_ids', sa.Text(), nullable=True),
            sa.Column('discarded_card_ids', sa.Text(), nullable=True),
            sa.Column('start_time', sa.DateTime(), nullable=True),
            sa.Column('end_time', sa.DateTime(), nullable=True),
            sa.Column('duration_seconds', sa.Integer(), nullable=True),
            sa.Column('created_at', sa.DateTime(), nullable=True),
            sa.Column('updated_at', sa.DateTime(), nullable=True),
        )
        op.create_index('ix_game_sessions_player_name', 'game_sessions', ['player_name'])
        op.create_index('ix_game_sessions_status', 'game_sessions', ['status'])
        op.create_index('ix_game_sessions_start_time', 'game_sessions', ['start_time'])

    if 'game_moves' not in existing_tables:
        op.create_table(
            'game_moves',
            sa.Column('id', sa.String(length=36), primary_key=True),
            sa.Column('session_id', sa.String(length=36),
                      sa.ForeignKey('game_sessions.id', ondelete='CASCADE'), nullable=False),
            sa.Column('card_id', sa.Integer(),
                      sa.ForeignKey('cards.id', ondelete='CASCADE'), nullable=False),
            sa.Column('move_number', sa.Integer(), nullable=False),
            sa.Column('proposed_position', sa.Integer(), nullable=False),
            sa.Column('correct_position', sa.Integer(), nullable=False),
            sa.Column('is_correct', sa.Boolean(), nullable=False),
            sa.Column('client_is_correct', sa.Boolean(), nullable=True),
            sa.Column('verdict_mismatch', sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column('attempt_number', sa.Integer(), nullable=False, server_default='1'),
            sa.Column('points', sa.Integer(), nullable=False, server_default='0'),
            sa.Column('time_taken_seconds', sa.Float(), nullable=True),
            sa.Column('feedback', sa.Text(), nullable=True),
            sa.Column('created_at', sa.DateTime(), nullable=True),
        )
        op.create_index('ix_game_moves_session_id', 'game_moves', ['session_id'])
        op.create_index('ix_game_moves_card_id', 'game_moves', ['card_id'])


def downgrade():
    op.drop_table('game_moves')
    op.drop_table('game_sessions')
    op.drop_table('cards')
