"""create players and score history

Revision ID: 001
Revises:
Create Date: 2025-09-12 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table('players',
        sa.Column('player_id', sa.String(36), primary_key=True),
        sa.Column('player_name', sa.String(100), nullable=False, server_default='Player'),
        sa.Column('current_score', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('best_score', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('games_played', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('last_seen_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    # One row per submitted score
    op.create_table('game_scores',
        sa.Column('score_id', sa.String(36), primary_key=True),
        sa.Column('player_id', sa.String(36), sa.ForeignKey('players.player_id'), nullable=False),
        sa.Column('score', sa.Integer(), nullable=False),
        sa.Column('game_date', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_game_scores_player_id', 'game_scores', ['player_id'])


def downgrade() -> None:
    op.drop_index('ix_game_scores_player_id', table_name='game_scores')
    op.drop_table('game_scores')
    op.drop_table('players')
