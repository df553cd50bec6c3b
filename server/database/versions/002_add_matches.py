"""add timed matches

Revision ID: 002
Revises: 001
Create Date: 2025-09-20 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '002'
down_revision = '001'
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Completed matches with their duration, for the best-time leaderboard
    op.create_table('matches',
        sa.Column('match_id', sa.String(36), primary_key=True),
        sa.Column('player_id', sa.String(36), sa.ForeignKey('players.player_id'), nullable=False),
        sa.Column('difficulty', sa.String(50), nullable=False),
        sa.Column('duration_ms', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_matches_player_id', 'matches', ['player_id'])


def downgrade() -> None:
    op.drop_index('ix_matches_player_id', table_name='matches')
    op.drop_table('matches')
