"""create user and game_scores tables

Revision ID: a1c3e5f7b9d2
Revises:
Create Date: 2026-10-18 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = 'a1c3e5f7b9d2'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)
    existing_tables = set(insp.get_table_names())

    if 'user' not in existing_tables:
        op.create_table(
            'user',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('username', sa.String(length=64), nullable=False),
            sa.Column('email', sa.String(length=255), nullable=False),
            sa.Column('password_hash', sa.String(length=256), nullable=False),
            sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
            sa.Column('last_login', sa.DateTime(timezone=True), nullable=True),
        )
        op.create_index('ix_user_username', 'user', ['username'], unique=True)
        op.create_index('ix_user_email', 'user', ['email'], unique=True)

    if 'game_scores' not in existing_tables:
        op.create_table(
            'game_scores',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('user_id', sa.Integer(), sa.ForeignKey('user.id'), nullable=False),
            sa.Column('game_type', sa.String(length=32), nullable=False),
            sa.Column('score', sa.BigInteger(), nullable=False),
            sa.Column('played_at', sa.DateTime(timezone=True), nullable=False),
        )
        # recent games per user, and best score per (user, game type)
        op.create_index('ix_game_scores_user_played_at', 'game_scores', ['user_id', 'played_at'])
        op.create_index('ix_game_scores_user_game_type', 'game_scores', ['user_id', 'game_type'])


def downgrade():
    op.drop_index('ix_game_scores_user_game_type', table_name='game_scores')
    op.drop_index('ix_game_scores_user_played_at', table_name='game_scores')
    op.drop_table('game_scores')
    op.drop_index('ix_user_email', table_name='user')
    op.drop_index('ix_user_username', table_name='user')
    op.drop_table('user')
