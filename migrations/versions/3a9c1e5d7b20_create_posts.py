"""create_posts

Revision ID: 3a9c1e5d7b20
Revises:
Create Date: 2026-10-19 09:12:04.118230

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '3a9c1e5d7b20'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # gen_random_uuid() lives in pgcrypto before PostgreSQL 13
    op.execute("CREATE EXTENSION IF NOT EXISTS pgcrypto")

    op.create_table('posts',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False, server_default=sa.text('gen_random_uuid()')),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('content', sa.Text(), nullable=False, server_default=''),
        sa.Column('published', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.Column('updated_at', sa.TIMESTAMP(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('char_length(title) BETWEEN 1 AND 200', name='posts_title_length')
    )

    op.create_index('posts_created_at_idx', 'posts', ['created_at'], unique=False)


def downgrade() -> None:
    op.drop_index('posts_created_at_idx', table_name='posts')
    op.drop_table('posts')
