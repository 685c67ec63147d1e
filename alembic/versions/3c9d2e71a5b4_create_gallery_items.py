"""create_gallery_items

Revision ID: 3c9d2e71a5b4
Revises:
Create Date: 2026-10-19 10:12:41.508213

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3c9d2e71a5b4'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'gallery_items',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('category', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('image_url', sa.String(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_gallery_items_category'), 'gallery_items', ['category'], unique=False)
    # Sole sort key for display order
    op.create_index(op.f('ix_gallery_items_created_at'), 'gallery_items', ['created_at'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_gallery_items_created_at'), table_name='gallery_items')
    op.drop_index(op.f('ix_gallery_items_category'), table_name='gallery_items')
    op.drop_table('gallery_items')
