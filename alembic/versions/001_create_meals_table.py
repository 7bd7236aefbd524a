"""Create meals table

Revision ID: 001
Revises: None
Create Date: 2024-01-15 00:00:00.000000+00:00

What:  Creates the `meals` table holding every shared recipe.
How:   Plain TEXT columns plus an autoincrement id; the unique constraint on
       slug is what rejects a second meal with the same slug.

Rollback: downgrade() drops the table (all meals are lost).
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "meals",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column(
            "slug",
            sa.Text(),
            nullable=False,
            comment="URL-safe identifier derived from the title",
        ),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("summary", sa.Text(), nullable=False),
        sa.Column("instructions", sa.Text(), nullable=False),
        sa.Column(
            "image",
            sa.Text(),
            nullable=False,
            comment="Public path of the uploaded image, e.g. /images/big-burger-1a2b3c4d.jpg",
        ),
        sa.Column("creator", sa.Text(), nullable=False),
        sa.Column("creator_email", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("slug"),
    )


def downgrade() -> None:
    op.drop_table("meals")
