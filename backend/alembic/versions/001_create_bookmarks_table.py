"""Create bookmarks table

Revision ID: 001
Revises: None
Create Date: 2024-01-15 00:00:00.000000+00:00

What:  Creates the `bookmarks` table (id, title, url, description, rating).
How:   Portable column types; id is a 36-char UUID string assigned by the app.

Rollback: downgrade() drops the table entirely (destructive: all data is lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the bookmarks table with its rating range constraint."""
    op.create_table(
        "bookmarks",
        sa.Column(
            "id",
            sa.String(36),
            nullable=False,
            comment="UUID4 assigned on creation, immutable",
        ),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column(
            "url",
            sa.Text(),
            nullable=False,
            comment="Absolute http/https URL",
        ),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("rating", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("rating >= 0 AND rating <= 5", name="ck_bookmarks_rating_range"),
    )


def downgrade() -> None:
    """Drop the bookmarks table (all bookmark data is lost)."""
    op.drop_table("bookmarks")
