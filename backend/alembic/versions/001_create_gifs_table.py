"""Create gifs table

Revision ID: 001
Revises: None
Create Date: 2024-01-15 00:00:00.000000+00:00

What:  Creates the `gifs` table with a unique index on name.
Rollback: downgrade() drops the table (all gifs are lost).
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
    """Column rationale lives in gif_catalog/models/gif.py."""
    op.create_table(
        "gifs",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column(
            "name",
            sa.String(255),
            nullable=False,
            comment="Display name, unique across all gifs",
        ),
        sa.Column(
            "url",
            sa.String(2048),
            nullable=False,
            comment="Location of the media file",
        ),
        sa.Column(
            "likes",
            sa.Integer(),
            nullable=False,
            server_default=sa.text("0"),
            comment="Like count",
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    # Enforces name uniqueness even when two inserts race
    op.create_index("idx_gifs_name", "gifs", ["name"], unique=True)

    # Serves the only list query: ORDER BY likes DESC
    op.create_index("idx_gifs_likes", "gifs", [sa.text("likes DESC")])


def downgrade() -> None:
    op.drop_index("idx_gifs_likes", table_name="gifs")
    op.drop_index("idx_gifs_name", table_name="gifs")
    op.drop_table("gifs")
