"""
Gif Catalog Backend — Gif SQLAlchemy Model
============================================

What:  ORM model representing the `gifs` table.
Who:   Used by GifStore for persistence and by Alembic for schema management.

Table Design Rationale:
    - Integer primary key: assigned by the database, opaque to API clients
    - name: NOT NULL with a unique index; the index is the final guard for
      the uniqueness rule when two creates race
    - url: NOT NULL, stored as given
    - likes: NOT NULL, defaults to 0 both in Python and on the server

    Index on likes DESC:
        The only list query is "all gifs, most liked first".
"""

from sqlalchemy import Index, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column

from gif_catalog.database import Base

# Single source of truth for the like count of a freshly created gif
DEFAULT_LIKES = 0

# Column limits; GifStore checks them before anything reaches the database
NAME_MAX_LENGTH = 255
URL_MAX_LENGTH = 2048
LIKES_MIN = 0
LIKES_MAX = 2**31 - 1  # 32-bit INTEGER on PostgreSQL


class Gif(Base):
    """
    A named media record.

    Lifecycle:
        Created through GifStore.create() only. Never updated or deleted
        by this application.
    """

    __tablename__ = "gifs"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    name: Mapped[str] = mapped_column(
        String(NAME_MAX_LENGTH),
        nullable=False,
        comment="Display name, unique across all gifs",
    )

    url: Mapped[str] = mapped_column(
        String(URL_MAX_LENGTH),
        nullable=False,
        comment="Location of the media file",
    )

    likes: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=DEFAULT_LIKES,
        server_default=text(str(DEFAULT_LIKES)),
        comment="Like count",
    )

    __table_args__ = (
        Index("idx_gifs_name", "name", unique=True),
        Index("idx_gifs_likes", likes.desc()),
    )

    def __repr__(self) -> str:
        return f"<Gif(id={self.id}, name='{self.name}', likes={self.likes})>"
