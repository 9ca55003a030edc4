"""
Gif Catalog Backend — Gif Record Store
========================================

What:  Owns persistence of Gif records and enforces their data rules.
Why:   Keeps validation and SQL out of the route handlers; the same rules
       apply no matter who calls the store.
How:   Wraps an async session factory. Each operation opens its own
       session; writes commit on success and roll back on any error.
Who:   Created by `create_app()` and injected into routes via Depends().

Data Rules:
    - name and url are required, may not be blank, and must fit their columns
    - likes, when given, is within 0..2**31-1 (32-bit INTEGER)
    - name is unique (checked up front, and enforced by a unique index so a
      racing insert is still rejected at commit time)
    - likes defaults to DEFAULT_LIKES when absent or null

Design Decision:
    The store is an explicit object rather than a module-level singleton.
    Tests build one per database; the app keeps one on `app.state`.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, List, Mapping, Tuple, Union

from pydantic import ValidationError as SchemaError
from sqlalchemy import func, select, text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from gif_catalog.exceptions import DatabaseError, NotFoundError, ValidationError
from gif_catalog.models.gif import (
    DEFAULT_LIKES,
    LIKES_MAX,
    LIKES_MIN,
    NAME_MAX_LENGTH,
    URL_MAX_LENGTH,
    Gif,
)
from gif_catalog.schemas.gif import GifCreate

logger = logging.getLogger(__name__)

NAME_TAKEN = "Name has already been taken"

# Messages for mapping values of the wrong type
TYPE_MESSAGES = {
    "name": "Name is invalid",
    "url": "Url is invalid",
    "likes": "Likes is not a number",
}


def _is_blank(value) -> bool:
    return value is None or not str(value).strip()


def _coerce(fields: Mapping) -> GifCreate:
    """Build a GifCreate from a plain mapping, reporting bad types as ValidationError."""
    try:
        return GifCreate.model_validate(dict(fields))
    except SchemaError as e:
        failed = []
        for error in e.errors():
            field = str(error["loc"][0]) if error["loc"] else "gif"
            if field not in failed:
                failed.append(field)
        errors = [TYPE_MESSAGES.get(field, f"{field.capitalize()} is invalid") for field in failed]
        raise ValidationError(errors=errors, fields=failed) from e


def _check_fields(fields: GifCreate) -> Tuple[List[str], List[str]]:
    """
    Presence, length and range rules, in the order they are reported.

    Returns (messages, failed field names). The uniqueness rule needs the
    database and is checked separately.
    """
    errors: List[str] = []
    failed: List[str] = []

    if _is_blank(fields.name):
        errors.append("Name can't be blank")
        failed.append("name")
    elif len(fields.name) > NAME_MAX_LENGTH:
        errors.append(f"Name is too long (maximum is {NAME_MAX_LENGTH} characters)")
        failed.append("name")

    if _is_blank(fields.url):
        errors.append("Url can't be blank")
        failed.append("url")
    elif len(fields.url) > URL_MAX_LENGTH:
        errors.append(f"Url is too long (maximum is {URL_MAX_LENGTH} characters)")
        failed.append("url")

    if fields.likes is not None:
        if fields.likes < LIKES_MIN:
            errors.append(f"Likes must be greater than or equal to {LIKES_MIN}")
            failed.append("likes")
        elif fields.likes > LIKES_MAX:
            errors.append(f"Likes must be less than or equal to {LIKES_MAX}")
            failed.append("likes")

    return errors, failed


class GifStore:
    """
    Persistence and validation layer for Gif entities.

    Responsibilities:
        - list():       every gif, most liked first
        - create():     validate, default likes, persist
        - get_by_id():  single lookup with not-found handling
        - count():      number of stored gifs
        - ping():       cheap connectivity probe for /health
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    @asynccontextmanager
    async def _session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Session scoped to one store operation.

        Commits if the block finishes, rolls back on any exception and
        re-raises it, always closes.
        """
        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def list(self) -> List[Gif]:
        """
        All gifs ordered by likes descending.

        Ties keep insertion order (id ascending) so the listing is stable
        between calls. No pagination: the full set is returned.
        """
        try:
            async with self._session() as session:
                result = await session.execute(
                    select(Gif).order_by(Gif.likes.desc(), Gif.id.asc())
                )
                return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error listing gifs: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve gifs. Please try again.",
                context={"error_type": type(e).__name__},
            )

    async def create(self, fields: Union[GifCreate, Mapping]) -> Gif:
        """
        Validate and persist a new gif.

        Args:
            fields: GifCreate or a mapping with `name`, `url` and optional
                    `likes`. Other keys are ignored.

        Returns:
            The stored Gif with its assigned id.

        Raises:
            ValidationError: wrong type, blank or too long name/url, likes out
                             of range, or duplicate name. Nothing is written.
            DatabaseError:   any other database failure.
        """
        if not isinstance(fields, GifCreate):
            fields = _coerce(fields)

        errors, failed = _check_fields(fields)

        likes = DEFAULT_LIKES if fields.likes is None else fields.likes

        try:
            async with self._session() as session:
                if "name" not in failed and await self._name_taken(session, fields.name):
                    errors.append(NAME_TAKEN)
                    failed.append("name")

                if errors:
                    raise ValidationError(errors=errors, fields=failed)

                gif = Gif(name=fields.name, url=fields.url, likes=likes)
                session.add(gif)
                # Flush inside the transaction so the id is assigned before commit
                await session.flush()

            logger.info("Gif created: id=%s name=%r likes=%d", gif.id, gif.name, gif.likes)
            return gif

        except ValidationError:
            raise
        except IntegrityError as e:
            # Another request inserted the same name between check and commit
            logger.warning("Unique constraint rejected gif name %r: %s", fields.name, str(e))
            raise ValidationError(errors=[NAME_TAKEN], fields=["name"])
        except SQLAlchemyError as e:
            logger.error("Database error creating gif: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not save the gif. Please try again.",
                context={"error_type": type(e).__name__},
            )

    async def get_by_id(self, gif_id: int) -> Gif:
        """
        Fetch one gif by id.

        Raises:
            NotFoundError: no gif has this id (→ 404)
            DatabaseError: query execution failed (→ 500)
        """
        try:
            async with self._session() as session:
                gif = await session.get(Gif, gif_id)
        except SQLAlchemyError as e:
            logger.error("Database error fetching gif %s: %s", gif_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the gif. Please try again.",
                context={"gif_id": gif_id},
            )

        if gif is None:
            raise NotFoundError(resource="gif", resource_id=str(gif_id))
        return gif

    async def count(self) -> int:
        try:
            async with self._session() as session:
                result = await session.execute(select(func.count(Gif.id)))
                return result.scalar() or 0
        except SQLAlchemyError as e:
            logger.error("Database error counting gifs: %s", str(e))
            raise DatabaseError(context={"error_type": type(e).__name__})

    async def ping(self) -> None:
        """Run SELECT 1. Lets SQLAlchemy errors propagate to the caller."""
        async with self._session() as session:
            await session.execute(text("SELECT 1"))

    @staticmethod
    async def _name_taken(session: AsyncSession, name: str) -> bool:
        result = await session.execute(select(Gif.id).where(Gif.name == name).limit(1))
        return result.first() is not None
