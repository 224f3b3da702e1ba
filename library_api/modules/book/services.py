"""Catalog service: create, read, update and delete books."""

from typing import List, cast

from sqlalchemy.exc import NoResultFound
from sqlalchemy.ext.asyncio import AsyncSession

from ...infrastructure.logging import get_logger
from ..common.exceptions import BookNotFoundError
from .crud import book_crud
from .models import BOOK_ID_MAX, BOOK_ID_MIN
from .schemas import BookCreate, BookRead, BookUpdate

logger = get_logger(__name__)


class BookService:
    """Service for managing the shared book catalog.

    Every method performs discrete store operations against the session it
    is given and holds no state between calls. Missing records raise
    ``BookNotFoundError``; payloads arrive already validated by the schemas.
    """

    async def list_books(self, db: AsyncSession) -> List[BookRead]:
        """Return every stored book in store order (no sorting, no paging)."""
        stmt = await book_crud.select()
        result = await db.execute(stmt)
        return [BookRead.model_validate(dict(row)) for row in result.mappings().all()]

    async def get_book(self, book_id: int, db: AsyncSession) -> BookRead:
        """Fetch a book by primary key.

        Raises:
            BookNotFoundError: If no book has ``book_id``.
        """
        if not BOOK_ID_MIN <= book_id <= BOOK_ID_MAX:
            raise BookNotFoundError(book_id)

        row = await book_crud.get(db=db, id=book_id)
        if row is None:
            raise BookNotFoundError(book_id)
        return BookRead.model_validate(row)

    async def create_book(self, book_data: BookCreate, db: AsyncSession) -> BookRead:
        """Persist a new book and return it with its assigned id."""
        book = cast(
            BookRead,
            await book_crud.create(db=db, object=book_data, schema_to_select=BookRead, return_as_model=True),
        )

        logger.info("Book created", extra={"book_id": book.id})
        return book

    async def update_book(self, book_id: int, book_data: BookUpdate, db: AsyncSession) -> BookRead:
        """Overwrite title, author, isbn and published date of an existing book.

        The record keeps its id; unset optional fields are cleared.

        Raises:
            BookNotFoundError: If no book has ``book_id``.
        """
        await self.get_book(book_id, db)

        replacement = book_data.model_dump(include={"title", "author", "isbn", "published_date"})
        try:
            await book_crud.update(db=db, object=replacement, id=book_id)
        except NoResultFound:
            raise BookNotFoundError(book_id)

        logger.info("Book updated", extra={"book_id": book_id})
        return await self.get_book(book_id, db)

    async def delete_book(self, book_id: int, db: AsyncSession) -> BookRead:
        """Remove a book and return it as it was just before removal.

        Raises:
            BookNotFoundError: If no book has ``book_id``.
        """
        book = await self.get_book(book_id, db)

        try:
            await book_crud.delete(db=db, id=book_id)
        except NoResultFound:
            raise BookNotFoundError(book_id)

        logger.info("Book deleted", extra={"book_id": book_id})
        return book
