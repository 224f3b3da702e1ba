"""Book catalog API endpoints.

Every endpoint requires a valid bearer token; the check runs as a
router-level dependency before any database access.
"""

from typing import List

from fastapi import APIRouter, Depends, Request, Response, status

from ....modules.book.schemas import BookCreate, BookRead, BookUpdate
from ....modules.book.services import BookService
from ..dependencies import DbSession, get_book_service, get_current_username

router = APIRouter(
    prefix="/books",
    tags=["Books"],
    dependencies=[Depends(get_current_username)],
    responses={401: {"description": "Missing, invalid or expired bearer token"}},
)


@router.get(
    "",
    summary="List Books",
    description="""
    Returns every book in the catalog.

    No pagination, filtering or sorting is applied; an empty catalog returns
    an empty list.
    """,
    responses={
        200: {"description": "All books"},
    },
)
async def list_books(
    db: DbSession,
    book_service: BookService = Depends(get_book_service),
) -> List[BookRead]:
    """List all books."""
    return await book_service.list_books(db)


@router.get(
    "/{book_id}",
    summary="Get Book",
    description="Retrieves a single book by its ID.",
    responses={
        200: {"description": "The requested book"},
        404: {"description": "Book not found"},
    },
)
async def get_book(
    book_id: int,
    db: DbSession,
    book_service: BookService = Depends(get_book_service),
) -> BookRead:
    """Get a specific book by ID."""
    return await book_service.get_book(book_id, db)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create Book",
    description="""
    Adds a book to the catalog.

    - **title**: Required, non-empty
    - **author**: Required, non-empty
    - **isbn**: Optional, stored as given
    - **publishedDate**: Optional ISO-8601 date/time

    The response carries the assigned `id` and a `Location` header pointing
    at the new book.
    """,
    responses={
        201: {"description": "Book created"},
        400: {"description": "Validation failed"},
    },
)
async def create_book(
    book_data: BookCreate,
    request: Request,
    response: Response,
    db: DbSession,
    book_service: BookService = Depends(get_book_service),
) -> BookRead:
    """Create a new book."""
    book = await book_service.create_book(book_data, db)
    response.headers["Location"] = str(request.url_for("get_book", book_id=book.id))
    return book


@router.put(
    "/{book_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Update Book",
    description="""
    Replaces the title, author, ISBN and publication date of a book.

    This is a full replace, not a patch: omitted optional fields are cleared.
    The book's ID never changes; an `id` in the body is ignored.
    """,
    responses={
        204: {"description": "Book updated"},
        400: {"description": "Validation failed"},
        404: {"description": "Book not found"},
    },
)
async def update_book(
    book_id: int,
    book_data: BookUpdate,
    db: DbSession,
    book_service: BookService = Depends(get_book_service),
) -> Response:
    """Update a book."""
    await book_service.update_book(book_id, book_data, db)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{book_id}",
    summary="Delete Book",
    description="Removes a book from the catalog and returns it as it was before deletion.",
    responses={
        200: {"description": "The deleted book"},
        404: {"description": "Book not found"},
    },
)
async def delete_book(
    book_id: int,
    db: DbSession,
    book_service: BookService = Depends(get_book_service),
) -> BookRead:
    """Delete a book."""
    return await book_service.delete_book(book_id, db)
