"""SQLAlchemy model for catalog books."""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from ...infrastructure.database.session import Base

# Range of the 32-bit INTEGER primary key.
BOOK_ID_MIN = -(2**31)
BOOK_ID_MAX = 2**31 - 1


class Book(Base):
    """A book in the shared catalog.

    ``id`` is assigned by the store on insert and never changes. Title and
    author are required; ISBN and publication date are optional.
    """

    __tablename__ = "books"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True, init=False)
    title: Mapped[str] = mapped_column(String(500))
    author: Mapped[str] = mapped_column(String(500))
    isbn: Mapped[Optional[str]] = mapped_column(String(50), default=None)
    published_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=False), default=None)
