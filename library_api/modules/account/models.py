"""SQLAlchemy model for user accounts."""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from ...infrastructure.database.models import CreatedAtMixin
from ...infrastructure.database.session import Base


class Account(Base, CreatedAtMixin):
    """A registered user able to obtain bearer tokens.

    Accounts are immutable once created. ``username`` carries a UNIQUE
    constraint so concurrent registrations of one name cannot both succeed.
    """

    __tablename__ = "accounts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True, init=False)
    username: Mapped[str] = mapped_column(String(150), unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(255))
