from datetime import UTC, datetime

from sqlalchemy import DateTime
from sqlalchemy.orm import Mapped, MappedAsDataclass, mapped_column


class CreatedAtMixin(MappedAsDataclass):
    """Mixin for adding a ``created_at`` column set once on insert.

    The timestamp is timezone-aware UTC and excluded from dataclass
    initialization (``init=False``) so callers cannot backdate records.

    Example:
        ```python
        class Account(Base, CreatedAtMixin):
            __tablename__ = "accounts"
            username: Mapped[str] = mapped_column(String(100))

        account = Account(username="kamil")
        # account.created_at is set automatically
        ```
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default_factory=lambda: datetime.now(UTC),
        nullable=False,
        init=False,
    )
