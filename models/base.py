from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import BigInteger, DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Declarative base for collection models.

    Collection models list their form-editable columns in ``__fillable__`` and
    may pin a cast per column in ``__casts__``; anything not pinned is
    inferred from the column type.
    """
    __fillable__ = ()
    __casts__ = {}

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)

    created_at: Mapped[Optional[datetime]] = mapped_column(DateTime, default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime, default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc)
    )
