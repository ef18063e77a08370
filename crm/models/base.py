"""Base model classes and mixins."""

import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, as_declarative, declared_attr, mapped_column


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_uuid() -> str:
    return str(uuid.uuid4())


@as_declarative()
class Base:
    """Base model class."""

    id: Any
    __name__: str

    # Generate __tablename__ automatically
    @declared_attr
    def __tablename__(cls) -> str:
        return cls.__name__.lower()

    def apply_updates(self, values: dict[str, Any]) -> None:
        """Set partial-update values. Explicit nulls only clear nullable columns."""
        columns = self.__table__.columns
        for field, value in values.items():
            if value is None and (field not in columns or not columns[field].nullable):
                continue
            setattr(self, field, value)



class UUIDPrimaryKeyMixin:
    """Mixin for string UUID primary keys."""

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_uuid)


class TimestampMixin:
    """Mixin for created_at and updated_at timestamps."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
        index=True,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
    )
