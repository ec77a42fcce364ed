from sqlalchemy import Boolean, Column, DateTime
from datetime import datetime
import pytz


def utcnow():
    return datetime.now(pytz.utc)


class TimestampMixin:
    """Mixin that provides created/updated timestamps.

    Used by every model that can be edited after creation. Usage logs are
    immutable and carry their own ``timestamp`` column instead.
    """
    # DateTime(timezone=True) ensures the timezone info is persisted in the database.
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)


class SoftDeleteMixin:
    """Mixin for the soft-delete flag.

    Rows carrying ``is_deleted`` are hidden from every SELECT by the
    ``do_orm_execute`` listener in ``database.py``. Apply this only where rows
    must survive deletion (categories); medicines are hard deleted.
    """
    is_deleted = Column(Boolean, default=False, nullable=False, index=True)


class AuditMixin(TimestampMixin, SoftDeleteMixin):
    """Timestamps + soft-delete."""
    pass
