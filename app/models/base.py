"""Base SQLAlchemy model utilities."""
from sqlalchemy import Column, DateTime, Integer
from app.utils.helpers import utcnow


class TimestampMixin:
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)


class IDMixin:
    id = Column(Integer, primary_key=True, index=True)
