"""Declarative base, column types and mixins shared by the matching models"""

from sqlalchemy import JSON, Column, DateTime, TypeDecorator, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import declarative_base


class PortableJSONB(TypeDecorator):
    """JSONB on PostgreSQL, plain JSON on every other dialect.

    Keyword lists, the turnaround table and match reasons live in columns of
    this type so the models also run on the SQLite engine used by the tests.
    """
    impl = JSON
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == "postgresql":
            return dialect.type_descriptor(JSONB())
        return dialect.type_descriptor(JSON())


class TimestampMixin:
    """created_at / updated_at maintained by the database."""
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())


Base = declarative_base()
