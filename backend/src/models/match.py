"""Match SQLAlchemy model."""

from uuid import uuid4

from sqlalchemy import (
    Column, Text, Uuid, Integer, ForeignKey, UniqueConstraint,
)

from .base import Base, PortableJSONB, TimestampMixin


class Match(TimestampMixin, Base):
    """Persisted outcome of a matching run: one brief paired with one designer.

    At most one row exists per (brief_id, designer_id). The orchestrator
    creates the row; afterwards only ``status`` changes
    (pending -> unlocked -> accepted), driven by payment and designer responses.
    """
    __tablename__ = "match"
    __table_args__ = (
        UniqueConstraint("brief_id", "designer_id", name="uq_match_brief_designer"),
    )

    id = Column(Uuid, primary_key=True, default=uuid4)
    brief_id = Column(Uuid, ForeignKey("brief.id", ondelete="CASCADE"), nullable=False, index=True)
    designer_id = Column(Uuid, ForeignKey("designer.id", ondelete="RESTRICT"), nullable=False)
    client_id = Column(Uuid, nullable=False, index=True)

    score = Column(Integer, nullable=False)
    reasons = Column(PortableJSONB, nullable=False, default=list)
    personalized_reasons = Column(PortableJSONB, nullable=False, default=list)
    confidence = Column(Text, nullable=True)
    provider = Column(Text, nullable=True)
    status = Column(Text, nullable=False, server_default="pending")
