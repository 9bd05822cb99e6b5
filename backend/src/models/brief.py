"""Brief SQLAlchemy model."""

from uuid import uuid4

from sqlalchemy import Column, Text, Uuid, DateTime, func

from .base import Base, PortableJSONB


class Brief(Base):
    """A client's project request, the input of one matching cycle.

    Briefs are written once at intake and only read by the matcher. A changed
    request is a new brief, so previous matches keep pointing at the brief
    they were computed for.

    Enumerated columns:
    - budget_range: entry, mid, premium
    - timeline_type: urgent, standard, flexible
    """
    __tablename__ = "brief"

    id = Column(Uuid, primary_key=True, default=uuid4)
    client_id = Column(Uuid, nullable=False, index=True)

    company_name = Column(Text, nullable=True)
    design_category = Column(Text, nullable=True)
    industry = Column(Text, nullable=True)
    budget_range = Column(Text, nullable=True)
    timeline_type = Column(Text, nullable=True)
    description = Column(Text, nullable=True)
    styles = Column(PortableJSONB, nullable=False, default=list)
    target_audience = Column(Text, nullable=True)
    brand_personality = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
