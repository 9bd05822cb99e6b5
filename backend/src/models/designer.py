"""Designer SQLAlchemy model."""

from uuid import uuid4

from sqlalchemy import Column, Text, Uuid, Boolean, Integer, Float, false

from .base import Base, PortableJSONB, TimestampMixin


class Designer(TimestampMixin, Base):
    """Designer catalog entry.

    Designers are created at onboarding and changed by the admin approval
    workflow and by periodic metric updates. Rows are never deleted; a designer
    leaves the matching pool through availability or the approval flags.

    Availability values: available, busy, unavailable
    Preferred project sizes: small, medium, large
    turnaround_times maps a design category to an estimate in days.
    """
    __tablename__ = "designer"

    id = Column(Uuid, primary_key=True, default=uuid4)

    # Identity
    first_name = Column(Text, nullable=False)
    last_name = Column(Text, nullable=False)
    email = Column(Text, nullable=False, unique=True)
    title = Column(Text, nullable=True)
    bio = Column(Text, nullable=True)
    city = Column(Text, nullable=True)
    country = Column(Text, nullable=True)
    portfolio_url = Column(Text, nullable=True)
    avatar_url = Column(Text, nullable=True)

    # Expertise
    primary_categories = Column(PortableJSONB, nullable=False, default=list)
    secondary_categories = Column(PortableJSONB, nullable=False, default=list)
    style_keywords = Column(PortableJSONB, nullable=False, default=list)
    industries = Column(PortableJSONB, nullable=False, default=list)
    preferred_project_sizes = Column(PortableJSONB, nullable=False, default=list)
    turnaround_times = Column(PortableJSONB, nullable=False, default=dict)

    # Pool membership
    availability = Column(Text, nullable=False, server_default="available")
    is_approved = Column(Boolean, nullable=False, server_default=false())
    is_verified = Column(Boolean, nullable=False, server_default=false())
    rejection_reason = Column(Text, nullable=True)

    # Performance metrics
    years_experience = Column(Integer, nullable=False, server_default="0")
    rating = Column(Float, nullable=False, server_default="0")
    total_projects = Column(Integer, nullable=False, server_default="0")
    on_time_delivery_rate = Column(Float, nullable=True)
