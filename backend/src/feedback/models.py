"""Match feedback SQLAlchemy model."""

from uuid import uuid4

from sqlalchemy import Column, Text, Uuid, Boolean, Integer, ForeignKey, CheckConstraint

from models.base import Base, TimestampMixin


class MatchFeedback(TimestampMixin, Base):
    """Client verdict on a match, recorded once per match.

    ``satisfaction`` and ``delivered_on_time`` only carry weight when
    ``project_completed`` is set; they then feed the designer's rating and
    on-time delivery rate.
    """
    __tablename__ = "match_feedback"
    __table_args__ = (
        CheckConstraint(
            "satisfaction IS NULL OR (satisfaction >= 1 AND satisfaction <= 5)",
            name="ck_match_feedback_satisfaction",
        ),
    )

    id = Column(Uuid, primary_key=True, default=uuid4)
    match_id = Column(Uuid, ForeignKey("match.id", ondelete="CASCADE"), nullable=False, unique=True)
    designer_id = Column(Uuid, ForeignKey("designer.id", ondelete="RESTRICT"), nullable=False, index=True)
    client_id = Column(Uuid, nullable=False)

    accepted = Column(Boolean, nullable=False)
    project_started = Column(Boolean, nullable=False, default=False)
    project_completed = Column(Boolean, nullable=False, default=False)
    satisfaction = Column(Integer, nullable=True)  # 1..5
    delivered_on_time = Column(Boolean, nullable=True)
    comment = Column(Text, nullable=True)
