"""SQLAlchemy models for the matching backend"""

from .base import Base, PortableJSONB
from .brief import Brief
from .designer import Designer
from .match import Match

__all__ = [
    "Base",
    "PortableJSONB",
    "Brief",
    "Designer",
    "Match",
]
