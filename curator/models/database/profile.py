# File: curator/models/database/profile.py

"""Owner profile model.

Only the fields the curation engine reads are mapped: identity and the
self-declared experience level used by the size optimizer.
"""

from typing import List, Optional
from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from .base import Base, TimestampMixin


class Profile(TimestampMixin, Base):
    """A creator who owns artworks and catalogues."""
    __tablename__ = 'profiles'

    display_name: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    experience_level: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)

    # Relationships
    artworks: Mapped[List["Artwork"]] = relationship(
        back_populates="owner",
        cascade="all, delete-orphan"
    )
    catalogues: Mapped[List["Catalogue"]] = relationship(
        back_populates="owner",
        cascade="all, delete-orphan"
    )
