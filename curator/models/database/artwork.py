# curator/models/database/artwork.py
"""Artwork model: the items owners place in catalogues."""

from typing import List, Optional
from sqlalchemy import JSON, CheckConstraint, Float, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from .base import Base, TimestampMixin


class Artwork(TimestampMixin, Base):
    """A single artwork with its categorical facets and engagement counters."""
    __tablename__ = 'artworks'

    user_id: Mapped[str] = mapped_column(
        ForeignKey('profiles.id', ondelete='CASCADE'),
        nullable=False,
        index=True
    )
    title: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    medium: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    genre: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    price: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    dimensions: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    dominant_colors: Mapped[List[str]] = mapped_column(JSON, default=list, nullable=False)
    status: Mapped[str] = mapped_column(String(20), default='available', nullable=False)

    views_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    likes_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    inquiries_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    # Relationships
    owner: Mapped["Profile"] = relationship(back_populates="artworks")
    placements: Mapped[List["CatalogueArtwork"]] = relationship(
        back_populates="artwork",
        cascade="all, delete-orphan"
    )

    __table_args__ = (
        Index('idx_artwork_owner_status', 'user_id', 'status'),
        CheckConstraint('price IS NULL OR price >= 0', name='ck_artwork_price_non_negative'),
        CheckConstraint(
            'views_count >= 0 AND likes_count >= 0 AND inquiries_count >= 0',
            name='ck_artwork_counters_non_negative'
        ),
    )
