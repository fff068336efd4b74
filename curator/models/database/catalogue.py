# curator/models/database/catalogue.py
"""Catalogue models and ordered catalogue membership."""

from typing import List, Optional
from sqlalchemy import Boolean, ForeignKey, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from .base import Base, TimestampMixin


class Catalogue(TimestampMixin, Base):
    """A curated, ordered collection of one owner's artworks."""
    __tablename__ = 'catalogues'

    user_id: Mapped[str] = mapped_column(
        ForeignKey('profiles.id', ondelete='CASCADE'),
        nullable=False,
        index=True
    )
    title: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    catalogue_type: Mapped[str] = mapped_column(String(20), default='mixed', nullable=False)
    is_public: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    # Relationships
    owner: Mapped["Profile"] = relationship(back_populates="catalogues")
    entries: Mapped[List["CatalogueArtwork"]] = relationship(
        back_populates="catalogue",
        cascade="all, delete-orphan",
        order_by="CatalogueArtwork.position"
    )

    __table_args__ = (
        Index('idx_catalogue_type_public', 'catalogue_type', 'is_public'),
    )


class CatalogueArtwork(TimestampMixin, Base):
    """Placement of an artwork at a position within a catalogue."""
    __tablename__ = 'catalogue_artworks'

    catalogue_id: Mapped[str] = mapped_column(
        ForeignKey('catalogues.id', ondelete='CASCADE'),
        nullable=False,
        index=True
    )
    artwork_id: Mapped[str] = mapped_column(
        ForeignKey('artworks.id', ondelete='CASCADE'),
        nullable=False,
        index=True
    )
    position: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    # Relationships
    catalogue: Mapped["Catalogue"] = relationship(back_populates="entries")
    artwork: Mapped["Artwork"] = relationship(back_populates="placements")

    __table_args__ = (
        UniqueConstraint('catalogue_id', 'artwork_id', name='uq_catalogue_artwork'),
    )
