# curator/models/database/__init__.py
"""Database models initialization."""

from .base import Base
from .profile import Profile
from .artwork import Artwork
from .catalogue import Catalogue, CatalogueArtwork

# This makes imports cleaner elsewhere in the application
__all__ = [
    'Base',
    'Profile',
    'Artwork',
    'Catalogue',
    'CatalogueArtwork'
]
