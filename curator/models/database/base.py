# File: curator/models/database/base.py

"""Base configuration and utilities for SQLAlchemy models.

This module provides the foundational setup for all database models, including:
- Declarative base class
- String UUID primary keys
- Audit timestamp fields
"""

import uuid
from datetime import datetime
from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def new_id() -> str:
    return str(uuid.uuid4())


class Base(DeclarativeBase):
    """Base class for all database models."""


class TimestampMixin:
    """Mixin adding audit fields and a UUID primary key."""

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False
    )
