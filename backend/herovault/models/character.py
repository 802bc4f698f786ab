"""
HeroVault Backend - Character SQLAlchemy Model
===============================================

What:  ORM model for the `characters` table.
Who:   Stored and loaded by the character DocumentStore.

Lifecycle:
    1. Inserted by POST /api/ben with name, description and image
    2. Fields overwritten in place by PUT /api/ben/{id}; a new image
       replaces both attachment columns at once
    3. Deleted by DELETE /api/ben/{id} (hard delete)
"""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from herovault.database import Base
from herovault.models.record import AttachmentMixin, RecordMixin, attachment_pair_constraint


class Character(RecordMixin, AttachmentMixin, Base):
    """An image-bearing character record."""

    __tablename__ = "characters"

    character_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Display name of the character",
    )

    character_description: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Free-text description",
    )

    __table_args__ = (attachment_pair_constraint("characters"),)

    def __repr__(self) -> str:
        return f"<Character(id={self.id}, character_name='{self.character_name}')>"
