"""
HeroVault Backend - Superhero SQLAlchemy Model
===============================================

What:  ORM model for the `superheroes` table: plain attribute records,
       no attachment.
"""

from typing import Optional

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from herovault.database import Base
from herovault.models.record import RecordMixin


class Superhero(RecordMixin, Base):
    """A contributed superhero entry."""

    __tablename__ = "superheroes"

    superhero_name: Mapped[str] = mapped_column(String(255), nullable=False)
    original_name: Mapped[str] = mapped_column(String(255), nullable=False)

    # Optional free-text attributes
    abilities: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    weakness: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    backstory: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    reason: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    contributor: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    comment: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<Superhero(id={self.id}, superhero_name='{self.superhero_name}')>"
