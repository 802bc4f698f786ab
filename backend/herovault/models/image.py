"""
HeroVault Backend - Image SQLAlchemy Model
===========================================

What:  ORM model for the `images` table used by the upload gallery
       (POST /upload, GET /get-image). The original filename is the only
       scalar field.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from herovault.database import Base
from herovault.models.record import AttachmentMixin, RecordMixin, attachment_pair_constraint


class Image(RecordMixin, AttachmentMixin, Base):
    __tablename__ = "images"

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Original filename of the upload",
    )

    __table_args__ = (attachment_pair_constraint("images"),)

    def __repr__(self) -> str:
        return f"<Image(id={self.id}, name='{self.name}')>"
