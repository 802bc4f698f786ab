"""
HeroVault Backend - Shared Record Columns
==========================================

What:  Declarative mixins holding the columns every record table shares.
How:   `RecordMixin` adds the identifier and timestamps; `AttachmentMixin`
       adds the inline BLOB pair for records that can carry an image.
Who:   Inherited by the Character, Superhero and Image models.

Table Design:
    - UUID primary key generated in Python at insert time, never updated
    - created_at drives "insertion order" for the read-all query
    - image_data / image_content_type are both NULL or both set
      (enforced by a CHECK constraint on each attachment-bearing table)
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from sqlalchemy import CheckConstraint, DateTime, LargeBinary, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import TypeDecorator

from herovault.schemas.attachment import Attachment


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UTCDateTime(TypeDecorator):
    """Timezone-aware UTC timestamps on every backend.

    SQLite drops the offset on write, so values read back are naive; they
    are tagged as UTC again on load.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None and value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value

    def process_result_value(self, value, dialect):
        if value is not None and value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value


class RecordMixin:
    """Identifier and timestamps for every record table."""

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        comment="Store-assigned identifier, immutable after creation",
    )

    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
        default=utcnow,
        index=True,
        comment="When this record was inserted (UTC)",
    )

    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
        comment="When this record was last modified (UTC)",
    )


class AttachmentMixin:
    """Inline image storage: raw bytes plus the declared MIME type."""

    image_data: Mapped[Optional[bytes]] = mapped_column(
        LargeBinary,
        nullable=True,
        default=None,
    )

    image_content_type: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
        default=None,
    )

    @property
    def attachment(self) -> Optional[Attachment]:
        if self.image_data is None or self.image_content_type is None:
            return None
        return Attachment(data=self.image_data, content_type=self.image_content_type)

    @staticmethod
    def attachment_fields(attachment: Attachment) -> Dict[str, Any]:
        """Column values that store (or fully replace) an attachment."""
        return {
            "image_data": attachment.data,
            "image_content_type": attachment.content_type,
        }


def attachment_pair_constraint(table_name: str) -> CheckConstraint:
    return CheckConstraint(
        "(image_data IS NULL AND image_content_type IS NULL) OR "
        "(image_data IS NOT NULL AND image_content_type IS NOT NULL)",
        name=f"ck_{table_name}_attachment_pair",
    )
