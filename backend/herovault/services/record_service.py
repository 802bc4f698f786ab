"""
HeroVault Backend - Record Service (Entity Store Facade)
=========================================================

What:  The CRUD-with-optional-attachment workflow shared by every entity.
How:   Validates raw input against the entity's create/update schema,
       performs exactly one DocumentStore call, and renders the result
       with the entity's response schema.
Who:   Subclassed per entity (CharacterService, SuperheroService,
       ImageService); called by the route handlers.

Operation Flow:
    ┌──────────┐    ┌─────────────┐    ┌──────────────┐    ┌──────────┐
    │  Route   │───▶│  Validate   │───▶│ DocumentStore│───▶│  Render  │
    │  (HTTP)  │    │  (schema)   │    │  (one call)  │    │ (schema) │
    └──────────┘    └─────────────┘    └──────────────┘    └──────────┘

Error Mapping:
    invalid input       → ValidationError (400)
    store returned None → NotFoundError (404)
    store failure       → StoreError (500), raised by DocumentStore
"""

import logging
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from herovault.exceptions import NotFoundError, ValidationError
from herovault.models.record import AttachmentMixin
from herovault.schemas.attachment import Attachment
from herovault.services.document_store import DocumentStore

logger = logging.getLogger(__name__)

ResponseT = TypeVar("ResponseT")


class RecordService(Generic[ResponseT]):
    """
    Facade over one DocumentStore.

    Subclasses set:
        resource:            Display name used in messages ("Character")
        create_schema:       Pydantic model for create input
        update_schema:       Pydantic model for partial update input
        response_schema:     Class with a `from_record(record)` constructor
        attachment_field:    Form field name reported when an upload is missing
        attachment_required: Whether create must carry an attachment
    """

    resource: str = "Record"
    create_schema: Type[BaseModel]
    update_schema: Type[BaseModel]
    response_schema: Any
    attachment_field: str = "image"
    attachment_required: bool = False

    def __init__(self, store: DocumentStore):
        self.store = store

    # ── Validation ────────────────────────────────────────────────────────

    def _validate(
        self,
        schema: Type[BaseModel],
        data: Dict[str, Any],
        require_attachment: bool = False,
        attachment: Optional[Attachment] = None,
    ) -> BaseModel:
        """
        Validate input and the attachment requirement in one pass, so the
        client sees every problem in a single 400 response.
        """
        errors: List[Dict[str, Any]] = []
        payload: Optional[BaseModel] = None
        try:
            payload = schema.model_validate(data)
        except PydanticValidationError as e:
            errors.extend(e.errors())

        if require_attachment and attachment is None:
            errors.append(
                {"type": "missing", "loc": (self.attachment_field,), "msg": "Field required"}
            )

        if errors:
            raise ValidationError.from_errors(errors)
        return payload

    def _not_found(self, record_id: Any) -> NotFoundError:
        return NotFoundError(resource=self.resource, resource_id=str(record_id))

    def _render(self, record) -> ResponseT:
        return self.response_schema.from_record(record)

    # ── Operations ────────────────────────────────────────────────────────

    async def create(
        self,
        data: Dict[str, Any],
        attachment: Optional[Attachment] = None,
    ) -> ResponseT:
        """
        Insert a new record.

        Raises:
            ValidationError: A required field is missing/empty, or the
                             mandatory attachment was not uploaded.
            StoreError:      The insert failed.
        """
        payload = self._validate(
            self.create_schema,
            data,
            require_attachment=self.attachment_required,
            attachment=attachment,
        )
        fields = payload.model_dump()
        if attachment is not None:
            fields.update(AttachmentMixin.attachment_fields(attachment))

        record = await self.store.insert(fields)
        logger.info(
            "%s created: %s (attachment=%s)",
            self.resource,
            record.id,
            "yes" if attachment is not None else "no",
        )
        return self._render(record)

    async def list_all(self) -> List[ResponseT]:
        """Every record in insertion order. An empty store yields []."""
        records = await self.store.find_all()
        return [self._render(record) for record in records]

    async def get(self, record_id: Any) -> ResponseT:
        record = await self.store.find_by_id(record_id)
        if record is None:
            raise self._not_found(record_id)
        return self._render(record)

    async def get_attachment(self, record_id: Any) -> Attachment:
        """
        Raw attachment of one record.

        Raises:
            NotFoundError: Unknown record, or the record has no attachment.
        """
        record = await self.store.find_by_id(record_id)
        if record is None:
            raise self._not_found(record_id)
        attachment = getattr(record, "attachment", None)
        if attachment is None:
            raise NotFoundError(
                resource=f"{self.resource} image",
                resource_id=str(record_id),
            )
        return attachment

    async def update(
        self,
        record_id: Any,
        data: Dict[str, Any],
        attachment: Optional[Attachment] = None,
    ) -> ResponseT:
        """
        Overwrite the supplied fields of one record.

        Omitted fields keep their values. A new attachment replaces the
        stored one entirely; no attachment leaves it untouched.

        Raises:
            ValidationError: A supplied required field is empty or null.
            NotFoundError:   The identifier does not resolve.
            StoreError:      The update failed.
        """
        payload = self._validate(self.update_schema, data)
        changes = payload.model_dump(exclude_unset=True)
        if attachment is not None:
            changes.update(AttachmentMixin.attachment_fields(attachment))

        record = await self.store.find_and_update_by_id(record_id, changes)
        if record is None:
            raise self._not_found(record_id)
        logger.info("%s updated: %s (fields=%s)", self.resource, record.id, sorted(changes))
        return self._render(record)

    async def delete(self, record_id: Any) -> ResponseT:
        """Hard-delete one record and return its last known state."""
        record = await self.store.find_and_delete_by_id(record_id)
        if record is None:
            raise self._not_found(record_id)
        logger.info("%s deleted: %s", self.resource, record.id)
        return self._render(record)
