"""
HeroVault Backend - Document Store Tests
=========================================

What:  Single-record operations against a real in-memory SQLite database.
"""

import asyncio
import uuid

import pytest

from herovault.exceptions import StoreError
from herovault.services.document_store import parse_record_id


def ben_fields(**overrides):
    fields = {
        "character_name": "Ben Tennyson",
        "character_description": "Hero",
        "image_data": b"\x89PNG",
        "image_content_type": "image/png",
    }
    fields.update(overrides)
    return fields


class TestParseRecordId:

    def test_accepts_uuid_string(self):
        value = uuid.uuid4()
        assert parse_record_id(str(value)) == value

    def test_malformed_id_is_none(self):
        assert parse_record_id("64b7f0c2e4b0a1a2b3c4d5e6") is None
        assert parse_record_id("") is None


class TestInsertAndFind:

    @pytest.mark.asyncio
    async def test_insert_assigns_identifier(self, character_store):
        record = await character_store.insert(ben_fields())
        assert record.id is not None
        assert record.created_at is not None
        assert record.character_name == "Ben Tennyson"

    @pytest.mark.asyncio
    async def test_find_by_id_round_trip(self, character_store):
        created = await character_store.insert(ben_fields())
        found = await character_store.find_by_id(str(created.id))
        assert found.id == created.id
        assert found.image_data == b"\x89PNG"
        assert found.attachment.content_type == "image/png"

    @pytest.mark.asyncio
    async def test_find_unknown_id_returns_none(self, character_store):
        assert await character_store.find_by_id(str(uuid.uuid4())) is None

    @pytest.mark.asyncio
    async def test_find_malformed_id_returns_none(self, character_store):
        assert await character_store.find_by_id("not-an-id") is None

    @pytest.mark.asyncio
    async def test_find_all_in_insertion_order(self, character_store):
        names = ["Ben", "Gwen", "Kevin"]
        for name in names:
            await character_store.insert(ben_fields(character_name=name))
        records = await character_store.find_all()
        assert [r.character_name for r in records] == names

    @pytest.mark.asyncio
    async def test_find_all_empty(self, superhero_store):
        assert await superhero_store.find_all() == []


class TestUpdate:

    @pytest.mark.asyncio
    async def test_update_overwrites_only_given_columns(self, character_store):
        created = await character_store.insert(ben_fields())
        updated = await character_store.find_and_update_by_id(
            str(created.id), {"character_description": "Wielder of the Omnitrix"}
        )
        assert updated.character_description == "Wielder of the Omnitrix"
        assert updated.character_name == "Ben Tennyson"
        assert updated.image_data == b"\x89PNG"

    @pytest.mark.asyncio
    async def test_update_never_changes_identifier(self, character_store):
        created = await character_store.insert(ben_fields())
        updated = await character_store.find_and_update_by_id(
            created.id, {"id": uuid.uuid4(), "character_name": "Ben 10"}
        )
        assert updated.id == created.id

    @pytest.mark.asyncio
    async def test_update_unknown_returns_none(self, character_store):
        result = await character_store.find_and_update_by_id(
            str(uuid.uuid4()), {"character_name": "Nobody"}
        )
        assert result is None


class TestDelete:

    @pytest.mark.asyncio
    async def test_delete_returns_last_state(self, character_store):
        created = await character_store.insert(ben_fields())
        deleted = await character_store.find_and_delete_by_id(str(created.id))
        assert deleted.id == created.id
        assert deleted.character_name == "Ben Tennyson"
        assert await character_store.find_by_id(str(created.id)) is None

    @pytest.mark.asyncio
    async def test_delete_unknown_returns_none(self, character_store):
        assert await character_store.find_and_delete_by_id(str(uuid.uuid4())) is None


class TestFailures:

    @pytest.mark.asyncio
    async def test_constraint_violation_becomes_store_error(self, character_store):
        with pytest.raises(StoreError) as exc_info:
            await character_store.insert(ben_fields(character_name=None))
        assert exc_info.value.context["operation"] == "insert"
        assert exc_info.value.context["collection"] == "characters"
        assert exc_info.value.context["error"]

    @pytest.mark.asyncio
    async def test_half_attachment_is_rejected(self, character_store):
        with pytest.raises(StoreError):
            await character_store.insert(ben_fields(image_content_type=None))

    @pytest.mark.asyncio
    async def test_timeout_becomes_store_error(self, character_store):
        character_store.timeout = 0.01

        async def slow_call(session):
            await asyncio.sleep(1)

        with pytest.raises(StoreError, match="timed out"):
            await character_store._run("find", slow_call)

    @pytest.mark.asyncio
    async def test_ping(self, character_store):
        await character_store.ping()
