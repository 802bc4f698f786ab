"""
HeroVault Backend - Record Service Unit Tests
==============================================

What:  The create/read/update/delete facade for each entity.
How:   Validation and not-found mapping use a mocked store; persistence
       behaviour runs against the in-memory SQLite stores.

What we test:
    ✅ Created records echo their input and get an identifier
    ✅ Missing/empty required fields and missing images are 400s that persist nothing
    ✅ Partial updates keep omitted fields and the existing image
    ✅ Unknown identifiers raise NotFoundError for read, update and delete
"""

import uuid

import pytest

from herovault.exceptions import NotFoundError, ValidationError
from herovault.schemas.attachment import Attachment
from herovault.services.character_service import CharacterService
from herovault.services.image_service import ImageService
from herovault.services.superhero_service import SuperheroService


@pytest.fixture
def png(sample_png_bytes):
    return Attachment(data=sample_png_bytes, content_type="image/png")


class TestValidationWithMockStore:

    @pytest.mark.asyncio
    async def test_missing_fields_never_reach_store(self, mock_store, png):
        service = CharacterService(mock_store)
        with pytest.raises(ValidationError) as exc_info:
            await service.create({"characterName": "Ben Tennyson"}, png)
        assert exc_info.value.fields == ["characterDescription"]
        assert "Missing required fields" in exc_info.value.message
        mock_store.insert.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_blank_field_counts_as_missing(self, mock_store, png):
        service = CharacterService(mock_store)
        with pytest.raises(ValidationError) as exc_info:
            await service.create(
                {"characterName": "   ", "characterDescription": "Hero"}, png
            )
        assert exc_info.value.fields == ["characterName"]
        mock_store.insert.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_image_reported_with_fields(self, mock_store):
        service = CharacterService(mock_store)
        with pytest.raises(ValidationError) as exc_info:
            await service.create({"characterName": "Ben Tennyson"})
        assert exc_info.value.fields == ["characterDescription", "image"]
        mock_store.insert.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_id_on_get(self, mock_store):
        mock_store.find_by_id.return_value = None
        with pytest.raises(NotFoundError, match="Character with id abc not found"):
            await CharacterService(mock_store).get("abc")

    @pytest.mark.asyncio
    async def test_update_rejects_null_required_field(self, mock_store):
        service = SuperheroService(mock_store)
        with pytest.raises(ValidationError):
            await service.update(str(uuid.uuid4()), {"superheroName": None})
        mock_store.find_and_update_by_id.assert_not_awaited()


class TestCharacterService:

    @pytest.mark.asyncio
    async def test_create_echoes_fields(self, character_store, png):
        service = CharacterService(character_store)
        created = await service.create(
            {"characterName": "Ben Tennyson", "characterDescription": "Hero"}, png
        )
        assert created.id
        assert created.character_name == "Ben Tennyson"
        assert created.character_description == "Hero"
        assert created.image_url == png.to_data_uri()

    @pytest.mark.asyncio
    async def test_failed_create_persists_nothing(self, character_store):
        service = CharacterService(character_store)
        with pytest.raises(ValidationError):
            await service.create({"characterName": "", "characterDescription": "Hero"})
        assert await service.list_all() == []

    @pytest.mark.asyncio
    async def test_update_subset_keeps_rest(self, character_store, png):
        service = CharacterService(character_store)
        created = await service.create(
            {"characterName": "Ben Tennyson", "characterDescription": "Hero"}, png
        )
        updated = await service.update(created.id, {"characterDescription": "Older hero"})
        assert updated.character_name == "Ben Tennyson"
        assert updated.character_description == "Older hero"
        assert updated.image_url == png.to_data_uri()

    @pytest.mark.asyncio
    async def test_update_new_image_replaces_old(self, character_store, png, sample_image_bytes):
        service = CharacterService(character_store)
        created = await service.create(
            {"characterName": "Ben Tennyson", "characterDescription": "Hero"}, png
        )
        jpeg = Attachment(data=sample_image_bytes, content_type="image/jpeg")
        await service.update(created.id, {}, jpeg)

        stored = await service.get_attachment(created.id)
        assert stored.data == sample_image_bytes
        assert stored.content_type == "image/jpeg"

    @pytest.mark.asyncio
    async def test_delete_then_get_is_not_found(self, character_store, png):
        service = CharacterService(character_store)
        created = await service.create(
            {"characterName": "Ben Tennyson", "characterDescription": "Hero"}, png
        )
        deleted = await service.delete(created.id)
        assert deleted.id == created.id
        with pytest.raises(NotFoundError):
            await service.get(created.id)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("operation", ["get", "update", "delete"])
    async def test_unknown_id_is_not_found(self, character_store, operation):
        service = CharacterService(character_store)
        missing = str(uuid.uuid4())
        with pytest.raises(NotFoundError):
            if operation == "update":
                await service.update(missing, {"characterName": "Nobody"})
            else:
                await getattr(service, operation)(missing)


class TestSuperheroService:

    @pytest.mark.asyncio
    async def test_optional_fields_default_to_none(self, superhero_store):
        service = SuperheroService(superhero_store)
        created = await service.create({"superheroName": "Heatblast", "originalName": "Pyronite"})
        assert created.abilities is None
        assert created.comment is None

    @pytest.mark.asyncio
    async def test_update_can_clear_optional_field(self, superhero_store):
        service = SuperheroService(superhero_store)
        created = await service.create(
            {"superheroName": "Heatblast", "originalName": "Pyronite", "weakness": "Water"}
        )
        updated = await service.update(created.id, {"weakness": None, "abilities": "Fire"})
        assert updated.weakness is None
        assert updated.abilities == "Fire"
        assert updated.superhero_name == "Heatblast"

    @pytest.mark.asyncio
    async def test_get_attachment_on_plain_record(self, superhero_store):
        service = SuperheroService(superhero_store)
        created = await service.create({"superheroName": "Heatblast", "originalName": "Pyronite"})
        with pytest.raises(NotFoundError):
            await service.get_attachment(created.id)


class TestImageService:

    @pytest.mark.asyncio
    async def test_upload_without_file_names_the_problem(self, mock_store):
        with pytest.raises(ValidationError, match="No image uploaded") as exc_info:
            await ImageService(mock_store).upload("omnitrix.png", None)
        assert exc_info.value.fields == ["image"]
        mock_store.insert.assert_not_awaited()
