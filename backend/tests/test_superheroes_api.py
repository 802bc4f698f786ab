"""
HeroVault Backend - Superhero API Tests
========================================

What:  The /api/superheroes JSON endpoints through the ASGI app.
"""

import uuid

import pytest

HEATBLAST = {
    "superheroName": "Heatblast",
    "originalName": "Pyronite",
    "abilities": "Pyrokinesis",
    "weakness": "Water",
}


class TestSuperheroCrud:

    @pytest.mark.asyncio
    async def test_create_returns_201_and_record(self, test_client):
        response = await test_client.post("/api/superheroes", json=HEATBLAST)
        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Superhero saved successfully"
        hero = body["superhero"]
        assert hero["superheroName"] == "Heatblast"
        assert hero["weakness"] == "Water"
        assert hero["backstory"] is None
        assert hero["id"]
        assert hero["createdAt"]
        assert hero["updatedAt"]

    @pytest.mark.asyncio
    async def test_list_and_get(self, test_client):
        created = (await test_client.post("/api/superheroes", json=HEATBLAST)).json()["superhero"]
        await test_client.post(
            "/api/superheroes",
            json={"superheroName": "Four Arms", "originalName": "Tetramand"},
        )

        listing = await test_client.get("/api/superheroes")
        assert listing.status_code == 200
        assert listing.json()["message"] == "Superheroes retrieved successfully"
        names = [h["superheroName"] for h in listing.json()["superheroes"]]
        assert names == ["Heatblast", "Four Arms"]

        response = await test_client.get(f"/api/superheroes/{created['id']}")
        assert response.status_code == 200
        assert response.json() == created

    @pytest.mark.asyncio
    async def test_update_only_sent_fields(self, test_client):
        created = (await test_client.post("/api/superheroes", json=HEATBLAST)).json()["superhero"]

        response = await test_client.put(
            f"/api/superheroes/{created['id']}",
            json={"backstory": "From Pyros", "weakness": None},
        )
        assert response.status_code == 200
        assert response.json()["message"] == "Superhero updated successfully"
        hero = response.json()["superhero"]
        assert hero["backstory"] == "From Pyros"
        assert hero["weakness"] is None
        assert hero["abilities"] == "Pyrokinesis"
        assert hero["superheroName"] == "Heatblast"
        assert hero["createdAt"] == created["createdAt"]

    @pytest.mark.asyncio
    async def test_delete_then_gone(self, test_client):
        created = (await test_client.post("/api/superheroes", json=HEATBLAST)).json()["superhero"]

        response = await test_client.delete(f"/api/superheroes/{created['id']}")
        assert response.status_code == 200
        assert response.json()["message"] == f"Superhero with id {created['id']} deleted"
        assert response.json()["superhero"]["superheroName"] == "Heatblast"

        assert (await test_client.get(f"/api/superheroes/{created['id']}")).status_code == 404
        assert (await test_client.delete(f"/api/superheroes/{created['id']}")).status_code == 404


class TestSuperheroValidation:

    @pytest.mark.asyncio
    async def test_missing_required_fields(self, test_client):
        response = await test_client.post("/api/superheroes", json={"abilities": "Speed"})
        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "validation_error"
        assert body["message"] == "Missing required fields: superheroName, originalName"
        assert body["details"]["fields"] == ["superheroName", "originalName"]

        listing = await test_client.get("/api/superheroes")
        assert listing.json()["superheroes"] == []

    @pytest.mark.asyncio
    async def test_blank_required_field(self, test_client):
        response = await test_client.post(
            "/api/superheroes",
            json={"superheroName": "   ", "originalName": "Pyronite"},
        )
        assert response.status_code == 400
        assert response.json()["details"]["fields"] == ["superheroName"]

    @pytest.mark.asyncio
    async def test_malformed_json_is_400(self, test_client):
        response = await test_client.post(
            "/api/superheroes",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    @pytest.mark.asyncio
    async def test_update_cannot_blank_required_field(self, test_client):
        created = (await test_client.post("/api/superheroes", json=HEATBLAST)).json()["superhero"]

        response = await test_client.put(
            f"/api/superheroes/{created['id']}", json={"originalName": ""}
        )
        assert response.status_code == 400

        response = await test_client.put(
            f"/api/superheroes/{created['id']}", json={"superheroName": None}
        )
        assert response.status_code == 400

        hero = (await test_client.get(f"/api/superheroes/{created['id']}")).json()
        assert hero["originalName"] == "Pyronite"
        assert hero["superheroName"] == "Heatblast"


class TestSuperheroNotFound:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("superhero_id", [str(uuid.uuid4()), "not-an-id"])
    async def test_unknown_ids_are_404(self, test_client, superhero_id):
        assert (await test_client.get(f"/api/superheroes/{superhero_id}")).status_code == 404
        response = await test_client.put(
            f"/api/superheroes/{superhero_id}", json={"abilities": "None"}
        )
        assert response.status_code == 404
        assert response.json()["message"] == f"Superhero with id {superhero_id} not found"
