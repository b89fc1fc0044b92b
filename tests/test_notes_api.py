"""
NoteBox - REST API Tests
=========================

What:  End-to-end tests of the /notes and /health endpoints through the
       FastAPI app, middleware and exception handlers.
How:   HTTPX AsyncClient over ASGITransport against the SQLite test store.
"""

import logging

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from notebox.database import database
from notebox.middleware.request_id import resolve_request_id


async def create(client, title, body):
    response = await client.post("/notes", json={"title": title, "body": body})
    assert response.status_code == 201, response.text
    return response.json()


class TestListNotes:

    @pytest.mark.asyncio
    async def test_empty_collection(self, test_client):
        response = await test_client.get("/notes")

        assert response.status_code == 200
        assert response.json() == {"notes": []}
        assert response.headers["X-Total-Count"] == "0"

    @pytest.mark.asyncio
    async def test_search_and_sort(self, test_client):
        await create(test_client, "Welcome", "Welcome to your notes app!")
        await create(test_client, "Getting Started", "Create your first note.")
        await create(test_client, "Groceries", "milk")

        response = await test_client.get("/notes", params={"q": "started", "sort": "newest"})
        assert [n["title"] for n in response.json()["notes"]] == ["Getting Started"]
        assert response.headers["X-Total-Count"] == "1"

        response = await test_client.get("/notes", params={"sort": "alphabetical"})
        titles = [n["title"] for n in response.json()["notes"]]
        assert titles == sorted(titles)

    @pytest.mark.asyncio
    async def test_invalid_sort_is_rejected(self, test_client):
        response = await test_client.get("/notes", params={"sort": "random"})
        assert response.status_code == 422


class TestCreateNote:

    @pytest.mark.asyncio
    async def test_create_returns_camel_case_record(self, test_client):
        note = await create(test_client, "Title", "Body")

        assert set(note) == {"id", "title", "body", "createdAt", "updatedAt"}
        assert note["updatedAt"] is None

    @pytest.mark.asyncio
    async def test_create_sets_location(self, test_client):
        response = await test_client.post("/notes", json={"title": "Here", "body": "there"})
        assert response.headers["Location"] == f"/notes/{response.json()['id']}"

    @pytest.mark.asyncio
    async def test_blank_title_is_400(self, test_client):
        response = await test_client.post("/notes", json={"title": "   ", "body": "Body"})

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "validation_error"
        assert body["details"]["field"] == "title"

        listing = await test_client.get("/notes")
        assert listing.json() == {"notes": []}

    @pytest.mark.asyncio
    async def test_missing_field_is_422(self, test_client):
        response = await test_client.post("/notes", json={"title": "only"})
        assert response.status_code == 422


class TestSingleNote:

    @pytest.mark.asyncio
    async def test_get_update_delete(self, test_client):
        note = await create(test_client, "Draft", "first version")

        response = await test_client.get(f"/notes/{note['id']}")
        assert response.status_code == 200
        assert response.json()["title"] == "Draft"

        response = await test_client.put(
            f"/notes/{note['id']}", json={"title": "Final", "body": "second version"}
        )
        assert response.status_code == 200
        updated = response.json()
        assert updated["id"] == note["id"]
        assert updated["title"] == "Final"
        assert updated["updatedAt"] is not None

        response = await test_client.delete(f"/notes/{note['id']}")
        assert response.status_code == 204

        response = await test_client.get(f"/notes/{note['id']}")
        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    @pytest.mark.asyncio
    async def test_update_missing_is_404(self, test_client):
        response = await test_client.put("/notes/nope", json={"title": "t", "body": "b"})
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_update_blank_is_400(self, test_client):
        note = await create(test_client, "Keep", "me")
        response = await test_client.put(f"/notes/{note['id']}", json={"title": "t", "body": " "})
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_delete_missing_is_404(self, test_client):
        response = await test_client.delete("/notes/nope")
        assert response.status_code == 404


class TestMiddleware:

    @pytest.mark.asyncio
    async def test_request_id_is_echoed(self, test_client):
        response = await test_client.get("/notes", headers={"X-Request-ID": "abc12345"})
        assert response.headers["X-Request-ID"] == "abc12345"

    @pytest.mark.asyncio
    async def test_request_id_is_generated(self, test_client):
        response = await test_client.get("/notes")
        assert len(response.headers["X-Request-ID"]) == 8

    @pytest.mark.asyncio
    @pytest.mark.parametrize("incoming", ["has spaces in it", "x" * 65, "semi;colon"])
    async def test_malformed_request_id_is_replaced(self, test_client, incoming):
        response = await test_client.get("/notes", headers={"X-Request-ID": incoming})

        rid = response.headers["X-Request-ID"]
        assert rid != incoming
        assert len(rid) == 8

    def test_resolve_request_id(self):
        assert resolve_request_id("web-42.a_b") == "web-42.a_b"
        assert len(resolve_request_id(None)) == 8
        assert len(resolve_request_id("")) == 8

    @pytest.mark.asyncio
    async def test_access_log_counts_listed_notes(self, test_client, caplog):
        await create(test_client, "One", "1")
        await create(test_client, "Two", "2")
        caplog.set_level(logging.INFO, logger="notebox.access")

        await test_client.get("/notes", headers={"X-Request-ID": "list-1"})

        lines = [r.getMessage() for r in caplog.records if r.name == "notebox.access"]
        assert any("[list-1] GET /notes -> 200" in line and "notes=2" in line for line in lines)

    @pytest.mark.asyncio
    async def test_access_log_names_the_note_without_its_content(self, test_client, caplog):
        caplog.set_level(logging.INFO, logger="notebox.access")

        note = await create(test_client, "Secret title", "private body")
        await test_client.delete(f"/notes/{note['id']}")

        lines = [r.getMessage() for r in caplog.records if r.name == "notebox.access"]
        assert len(lines) == 2
        assert all(f"note={note['id']}" in line for line in lines)
        assert not any("Secret" in line or "private" in line for line in lines)

    @pytest.mark.asyncio
    async def test_health_is_not_access_logged(self, test_client, caplog):
        caplog.set_level(logging.INFO, logger="notebox.access")
        await test_client.get("/health")
        assert not [r for r in caplog.records if r.name == "notebox.access"]

    @pytest.mark.asyncio
    async def test_error_body_carries_request_id(self, test_client):
        response = await test_client.get("/notes/nope", headers={"X-Request-ID": "trace-me"})
        assert response.json()["request_id"] == "trace-me"


class TestHealth:

    @pytest.mark.asyncio
    async def test_healthy_when_connected(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"


@pytest_asyncio.fixture
async def disconnected_client():
    """Client for an app whose startup connection never succeeded."""
    from notebox.main import app
    await database.dispose()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


class TestWithoutDatabase:

    @pytest.mark.asyncio
    async def test_note_endpoints_return_503(self, disconnected_client):
        response = await disconnected_client.get("/notes")

        assert response.status_code == 503
        assert response.json()["error"] == "service_unavailable"

        response = await disconnected_client.post("/notes", json={"title": "t", "body": "b"})
        assert response.status_code == 503

    @pytest.mark.asyncio
    async def test_health_reports_disconnected(self, disconnected_client):
        response = await disconnected_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "unhealthy"
        assert body["database"] == "disconnected"
