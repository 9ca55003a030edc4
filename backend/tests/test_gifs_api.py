"""
Gif Catalog Backend — API Endpoint Tests
==========================================

What:  End-to-end tests of /api/v1/gifs and /health through the ASGI app.
How:   httpx AsyncClient over ASGITransport; real per-test SQLite database.
"""

import pytest


class TestCreateGif:

    @pytest.mark.asyncio
    async def test_create_then_list(self, test_client):
        response = await test_client.post(
            "/api/v1/gifs",
            json={"gif": {"name": "cat", "url": "http://x/cat.gif"}},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["name"] == "cat"
        assert body["url"] == "http://x/cat.gif"
        assert body["likes"] == 0
        assert body["id"] is not None

        listing = await test_client.get("/api/v1/gifs")
        assert listing.status_code == 200
        assert body in listing.json()

    @pytest.mark.asyncio
    async def test_create_accepts_flat_body(self, test_client):
        response = await test_client.post(
            "/api/v1/gifs",
            json={"name": "dog", "url": "http://x/dog.gif", "likes": 3},
        )

        assert response.status_code == 200
        assert response.json()["likes"] == 3

    @pytest.mark.asyncio
    async def test_duplicate_name_returns_422(self, test_client):
        payload = {"gif": {"name": "cat", "url": "http://x/cat.gif"}}
        await test_client.post("/api/v1/gifs", json=payload)

        response = await test_client.post("/api/v1/gifs", json=payload)

        assert response.status_code == 422
        body = response.json()
        assert body["error"] == "validation_error"
        assert body["errors"] == ["Name has already been taken"]
        assert body["request_id"] == response.headers["X-Request-ID"]

        listing = await test_client.get("/api/v1/gifs")
        assert len(listing.json()) == 1

    @pytest.mark.asyncio
    async def test_blank_fields_return_422(self, test_client):
        response = await test_client.post("/api/v1/gifs", json={"gif": {"name": "", "likes": 2}})

        assert response.status_code == 422
        assert response.json()["errors"] == ["Name can't be blank", "Url can't be blank"]

    @pytest.mark.asyncio
    async def test_non_integer_likes_rejected(self, test_client):
        response = await test_client.post(
            "/api/v1/gifs",
            json={"gif": {"name": "cat", "url": "http://x/cat.gif", "likes": "lots"}},
        )
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_likes_too_large_returns_422(self, test_client):
        response = await test_client.post(
            "/api/v1/gifs",
            json={"gif": {"name": "big", "url": "http://x/b.gif", "likes": 2**64}},
        )

        assert response.status_code == 422
        assert response.json()["errors"] == ["Likes must be less than or equal to 2147483647"]
        assert (await test_client.get("/api/v1/gifs")).json() == []

    @pytest.mark.asyncio
    async def test_name_too_long_returns_422(self, test_client):
        response = await test_client.post(
            "/api/v1/gifs",
            json={"gif": {"name": "n" * 300, "url": "http://x/b.gif"}},
        )

        assert response.status_code == 422
        assert response.json()["errors"] == ["Name is too long (maximum is 255 characters)"]


class TestListGifs:

    @pytest.mark.asyncio
    async def test_empty_list(self, test_client):
        response = await test_client.get("/api/v1/gifs")

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_sorted_by_likes_desc(self, test_client):
        for name, likes in [("a", 5), ("b", 1), ("c", 3)]:
            await test_client.post(
                "/api/v1/gifs",
                json={"gif": {"name": name, "url": f"http://x/{name}.gif", "likes": likes}},
            )

        response = await test_client.get("/api/v1/gifs")

        assert [g["likes"] for g in response.json()] == [5, 3, 1]
        assert set(response.json()[0]) == {"id", "name", "url", "likes"}


class TestShowGif:

    @pytest.mark.asyncio
    async def test_show_existing(self, test_client):
        created = (await test_client.post(
            "/api/v1/gifs", json={"gif": {"name": "cat", "url": "http://x/cat.gif"}}
        )).json()

        response = await test_client.get(f"/api/v1/gifs/{created['id']}")

        assert response.status_code == 200
        assert response.json() == created

    @pytest.mark.asyncio
    async def test_show_unknown_id_returns_404(self, test_client):
        response = await test_client.get("/api/v1/gifs/4242")

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    @pytest.mark.asyncio
    async def test_show_non_integer_id_returns_422(self, test_client):
        response = await test_client.get("/api/v1/gifs/not-a-number")
        assert response.status_code == 422


class TestAmbient:

    @pytest.mark.asyncio
    async def test_request_id_echoed(self, test_client):
        response = await test_client.get("/api/v1/gifs", headers={"X-Request-ID": "abc123"})
        assert response.headers["X-Request-ID"] == "abc123"

    @pytest.mark.asyncio
    async def test_request_id_generated(self, test_client):
        response = await test_client.get("/api/v1/gifs")
        assert len(response.headers["X-Request-ID"]) == 8

    @pytest.mark.asyncio
    async def test_health(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
