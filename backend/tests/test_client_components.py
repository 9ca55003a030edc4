"""
Gif Catalog Client — Component Tests
======================================

What:  Tests for GifsApiClient and the GifsIndex / GifsForm / GifTile view.
How:   The client talks to the real app in-process over ASGITransport.
       Transport failures use httpx.MockTransport.

What we test:
    ✅ Mount loads the list; failures leave it empty and reach on_error
    ✅ Submit appends one tile with the server's id, name, url, likes
    ✅ Form fields are empty after submit, on success and on failure
    ✅ Blank likes is left out of the payload
    ✅ Rendered HTML is escaped
"""

import logging

import httpx
import pytest

from gif_catalog.client.api_client import GifsApiClient
from gif_catalog.client.components import GifsForm, GifsIndex, GifTile
from gif_catalog.exceptions import NetworkError
from gif_catalog.schemas.gif import GifResponse


def _refusing_client() -> GifsApiClient:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)

    return GifsApiClient(base_url="http://test", transport=httpx.MockTransport(handler))


def _status_client(status_code: int) -> GifsApiClient:
    return GifsApiClient(
        base_url="http://test",
        transport=httpx.MockTransport(lambda request: httpx.Response(status_code, json={})),
    )


class TestGifsApiClient:

    @pytest.mark.asyncio
    async def test_create_and_list(self, api_client):
        created = await api_client.create_gif({"name": "cat", "url": "http://x/cat.gif"})

        assert created.likes == 0
        assert await api_client.list_gifs() == [created]
        assert await api_client.get_gif(created.id) == created

    @pytest.mark.asyncio
    async def test_http_error_becomes_network_error(self):
        async with _status_client(503) as client:
            with pytest.raises(NetworkError, match=r"503 \(Service Unavailable\)") as exc_info:
                await client.list_gifs()
        assert exc_info.value.status_code == 503

    @pytest.mark.asyncio
    async def test_transport_error_becomes_network_error(self):
        async with _refusing_client() as client:
            with pytest.raises(NetworkError, match="ConnectError"):
                await client.list_gifs()

    @pytest.mark.asyncio
    async def test_validation_failure_is_network_error(self, api_client):
        with pytest.raises(NetworkError, match="422"):
            await api_client.create_gif({"name": "", "url": ""})


class TestGifsIndex:

    @pytest.mark.asyncio
    async def test_mount_loads_list(self, api_client):
        await api_client.create_gif({"name": "cat", "url": "http://x/cat.gif", "likes": "2"})
        await api_client.create_gif({"name": "dog", "url": "http://x/dog.gif", "likes": "9"})

        index = GifsIndex(api_client)
        await index.mount()

        assert [g.name for g in index.gifs] == ["dog", "cat"]

    @pytest.mark.asyncio
    async def test_mount_failure_logs_and_stays_empty(self, caplog):
        async with _refusing_client() as client:
            index = GifsIndex(client)
            with caplog.at_level(logging.ERROR):
                await index.mount()

        assert index.gifs == []
        assert "Error in Fetch" in caplog.text

    @pytest.mark.asyncio
    async def test_submit_appends_new_tile(self, api_client):
        index = GifsIndex(api_client)
        await index.mount()
        tiles_before = index.render().count('class="gif-tile"')

        index.form.handle_change("name", "cat")
        index.form.handle_change("url", "http://x/cat.gif")
        await index.form.submit()

        page = index.render()
        assert page.count('class="gif-tile"') == tiles_before + 1
        assert "<h2>cat</h2>" in page
        assert 'src="http://x/cat.gif"' in page
        assert "Likes: 0" in page
        assert index.gifs[-1].id is not None
        assert index.form.fields == {"name": "", "url": "", "likes": ""}

    @pytest.mark.asyncio
    async def test_failed_submit_reports_and_clears_form(self, api_client):
        errors = []
        index = GifsIndex(api_client, on_error=errors.append)
        await index.add_new_gif({"name": "cat", "url": "http://x/cat.gif"})

        index.form.handle_change("name", "cat")
        index.form.handle_change("url", "http://x/again.gif")
        await index.form.submit()

        assert len(index.gifs) == 1
        assert len(errors) == 1
        assert errors[0].status_code == 422
        assert index.form.fields == {"name": "", "url": "", "likes": ""}


class TestGifsForm:

    def setup_method(self):
        self.submitted = []

        async def add_new_gif(payload):
            self.submitted.append(payload)

        self.form = GifsForm(add_new_gif=add_new_gif)

    def test_handle_change_keeps_other_fields(self):
        self.form.handle_change("name", "cat")
        self.form.handle_change("url", "http://x/cat.gif")

        assert self.form.fields["name"] == "cat"
        assert self.form.fields["url"] == "http://x/cat.gif"

    def test_unknown_field_rejected(self):
        with pytest.raises(KeyError):
            self.form.handle_change("id", "1")

    @pytest.mark.asyncio
    async def test_blank_likes_omitted(self):
        self.form.handle_change("name", "cat")
        self.form.handle_change("url", "http://x/cat.gif")
        await self.form.submit()

        assert self.submitted == [{"name": "cat", "url": "http://x/cat.gif"}]

    @pytest.mark.asyncio
    async def test_likes_sent_when_filled(self):
        self.form.handle_change("name", "cat")
        self.form.handle_change("url", "http://x/cat.gif")
        self.form.handle_change("likes", " 4 ")
        await self.form.submit()

        assert self.submitted[0]["likes"] == "4"

    def test_render_shows_field_values(self):
        self.form.handle_change("name", "cat")
        html = self.form.render()
        assert 'name="name" type="text" value="cat"' in html
        assert 'value="Add Gif!"' in html

    def test_rendered_form_has_no_native_submit_target(self):
        """A browser-native submit would post form-encoded data the JSON API rejects."""
        html = self.form.render()

        assert "action=" not in html
        assert "method=" not in html


class TestGifTile:

    def test_render_escapes_markup(self):
        tile = GifTile(GifResponse(id=1, name="<script>x</script>", url="http://x/a.gif", likes=3))

        html = tile.render()

        assert "<script>" not in html
        assert "&lt;script&gt;" in html
        assert "Likes: 3" in html
