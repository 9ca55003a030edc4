"""
Gif Catalog Client — View Components
======================================

What:  The single-page view: a form for new gifs above a list of tiles.
How:   Components hold view state in plain attributes and re-render the
       whole page from that state on every `render()` call, through
       autoescaped Jinja2 templates shipped in `client/templates/`.

    GifsIndex  ── owns `gifs` (view state) and the API client
    ├── GifsForm  ── local field state, submit → GifsIndex.add_new_gif
    └── GifTile   ── one gif: name, image, like count

Error surface:
    Network failures never escape the components. They are passed to an
    `on_error` callable; the default logs "Error in Fetch: <message>".
    Supply a different callable to show errors to the user.
"""

import logging
from typing import Awaitable, Callable, Dict, List, Optional

from jinja2 import Environment, PackageLoader, select_autoescape

from gif_catalog.client.api_client import GifsApiClient
from gif_catalog.exceptions import NetworkError
from gif_catalog.schemas.gif import GifResponse

logger = logging.getLogger(__name__)

ErrorHandler = Callable[[NetworkError], None]

templates = Environment(
    loader=PackageLoader("gif_catalog.client", "templates"),
    autoescape=select_autoescape(["html"]),
)


def log_fetch_error(error: NetworkError) -> None:
    """Default error hook: report to the log and carry on."""
    logger.error("Error in Fetch: %s", error.message)


class GifTile:
    """Presentational tile for one gif."""

    def __init__(self, gif: GifResponse):
        self.gif = gif

    def render(self) -> str:
        return templates.get_template("gif_tile.html").render(gif=self.gif)


class GifsForm:
    """
    New-gif form with local field state.

    `likes` starts blank rather than 0: when left blank it is omitted from
    the payload and the server applies its own default.
    """

    FIELDS = ("name", "url", "likes")

    def __init__(self, add_new_gif: Callable[[Dict[str, str]], Awaitable[None]]):
        self.add_new_gif = add_new_gif
        self.fields: Dict[str, str] = {}
        self.clear()

    def handle_change(self, field: str, value: str) -> None:
        """Update a single field; the other fields keep their values."""
        if field not in self.FIELDS:
            raise KeyError(f"Unknown form field '{field}'")
        self.fields[field] = value

    def clear(self) -> None:
        self.fields = {field: "" for field in self.FIELDS}

    def payload(self) -> Dict[str, str]:
        payload = {"name": self.fields["name"], "url": self.fields["url"]}
        if self.fields["likes"].strip():
            payload["likes"] = self.fields["likes"].strip()
        return payload

    async def submit(self) -> None:
        """
        Dispatch the current fields and reset the form.

        Fields are cleared before the request goes out, so they end up
        empty whether or not the create succeeds. This is the only submit
        path: the rendered <form> has no action, since the API takes JSON.
        """
        payload = self.payload()
        self.clear()
        await self.add_new_gif(payload)

    def render(self) -> str:
        return templates.get_template("gifs_form.html").render(fields=self.fields)


class GifsIndex:
    """
    Page component: loads the gif list and appends newly created gifs.

    Args:
        api:      API client used for list and create requests.
        on_error: Receives every NetworkError; defaults to log_fetch_error.
    """

    def __init__(self, api: GifsApiClient, on_error: Optional[ErrorHandler] = None):
        self.api = api
        self.on_error = on_error or log_fetch_error
        self.gifs: List[GifResponse] = []
        self.form = GifsForm(add_new_gif=self.add_new_gif)

    async def mount(self) -> None:
        """Fetch the list; on failure report it and keep the current (empty) state."""
        try:
            self.gifs = await self.api.list_gifs()
        except NetworkError as e:
            self.on_error(e)

    async def add_new_gif(self, payload: Dict[str, str]) -> None:
        """Create a gif and append the server's copy (with its id) to the list."""
        try:
            gif = await self.api.create_gif(payload)
        except NetworkError as e:
            self.on_error(e)
            return
        self.gifs = [*self.gifs, gif]

    def render(self) -> str:
        tiles = [GifTile(gif).render() for gif in self.gifs]
        return templates.get_template("gifs_index.html").render(
            form=self.form.render(),
            tiles=tiles,
        )
