"""
Gif Catalog Backend — Gif Route Handlers
==========================================

What:  GET /api/v1/gifs (index), POST /api/v1/gifs (create),
       GET /api/v1/gifs/{gif_id} (show).
How:   Pull the GifStore off the application state, call it, return
       GifResponse models. Store errors propagate to the global handlers
       (ValidationError → 422, NotFoundError → 404, DatabaseError → 500).
Who:   Called by the client components and any other JSON consumer.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Request

from gif_catalog.schemas.gif import ErrorResponse, GifCreateRequest, GifResponse
from gif_catalog.services.gif_store import GifStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["Gifs"])


def get_gif_store(request: Request) -> GifStore:
    """Dependency returning the store created by `create_app()`."""
    return request.app.state.gif_store


@router.get(
    "/gifs",
    response_model=List[GifResponse],
    responses={
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List all gifs, most liked first",
)
async def list_gifs(store: GifStore = Depends(get_gif_store)) -> List[GifResponse]:
    gifs = await store.list()
    return [GifResponse.model_validate(gif) for gif in gifs]


@router.post(
    "/gifs",
    response_model=GifResponse,
    responses={
        200: {"description": "Gif created", "model": GifResponse},
        422: {"description": "Blank field or duplicate name", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create a gif",
    description=(
        "Creates a gif from `{\"gif\": {name, url, likes}}`. A flat body is accepted "
        "as well. `likes` defaults to 0. Responds 200 with the stored gif, or 422 "
        "with an `errors` list when name/url is blank or the name is taken."
    ),
)
async def create_gif(
    body: GifCreateRequest,
    store: GifStore = Depends(get_gif_store),
) -> GifResponse:
    gif = await store.create(body.gif)
    return GifResponse.model_validate(gif)


@router.get(
    "/gifs/{gif_id}",
    response_model=GifResponse,
    responses={
        200: {"description": "The gif", "model": GifResponse},
        404: {"description": "Gif not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Get a single gif by ID",
)
async def get_gif(
    gif_id: int,
    store: GifStore = Depends(get_gif_store),
) -> GifResponse:
    """
    Non-integer ids never reach the store: FastAPI rejects them with 422
    while parsing the path.
    """
    gif = await store.get_by_id(gif_id)
    return GifResponse.model_validate(gif)
