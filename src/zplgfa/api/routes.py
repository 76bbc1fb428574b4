"""REST API routes for zplgfa."""

import logging
import secrets
from typing import Any

from fastapi import APIRouter, HTTPException, Request, Response, status
from pydantic import BaseModel
from starlette.concurrency import run_in_threadpool

from zplgfa.config import AppConfig
from zplgfa.converters.zpl import (
    ZPL_END,
    ZPL_START,
    ConversionError,
    ImageTooLargeError,
    encode_graphic_field,
    load_image,
)
from zplgfa.models.graphic import GraphicType

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["api"])

# Set by the app during startup
_app_state: dict[str, Any] = {}


def set_app_state(config: AppConfig) -> None:
    """Set application state references for the routes."""
    _app_state["config"] = config


def _get_config() -> AppConfig:
    return _app_state.get("config") or AppConfig()


def _provided_api_key(request: Request) -> str | None:
    """Return the key a client sent, checking header, bearer token, then query."""
    headers = request.headers
    key = headers.get("X-API-Key")
    if key is not None:
        return key

    scheme, _, token = headers.get("Authorization", "").partition(" ")
    if scheme.lower() == "bearer" and token:
        return token

    return request.query_params.get("api_key")


async def verify_api_key(request: Request) -> None:
    """Reject the request unless it carries the configured API key.

    Without a configured ``api_key`` every request is accepted.
    """
    expected = _get_config().api_key
    if not expected:
        return

    provided = _provided_api_key(request)
    if provided and secrets.compare_digest(provided.encode(), expected.encode()):
        return

    logger.warning(f"Rejected {request.method} {request.url.path}: invalid or missing API key")
    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid or missing API key",
        headers={"WWW-Authenticate": "Bearer"},
    )


# Response models


class GraphicTypeInfo(BaseModel):
    """Graphic type information response."""

    name: GraphicType
    letter: str
    default: bool


@router.get("/graphic-types", response_model=list[GraphicTypeInfo])
async def list_graphic_types() -> list[GraphicTypeInfo]:
    """List the supported ^GF data formats."""
    default = _get_config().default_graphic_type
    return [
        GraphicTypeInfo(name=graphic_type, letter=graphic_type.letter, default=graphic_type == default)
        for graphic_type in GraphicType
    ]


@router.post("/convert")
async def convert_image(request: Request, graphic_type: str | None = None, wrap: bool = True) -> Response:
    """Convert an uploaded image to ZPL.

    The request body is the raw image file (PNG, JPEG, GIF, ...). With
    ``wrap`` (default) the graphic field is wrapped in a complete
    ^XA..^XZ label, otherwise only the ^GF command is returned.
    """
    config = _get_config()

    try:
        selected_type = GraphicType.parse(graphic_type) if graphic_type else config.default_graphic_type
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    data = await request.body()
    if not data:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Request body must contain an image")

    try:
        image = load_image(data, max_pixels=config.max_image_pixels)
    except ImageTooLargeError as e:
        raise HTTPException(status_code=413, detail=str(e)) from e
    except ConversionError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e

    width, height = image.size

    # Encoding is CPU bound, keep it off the event loop
    field = await run_in_threadpool(encode_graphic_field, image, selected_type)
    logger.info(f"Converted {width}x{height} image to {selected_type} ({field.byte_count} bytes)")

    content = field.to_bytes()
    if wrap:
        content = ZPL_START + content + ZPL_END

    media_type = "application/octet-stream" if selected_type == GraphicType.BINARY else "text/plain"
    return Response(
        content=content,
        media_type=media_type,
        headers={
            "X-Graphic-Type": str(selected_type),
            "X-Byte-Count": str(field.byte_count),
            "X-Total-Bytes": str(field.total_bytes),
            "X-Row-Bytes": str(field.row_bytes),
        },
    )
