"""HTTP error mapping for the Mediashelf API."""
from __future__ import annotations

import math
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from backend.media_core import NotFound

from .schemas import ContentNotFoundModel


class ContentNotFoundError(LookupError):
    """Raised by routes when the resolver reports :class:`NotFound`."""

    def __init__(self, result: NotFound) -> None:
        super().__init__(f"Content {result.item_id!r} not found")
        self.item_id = str(result.item_id)


def _json_safe(value: Any) -> Any:
    """Replace non-finite floats, which JSON cannot carry, with their string form."""

    if isinstance(value, float) and not math.isfinite(value):
        return str(value)
    if isinstance(value, dict):
        return {key: _json_safe(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_safe(item) for item in value]
    return value


async def _content_not_found_handler(request: Request, exc: ContentNotFoundError) -> JSONResponse:
    body = ContentNotFoundModel(id=exc.item_id)
    return JSONResponse(status_code=404, content=body.model_dump())


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = _json_safe(jsonable_encoder(exc.errors()))
    return JSONResponse(status_code=422, content={"detail": errors})


def register_exception_handlers(app: FastAPI) -> None:
    """Install handlers for resolver misses and request validation failures."""

    app.add_exception_handler(ContentNotFoundError, _content_not_found_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
