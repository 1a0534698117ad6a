"""
JSON rendering for every response the app sends.

Request bodies may carry ``\\uXXXX`` escapes for lone surrogates.  Those
decode into Python strings that cannot be encoded as UTF-8, so Starlette's
default ``JSONResponse`` fails when such a value is echoed back (a checkout
payload, or the ``input`` of a validation error).  Rendering with ASCII
escapes turns them back into the same ``\\uXXXX`` text the client sent.
"""

import json
from typing import Any

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


class EscapedJSONResponse(JSONResponse):
    """``JSONResponse`` that escapes every non-ASCII character."""

    def render(self, content: Any) -> bytes:
        return json.dumps(
            content,
            ensure_ascii=True,
            allow_nan=False,
            indent=None,
            separators=(",", ":"),
        ).encode("ascii")


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> EscapedJSONResponse:
    """Answer ``422`` with the validation errors, rendered escaped."""
    return EscapedJSONResponse(status_code=422, content={"detail": jsonable_encoder(exc.errors())})
