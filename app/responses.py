# =============================================================================
# app/responses.py - Response Envelopes
# =============================================================================
# Handlers return their payload wrapped in one of these envelopes:
#   success   -> {"data": ...}
#   paginated -> {"data": [...], "meta": {...}}
#   error     -> {"error": "<CODE>", "message": "..."}
#
# Payloads may be pydantic models; they are serialized by alias (camelCase).
# =============================================================================

from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, Response


def _encode(value: Any) -> Any:
    return jsonable_encoder(value, by_alias=True)


def success(data: Any, status_code: int = 200) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"data": _encode(data)})


def paginated(data: list[Any], meta: Any, status_code: int = 200) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"data": _encode(data), "meta": _encode(meta)},
    )


def created(data: Any) -> JSONResponse:
    return success(data, status_code=201)


def no_content() -> Response:
    return Response(status_code=204)


def error(error_code: str, message: str, status_code: int = 400) -> JSONResponse:
    """Error envelope for handlers that answer directly instead of raising."""
    return JSONResponse(status_code=status_code, content={"error": error_code, "message": message})
