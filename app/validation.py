# =============================================================================
# app/validation.py - Request Validation Middlewares
# =============================================================================
# Factories for route middlewares that parse part of the request into a DTO.
# They are listed in a route decorator's middleware chain and run as FastAPI
# dependencies before the handler:
#
#   @post_route("", middlewares=[validate_body(CreateUserDto)])
#   async def create_user(self, request: Request):
#       dto: CreateUserDto = request.state.body
#
# A failure raises ValidationError (422) with one entry per problem:
#   {"property": "email", "constraints": {"missing": "Field required"}, "value": None}
# =============================================================================

import json
import logging
from typing import Any, Awaitable, Callable

from fastapi import Request
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from app.exceptions import ValidationError

logger = logging.getLogger(__name__)

Middleware = Callable[[Request], Awaitable[None]]


def format_validation_errors(exc: PydanticValidationError) -> list[dict[str, Any]]:
    """Flatten pydantic errors into property/constraints/value entries."""
    details = []
    for error in exc.errors():
        details.append({
            "property": ".".join(str(part) for part in error.get("loc", ())),
            "constraints": {error.get("type", "invalid"): error.get("msg", "")},
            "value": None if error.get("type") == "missing" else error.get("input"),
        })
    return details


def _parse(dto: type[BaseModel], payload: Any, message: str) -> BaseModel:
    try:
        return dto.model_validate(payload)
    except PydanticValidationError as exc:
        raise ValidationError(message, format_validation_errors(exc)) from exc


def validate_body(dto: type[BaseModel]) -> Middleware:
    """Parse the JSON body into dto and store it on request.state.body."""
    async def body_validator(request: Request) -> None:
        raw = await request.body()
        if not raw.strip():
            payload: Any = {}
        else:
            try:
                payload = json.loads(raw)
            except json.JSONDecodeError as exc:
                raise ValidationError(
                    "Validation failed",
                    [{
                        "property": "body",
                        "constraints": {"json_invalid": f"Invalid JSON: {exc.msg}"},
                        "value": None,
                    }],
                ) from exc

        if not isinstance(payload, dict):
            raise ValidationError(
                "Validation failed",
                [{
                    "property": "body",
                    "constraints": {"model_type": "Request body must be a JSON object"},
                    "value": payload,
                }],
            )

        request.state.body = _parse(dto, payload, "Validation failed")

    body_validator.__name__ = f"validate_body_{dto.__name__}"
    return body_validator


def validate_query(dto: type[BaseModel]) -> Middleware:
    """Parse the query string into dto and store it on request.state.query."""
    async def query_validator(request: Request) -> None:
        request.state.query = _parse(dto, dict(request.query_params), "Query validation failed")

    query_validator.__name__ = f"validate_query_{dto.__name__}"
    return query_validator


def validate_params(dto: type[BaseModel]) -> Middleware:
    """Parse the path parameters into dto and store it on request.state.params."""
    async def params_validator(request: Request) -> None:
        request.state.params = _parse(dto, dict(request.path_params), "Parameter validation failed")

    params_validator.__name__ = f"validate_params_{dto.__name__}"
    return params_validator
