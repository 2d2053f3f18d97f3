# =============================================================================
# swagger_docs/decorators.py - Route and Operation Decorators
# =============================================================================
# Decorators that describe controller methods: the HTTP binding (route), the
# operation summary, parameters, request body and responses, plus the
# class-level tags.
#
# A method decorator runs before its class exists, so it stashes the
# normalized fact on the function. ControllerBase.__init_subclass__ then calls
# collect_method_declarations() which writes the facts into the store under
# (class, method name).
#
# Usage:
#   @api_tags("Users")
#   class UserController(ControllerBase):
#       @get_route("/:id")
#       @api_operation(summary="Get single user")
#       @api_param("id", description="User ID")
#       @api_ok_response(model=UserResponseDto)
#       async def get_user_by_id(self, request: Request): ...
# =============================================================================

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any, Callable, Sequence, TypeVar

from swagger_docs.exceptions import RouteDeclarationError
from swagger_docs.registry import MetadataStore, metadata_store
from swagger_docs.types import (
    HttpMethod,
    OperationFact,
    ParameterFact,
    ParameterLocation,
    RequestBodyFact,
    ResponseFact,
    RouteFact,
    strip_unset,
)

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])
T = TypeVar("T", bound=type)

_PENDING_ATTR = "__api_metadata__"
JSON_CONTENT = "application/json"


# =============================================================================
# Pending declarations
# =============================================================================

def _pending(func: Callable[..., Any]) -> dict[str, Any]:
    """Get (or create) the pending declarations stashed on a function."""
    pending = func.__dict__.get(_PENDING_ATTR)
    if pending is None:
        pending = {
            "route": None,
            "operation": None,
            "parameters": [],
            "request_body": None,
            "responses": [],
        }
        setattr(func, _PENDING_ATTR, pending)
    return pending


def collect_method_declarations(cls: type, store: MetadataStore) -> int:
    """
    Move the facts stashed on the methods of cls into the store.

    Only methods defined on cls itself are visited; inherited methods keep
    the facts recorded for the class they were written on.

    Returns:
        Number of methods that carried declarations
    """
    count = 0

    for name, member in vars(cls).items():
        func = getattr(member, "__func__", member)
        pending = getattr(func, "__dict__", {}).get(_PENDING_ATTR)
        if not pending:
            continue

        count += 1
        route = pending["route"]
        if route is not None:
            method, path, middlewares = route
            store.define_route(RouteFact(
                owner=cls,
                method_name=name,
                http_method=method,
                path=path,
                middlewares=tuple(middlewares),
            ))
        if pending["operation"] is not None:
            store.define_operation(cls, name, pending["operation"])
        for parameter in pending["parameters"]:
            store.add_parameter(cls, name, parameter)
        if pending["request_body"] is not None:
            store.define_request_body(cls, name, pending["request_body"])
        for response in pending["responses"]:
            store.define_response(cls, name, response)

    logger.debug(f"Collected declarations for {count} method(s) of {cls.__name__}")
    return count


# =============================================================================
# Schema helpers
# =============================================================================

def schema_for_model(model: Any, is_array: bool = False) -> dict[str, Any]:
    """
    Build the schema for a body/response `model` argument.

    A class becomes a DTO reference, a string is taken as a JSON type name,
    and None falls back to a plain object.
    """
    if is_array:
        return {"type": "array", "items": schema_for_model(model)}
    if model is None:
        return {"type": "object"}
    return {"type": model}


def _parameter_schema(
    schema_type: str | None,
    format: str | None,
    example: Any,
    enum: Sequence[Any] | None,
    pattern: str | None,
    minimum: float | None,
    maximum: float | None,
    min_length: int | None,
    max_length: int | None,
) -> dict[str, Any]:
    return strip_unset({
        "type": schema_type or "string",
        "format": format,
        "example": example,
        "enum": list(enum) if enum is not None else None,
        "pattern": pattern,
        "minimum": minimum,
        "maximum": maximum,
        "minLength": min_length,
        "maxLength": max_length,
    })


# =============================================================================
# Route decorators
# =============================================================================

def route(
    method: str,
    path: str = "",
    middlewares: Sequence[Callable[..., Any]] | None = None,
) -> Callable[[F], F]:
    """
    Bind a controller method to an HTTP verb and path.

    Path parameters use colon syntax ("/:id"). Middlewares run in the given
    order before the handler. The verb is validated when the controller is
    bound, not here.

    Raises:
        RouteDeclarationError: If the method already has a route
    """
    def decorator(func: F) -> F:
        pending = _pending(func)
        if pending["route"] is not None:
            raise RouteDeclarationError([
                f"{func.__qualname__} is bound more than once "
                f"({pending['route'][0].upper()} and {method.upper()})"
            ])
        pending["route"] = (method.lower(), path, list(middlewares or []))
        return func

    return decorator


def get_route(path: str = "", middlewares: Sequence[Callable[..., Any]] | None = None) -> Callable[[F], F]:
    return route(HttpMethod.GET.value, path, middlewares)


def post_route(path: str = "", middlewares: Sequence[Callable[..., Any]] | None = None) -> Callable[[F], F]:
    return route(HttpMethod.POST.value, path, middlewares)


def put_route(path: str = "", middlewares: Sequence[Callable[..., Any]] | None = None) -> Callable[[F], F]:
    return route(HttpMethod.PUT.value, path, middlewares)


def delete_route(path: str = "", middlewares: Sequence[Callable[..., Any]] | None = None) -> Callable[[F], F]:
    return route(HttpMethod.DELETE.value, path, middlewares)


def patch_route(path: str = "", middlewares: Sequence[Callable[..., Any]] | None = None) -> Callable[[F], F]:
    return route(HttpMethod.PATCH.value, path, middlewares)


# =============================================================================
# Operation decorators
# =============================================================================

def api_operation(
    summary: str | None = None,
    description: str | None = None,
    tags: Sequence[str] | None = None,
    deprecated: bool | None = None,
    external_docs: dict[str, str] | None = None,
) -> Callable[[F], F]:
    """Describe the operation (summary, description, extra tags, deprecation)."""
    fact = OperationFact(
        summary=summary,
        description=description,
        tags=list(tags or []),
        deprecated=deprecated,
        external_docs=external_docs,
    )

    def decorator(func: F) -> F:
        _pending(func)["operation"] = fact
        return func

    return decorator


def api_param(
    name: str,
    description: str | None = None,
    required: bool | None = None,
    schema_type: str | None = None,
    format: str | None = None,
    example: Any = None,
    enum: Sequence[Any] | None = None,
    pattern: str | None = None,
    minimum: float | None = None,
    maximum: float | None = None,
    min_length: int | None = None,
    max_length: int | None = None,
) -> Callable[[F], F]:
    """
    Declare a path parameter.

    Path parameters are required unless `required=False` is passed.
    """
    fact = ParameterFact(
        name=name,
        location=ParameterLocation.PATH,
        required=required is not False,
        description=description,
        schema=_parameter_schema(
            schema_type, format, example, enum, pattern,
            minimum, maximum, min_length, max_length,
        ),
    )

    def decorator(func: F) -> F:
        # Decorators apply bottom-up; prepend to keep source order
        _pending(func)["parameters"].insert(0, fact)
        return func

    return decorator


def api_query(
    name: str,
    description: str | None = None,
    required: bool = False,
    schema_type: str | None = None,
    format: str | None = None,
    example: Any = None,
    enum: Sequence[Any] | None = None,
    pattern: str | None = None,
    minimum: float | None = None,
    maximum: float | None = None,
    min_length: int | None = None,
    max_length: int | None = None,
    allow_empty_value: bool | None = None,
    allow_reserved: bool | None = None,
    explode: bool | None = None,
    style: str | None = None,
) -> Callable[[F], F]:
    """Declare a query parameter (optional unless `required=True`)."""
    fact = ParameterFact(
        name=name,
        location=ParameterLocation.QUERY,
        required=bool(required),
        description=description,
        schema=_parameter_schema(
            schema_type, format, example, enum, pattern,
            minimum, maximum, min_length, max_length,
        ),
        style=style,
        explode=explode,
        allow_empty_value=allow_empty_value,
        allow_reserved=allow_reserved,
    )

    def decorator(func: F) -> F:
        _pending(func)["parameters"].insert(0, fact)
        return func

    return decorator


def api_body(
    model: Any = None,
    description: str | None = None,
    required: bool = False,
    content: dict[str, dict[str, Any]] | None = None,
    examples: dict[str, Any] | None = None,
) -> Callable[[F], F]:
    """
    Declare the request body.

    `model` may be a DTO class or a JSON type name. An explicit `content`
    mapping replaces the generated application/json entry.
    """
    if content is None:
        content = {
            JSON_CONTENT: strip_unset({
                "schema": schema_for_model(model),
                "examples": examples,
            })
        }
    fact = RequestBodyFact(content=content, required=bool(required), description=description)

    def decorator(func: F) -> F:
        _pending(func)["request_body"] = fact
        return func

    return decorator


def api_response(
    status: int,
    description: str | None = None,
    model: Any = None,
    is_array: bool = False,
    example: Any = None,
    headers: dict[str, Any] | None = None,
) -> Callable[[F], F]:
    """
    Declare a response for one status code.

    Redeclaring a status code replaces the earlier entry.
    """
    media = strip_unset({
        "schema": schema_for_model(model, is_array) if model is not None else None,
        "example": example,
    })
    fact = ResponseFact(
        status=int(status),
        description=description or _reason_phrase(status),
        content={JSON_CONTENT: media} if media else None,
        headers=headers,
    )

    def decorator(func: F) -> F:
        # Applied bottom-up: the topmost declaration is written last and wins
        _pending(func)["responses"].append(fact)
        return func

    return decorator


def _reason_phrase(status: int) -> str:
    try:
        return HTTPStatus(int(status)).phrase
    except ValueError:
        return "Response"


def _status_shorthand(status: int) -> Callable[..., Callable[[F], F]]:
    def shorthand(
        description: str | None = None,
        model: Any = None,
        is_array: bool = False,
        example: Any = None,
        headers: dict[str, Any] | None = None,
    ) -> Callable[[F], F]:
        return api_response(
            status,
            description=description,
            model=model,
            is_array=is_array,
            example=example,
            headers=headers,
        )

    shorthand.__doc__ = f"Declare the {status} {_reason_phrase(status)} response."
    return shorthand


api_ok_response = _status_shorthand(200)
api_created_response = _status_shorthand(201)
api_no_content_response = _status_shorthand(204)
api_bad_request_response = _status_shorthand(400)
api_unauthorized_response = _status_shorthand(401)
api_forbidden_response = _status_shorthand(403)
api_not_found_response = _status_shorthand(404)
api_conflict_response = _status_shorthand(409)
api_unprocessable_entity_response = _status_shorthand(422)
api_internal_server_error_response = _status_shorthand(500)
api_service_unavailable_response = _status_shorthand(503)


# =============================================================================
# Class decorators
# =============================================================================

def api_tags(*tags: str) -> Callable[[T], T]:
    """Attach tag names to every operation of a controller class."""
    def decorator(cls: T) -> T:
        store: MetadataStore | None = getattr(cls, "metadata_store", None)
        if store is None:
            store = metadata_store
        store.define_tags(cls, list(tags))
        return cls

    return decorator
