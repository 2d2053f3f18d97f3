# =============================================================================
# swagger_docs/generator.py - Per-Controller Operation Generator
# =============================================================================
# Each controller owns one SwaggerGenerator. The route binder records every
# route it registers here; SwaggerService later asks each generator for its
# operations and for the DTO schemas those operations reference.
#
# Schemas produced here still hold DTO classes as {"type": <class>}; the
# service turns them into $ref pointers once all generators are merged.
# =============================================================================

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from swagger_docs.registry import MetadataStore
from swagger_docs.types import ParameterLocation, is_model_reference

logger = logging.getLogger(__name__)

DEFAULT_RESPONSE: dict[str, Any] = {
    "description": "Success",
    "content": {"application/json": {"schema": {"type": "object"}}},
}


# =============================================================================
# Route Info
# =============================================================================

@dataclass
class RouteInfo:
    """A route as registered by the binder."""
    path: str
    method: str
    handler_name: str
    controller: Any
    controller_class: type

    @property
    def key(self) -> str:
        return f"{self.method.lower()}:{self.path}"


# =============================================================================
# Schema helpers
# =============================================================================

def build_model_schema(store: MetadataStore, cls: type) -> dict[str, Any] | None:
    """
    Build the component schema of a DTO class from its Property Facts.

    Returns:
        Object schema, or None if the class has no documented properties
    """
    properties = store.get_properties(cls)
    if not properties:
        return None

    schema: dict[str, Any] = {
        "type": "object",
        "properties": {name: prop.to_dict() for name, prop in properties.items()},
    }
    required = [name for name, prop in properties.items() if prop.required]
    if required:
        schema["required"] = required
    return schema


def collect_model_references(schema: Any, found: list[type]) -> None:
    """
    Append every DTO class referenced inside schema to found.

    Walks dicts and lists recursively, so array `items`, object `properties`
    and `allOf`/`oneOf` members are all visited. Order is first-seen.
    """
    if isinstance(schema, dict):
        if is_model_reference(schema) and schema["type"] not in found:
            found.append(schema["type"])
        for key, value in schema.items():
            if key != "type":
                collect_model_references(value, found)
    elif isinstance(schema, list):
        for value in schema:
            collect_model_references(value, found)


# =============================================================================
# Generator
# =============================================================================

class SwaggerGenerator:
    """
    Collects one controller's routes and renders their operations.

    Args:
        store: Metadata store the route facts were recorded in
    """

    def __init__(self, store: MetadataStore):
        self.store = store
        self._routes: list[RouteInfo] = []

    def add_route(
        self,
        path: str,
        method: str,
        handler_name: str,
        controller: Any,
        controller_class: type | None = None,
    ) -> None:
        self._routes.append(RouteInfo(
            path=path,
            method=method.lower(),
            handler_name=handler_name,
            controller=controller,
            controller_class=controller_class or type(controller),
        ))

    def get_routes(self) -> list[RouteInfo]:
        return list(self._routes)

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def generate_operations(self) -> dict[str, dict[str, Any]]:
        """
        Operations keyed by "<verb>:<route path>".

        When two routes share a verb and path the first one registered is
        kept, matching the handler the router serves.
        """
        operations: dict[str, dict[str, Any]] = {}
        for route in self._routes:
            if route.key not in operations:
                operations[route.key] = self.generate_operation(route)
        return operations

    def generate_operation(self, route: RouteInfo) -> dict[str, Any]:
        """
        Merge every fact recorded for one route into an operation object.

        Key order: summary/description/deprecated/externalDocs, tags,
        parameters, requestBody, responses.
        """
        cls = route.controller_class
        name = route.handler_name

        operation_fact = self.store.get_operation(cls, name)
        operation: dict[str, Any] = operation_fact.to_dict() if operation_fact else {}
        operation_tags = operation.pop("tags", [])

        tags: list[str] = []
        for tag in self.store.get_tags(cls) + operation_tags:
            if tag not in tags:
                tags.append(tag)
        if tags:
            operation["tags"] = tags

        parameters = self.store.get_parameters(cls, name)
        ordered = (
            [p for p in parameters if p.location is ParameterLocation.PATH]
            + [p for p in parameters if p.location is ParameterLocation.QUERY]
        )
        if ordered:
            operation["parameters"] = [p.to_dict() for p in ordered]

        body = self.store.get_request_body(cls, name)
        if body is not None:
            operation["requestBody"] = body.to_dict()

        responses = self.store.get_responses(cls, name)
        if responses:
            operation["responses"] = {
                str(status): responses[status].to_dict() for status in sorted(responses)
            }
        else:
            operation["responses"] = {"200": _default_response()}

        return operation

    # -------------------------------------------------------------------------
    # Schemas
    # -------------------------------------------------------------------------

    def referenced_models(self) -> list[type]:
        """
        Every DTO class reachable from this controller's bodies and responses.

        Includes classes nested inside other DTOs' properties.
        """
        found: list[type] = []
        for route in self._routes:
            cls, name = route.controller_class, route.handler_name
            body = self.store.get_request_body(cls, name)
            if body is not None:
                collect_model_references(body.content, found)
            for response in self.store.get_responses(cls, name).values():
                collect_model_references(response.content, found)

        # Follow references inside DTO properties; `found` grows as we go
        index = 0
        while index < len(found):
            for prop in self.store.get_properties(found[index]).values():
                collect_model_references(prop.schema, found)
            index += 1
        return found

    def generate_schemas(self) -> dict[type, dict[str, Any]]:
        """
        Component schemas keyed by DTO class.

        Classes without Property Facts are left out.
        """
        schemas: dict[type, dict[str, Any]] = {}
        for cls in self.referenced_models():
            schema = build_model_schema(self.store, cls)
            if schema is None:
                logger.debug(f"{cls.__name__} has no documented properties, no schema emitted")
                continue
            schemas[cls] = schema
        return schemas


def _default_response() -> dict[str, Any]:
    return {
        "description": DEFAULT_RESPONSE["description"],
        "content": {"application/json": {"schema": {"type": "object"}}},
    }
