# =============================================================================
# swagger_docs/service.py - OpenAPI Document Assembly
# =============================================================================
# Merges the operations and schemas of every controller's generator into one
# OpenAPI 3.0.3 document:
#
#   1. Start from the skeleton built by SwaggerConfigManager
#   2. Place each operation at base path + controller base path + route path
#   3. Collect tags in first-seen order
#   4. Emit one component schema per referenced DTO class
#   5. Replace every {"type": <class>} with a $ref to its component
#
# The application generates the document once at startup and serves the
# cached result.
# =============================================================================

from __future__ import annotations

import json
import logging
from typing import Any

from swagger_docs.config import SwaggerConfig, SwaggerConfigManager
from swagger_docs.exceptions import SchemaNameCollisionError
from swagger_docs.generator import SwaggerGenerator
from swagger_docs.types import is_model_reference, to_openapi_path

logger = logging.getLogger(__name__)

SCHEMA_REF_PREFIX = "#/components/schemas/"


def schema_ref(cls: type) -> str:
    return f"{SCHEMA_REF_PREFIX}{cls.__name__}"


def resolve_model_references(node: Any) -> Any:
    """
    Return a copy of node with every DTO reference turned into a $ref.

    {"type": Cls} becomes {"$ref": "..."}. When the reference carries other
    keys (description, example) they are kept next to an allOf wrapper,
    since OpenAPI 3.0 ignores siblings of $ref.
    """
    if isinstance(node, dict):
        if is_model_reference(node):
            ref = {"$ref": schema_ref(node["type"])}
            siblings = {
                key: resolve_model_references(value)
                for key, value in node.items()
                if key != "type"
            }
            return {"allOf": [ref], **siblings} if siblings else ref
        return {key: resolve_model_references(value) for key, value in node.items()}
    if isinstance(node, list):
        return [resolve_model_references(value) for value in node]
    return node


class SwaggerService:
    """
    Builds the OpenAPI document from registered controllers.

    Usage:
        service = SwaggerService(SwaggerConfig(title="User Management API"))
        service.add_controller(user_controller)
        service.add_controller(health_controller)
        spec = service.generate_spec()
    """

    def __init__(self, config: SwaggerConfig | None = None):
        self.config_manager = SwaggerConfigManager(config)
        self._generators: list[SwaggerGenerator] = []

    # -------------------------------------------------------------------------
    # Registration
    # -------------------------------------------------------------------------

    def add_generator(self, generator: SwaggerGenerator) -> None:
        self._generators.append(generator)

    def add_controller(self, controller: Any) -> None:
        """Register a controller's generator (ControllerBase.swagger_generator)."""
        self.add_generator(controller.swagger_generator)

    def get_generators(self) -> list[SwaggerGenerator]:
        return list(self._generators)

    def update_config(self, **changes: Any) -> None:
        self.config_manager.update_config(**changes)

    # -------------------------------------------------------------------------
    # Generation
    # -------------------------------------------------------------------------

    def generate_spec(self) -> dict[str, Any]:
        """
        Assemble the full document.

        A generator that fails while producing its operations is logged and
        skipped; the remaining controllers are still documented.

        Raises:
            SchemaNameCollisionError: If two distinct DTO classes share a name
        """
        spec = self.config_manager.create_base_spec()
        base_path = self.config_manager.get_base_path()
        tags: list[str] = []
        documented: list[SwaggerGenerator] = []

        for generator in self._generators:
            try:
                routes = generator.get_routes()
                operations = generator.generate_operations()
            except Exception:
                logger.exception("Skipping controller whose routes could not be documented")
                continue
            documented.append(generator)

            for route in routes:
                operation = operations.get(route.key)
                if operation is None:
                    continue

                path = self._external_path(base_path, route.controller_class, route.path)
                path_item = spec["paths"].setdefault(path, {})
                if route.method in path_item:
                    logger.warning(
                        f"Duplicate route {route.method.upper()} {path} from "
                        f"{route.controller_class.__name__}.{route.handler_name} ignored"
                    )
                    continue
                path_item[route.method] = operation

                for tag in operation.get("tags", []):
                    if tag not in tags:
                        tags.append(tag)

        spec["tags"] = [{"name": tag} for tag in tags]
        spec["components"]["schemas"] = self._collect_schemas(documented)

        spec["paths"] = resolve_model_references(spec["paths"])
        spec["components"] = resolve_model_references(spec["components"])

        logger.debug(
            f"Generated OpenAPI document: {len(spec['paths'])} path(s), "
            f"{len(spec['components']['schemas'])} schema(s)"
        )
        return spec

    def get_spec_as_json(self) -> str:
        return json.dumps(self.generate_spec(), indent=2)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _external_path(base_path: str, controller_class: type, route_path: str) -> str:
        path = base_path + getattr(controller_class, "base_path", "")
        if route_path and route_path != "/":
            path += to_openapi_path(route_path)
        return path or "/"

    def _collect_schemas(self, generators: list[SwaggerGenerator]) -> dict[str, Any]:
        schemas: dict[str, Any] = {}
        owners: dict[str, type] = {}

        for generator in generators:
            try:
                generated = generator.generate_schemas()
            except Exception:
                logger.exception("Skipping schemas of a controller that failed to generate them")
                continue

            for cls, schema in generated.items():
                name = cls.__name__
                owner = owners.get(name)
                if owner is not None and owner is not cls:
                    raise SchemaNameCollisionError(name, owner, cls)
                owners[name] = cls
                schemas[name] = schema

        return schemas
