# =============================================================================
# swagger_docs/ - Decorator-Driven Routing and OpenAPI Generation
# =============================================================================
# This package contains:
# - types.py: Fact dataclasses recorded by the decorators
# - registry.py: MetadataStore keyed by (class, member)
# - decorators.py: Route, operation, parameter, body, response and tag decorators
# - dto.py: ApiModel base class and api_property() field declarations
# - controller.py: ControllerBase, binds decorated methods to a FastAPI router
# - generator.py: Per-controller operation and schema generation
# - service.py: Merges every controller into one OpenAPI 3.0.3 document
# - config.py: Document title, version, servers and base path
# =============================================================================

from swagger_docs.config import SwaggerConfig, SwaggerConfigManager
from swagger_docs.controller import ControllerBase, ensure_routes_declared
from swagger_docs.decorators import (
    api_bad_request_response,
    api_body,
    api_conflict_response,
    api_created_response,
    api_forbidden_response,
    api_internal_server_error_response,
    api_no_content_response,
    api_not_found_response,
    api_ok_response,
    api_operation,
    api_param,
    api_query,
    api_response,
    api_service_unavailable_response,
    api_tags,
    api_unauthorized_response,
    api_unprocessable_entity_response,
    delete_route,
    get_route,
    patch_route,
    post_route,
    put_route,
    route,
)
from swagger_docs.dto import ApiModel, api_property, api_property_optional
from swagger_docs.exceptions import RouteDeclarationError, SchemaNameCollisionError
from swagger_docs.generator import RouteInfo, SwaggerGenerator
from swagger_docs.registry import MetadataStore, metadata_store
from swagger_docs.service import SwaggerService

__all__ = [
    # Store
    "MetadataStore",
    "metadata_store",
    # Decorators
    "route",
    "get_route",
    "post_route",
    "put_route",
    "delete_route",
    "patch_route",
    "api_operation",
    "api_param",
    "api_query",
    "api_body",
    "api_response",
    "api_ok_response",
    "api_created_response",
    "api_no_content_response",
    "api_bad_request_response",
    "api_unauthorized_response",
    "api_forbidden_response",
    "api_not_found_response",
    "api_conflict_response",
    "api_unprocessable_entity_response",
    "api_internal_server_error_response",
    "api_service_unavailable_response",
    "api_tags",
    # DTOs
    "ApiModel",
    "api_property",
    "api_property_optional",
    # Binding and generation
    "ControllerBase",
    "ensure_routes_declared",
    "SwaggerGenerator",
    "RouteInfo",
    "SwaggerService",
    "SwaggerConfig",
    "SwaggerConfigManager",
    # Errors
    "RouteDeclarationError",
    "SchemaNameCollisionError",
]
