# =============================================================================
# swagger_docs/config.py - Document Configuration
# =============================================================================
# Title, version, servers and base path of the generated OpenAPI document.
# The application fills these from Settings; the defaults below apply when
# the generator is used on its own.
# =============================================================================

from __future__ import annotations

import copy
from typing import Any

from pydantic import BaseModel, Field

OPENAPI_VERSION = "3.0.3"


class ServerEntry(BaseModel):
    """One entry of the document's `servers` list."""
    url: str
    description: str | None = None


class SwaggerConfig(BaseModel):
    """Document-level settings."""
    title: str = "API Documentation"
    version: str = "1.0.0"
    description: str = "API Documentation"
    servers: list[ServerEntry] = Field(
        default_factory=lambda: [
            ServerEntry(url="http://localhost:3000", description="Development server")
        ]
    )
    base_path: str = "/api"


class SwaggerConfigManager:
    """
    Holds the active SwaggerConfig and builds the document skeleton.

    Usage:
        manager = SwaggerConfigManager(SwaggerConfig(title="User Management API"))
        manager.update_config(version="0.2.0")
        spec = manager.create_base_spec()
    """

    def __init__(self, config: SwaggerConfig | None = None):
        self._config = config.model_copy(deep=True) if config else SwaggerConfig()

    def get_config(self) -> SwaggerConfig:
        return self._config

    def update_config(self, **changes: Any) -> None:
        """
        Override individual settings.

        Values are validated, so `servers` may be given as plain dicts.
        """
        merged = self._config.model_dump()
        merged.update(changes)
        self._config = SwaggerConfig.model_validate(merged)

    def create_base_spec(self) -> dict[str, Any]:
        """Empty document: info and servers filled in, nothing else."""
        return {
            "openapi": OPENAPI_VERSION,
            "info": {
                "title": self._config.title,
                "version": self._config.version,
                "description": self._config.description,
            },
            "servers": copy.deepcopy(
                [server.model_dump(exclude_none=True) for server in self._config.servers]
            ),
            "paths": {},
            "components": {"schemas": {}},
            "tags": [],
        }

    def get_base_path(self) -> str:
        return self._config.base_path or ""
