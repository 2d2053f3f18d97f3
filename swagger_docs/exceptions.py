# =============================================================================
# swagger_docs/exceptions.py - Declaration Errors
# =============================================================================
# Raised at startup when decorator metadata cannot be turned into a coherent
# router or document. Never raised while serving requests.
# =============================================================================

from __future__ import annotations

from lib.utils import ApplicationError


class RouteDeclarationError(ApplicationError):
    """
    One or more route declarations are malformed.

    Collects every problem so they can be reported together rather than
    failing on the first one.
    """

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        listing = "\n".join(f"  - {error}" for error in self.errors)
        super().__init__(
            message=f"{len(self.errors)} invalid route declaration(s):\n{listing}",
            code="ROUTE_DECLARATION_ERROR",
            suggestion="Use get_route/post_route/put_route/delete_route/patch_route "
                       "with a path that is empty or starts with '/'",
            details={"errors": self.errors},
        )


class SchemaNameCollisionError(ApplicationError):
    """Two distinct DTO classes would be published under the same schema name."""

    def __init__(self, name: str, first: type, second: type):
        super().__init__(
            message=f"Schema name '{name}' is used by both "
                    f"{first.__module__}.{first.__qualname__} and "
                    f"{second.__module__}.{second.__qualname__}",
            code="SCHEMA_NAME_COLLISION",
            suggestion="Rename one of the DTO classes",
            details={
                "name": name,
                "classes": [
                    f"{first.__module__}.{first.__qualname__}",
                    f"{second.__module__}.{second.__qualname__}",
                ],
            },
        )
