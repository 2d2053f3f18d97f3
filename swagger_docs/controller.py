# =============================================================================
# swagger_docs/controller.py - Controller Base / Route Binder
# =============================================================================
# Controllers subclass ControllerBase and declare their routes with the
# decorators in swagger_docs.decorators. Constructing a controller:
#
#   1. creates a private FastAPI APIRouter
#   2. registers every routed method on it, with the declared middlewares
#      running first as FastAPI dependencies
#   3. records each route in the controller's SwaggerGenerator
#
# The application mounts `controller.router` at API prefix + base_path and
# hands the controller to SwaggerService.
# =============================================================================

import inspect
import logging
from typing import Any, Iterable

from fastapi import APIRouter, Depends

from swagger_docs import registry
from swagger_docs.decorators import collect_method_declarations
from swagger_docs.exceptions import RouteDeclarationError
from swagger_docs.generator import SwaggerGenerator
from swagger_docs.registry import MetadataStore
from swagger_docs.types import RouteFact, to_openapi_path

logger = logging.getLogger(__name__)


class ControllerBase:
    """
    Base class for decorator-routed controllers.

    Class attributes:
        base_path: Mount path of the controller (e.g. "/users")
        metadata_store: Store the decorators write to and the binder reads

    Subclasses set up their own collaborators and then call
    super().__init__(), which binds the routes.

    Example:
        @api_tags("Users")
        class UserController(ControllerBase):
            base_path = "/users"

            def __init__(self, user_service: UserService):
                self.user_service = user_service
                super().__init__()

            @get_route("/:id")
            async def get_user_by_id(self, request: Request): ...
    """

    base_path: str = ""
    metadata_store: MetadataStore = registry.metadata_store

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        collect_method_declarations(cls, cls.metadata_store)

    def __init__(self) -> None:
        self.router = APIRouter()
        self.swagger_generator = SwaggerGenerator(self.metadata_store)
        self.declaration_errors: list[str] = []
        self.setup_routes()

    # -------------------------------------------------------------------------
    # Binding
    # -------------------------------------------------------------------------

    def setup_routes(self) -> None:
        """
        Register the routed methods declared on the concrete class.

        Methods inherited from a parent controller are not bound. Invalid
        declarations are skipped and kept in `declaration_errors`.
        """
        cls = type(self)
        bound = 0

        for name, member in vars(cls).items():
            if name.startswith("__") or not inspect.isfunction(member):
                continue

            route = self.metadata_store.get_route(cls, name)
            if route is None:
                continue

            problem = self._validate(route)
            if problem:
                logger.warning(f"Route not registered: {problem}")
                self.declaration_errors.append(problem)
                continue

            self.router.add_api_route(
                to_openapi_path(route.path),
                getattr(self, name),
                methods=[route.verb.upper()],
                dependencies=[Depends(middleware) for middleware in route.middlewares],
                include_in_schema=False,
                name=f"{cls.__name__}.{name}",
            )
            self.swagger_generator.add_route(route.path, route.verb, name, self, cls)
            bound += 1

        logger.debug(f"{cls.__name__}: bound {bound} route(s)")

    @staticmethod
    def _validate(route: RouteFact) -> str | None:
        where = f"{route.owner.__name__}.{route.method_name}"
        if not route.has_supported_method:
            return f"{where}: unsupported HTTP method '{route.http_method}'"
        if route.path and not route.path.startswith("/"):
            return f"{where}: path '{route.path}' must be empty or start with '/'"
        return None

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    def get_router(self) -> APIRouter:
        return self.router

    def get_swagger_generator(self) -> SwaggerGenerator:
        return self.swagger_generator


def ensure_routes_declared(controllers: Iterable[ControllerBase]) -> None:
    """
    Fail startup if any controller skipped a malformed route.

    Raises:
        RouteDeclarationError: Listing every problem across all controllers
    """
    errors = [error for controller in controllers for error in controller.declaration_errors]
    if errors:
        raise RouteDeclarationError(errors)
