# =============================================================================
# app/routers/users.py - User CRUD Endpoints
# =============================================================================
# UserController is mounted at {API_PREFIX}/users:
#   GET    /users          paginated list (?page=&limit=)
#   GET    /users/{id}     single user
#   POST   /users          create (body validated against CreateUserDto)
#   PUT    /users/{id}     update (body validated against UpdateUserDto)
#   DELETE /users/{id}     delete, 204 on success
#
# Errors raised by UserService propagate to the exception handlers, which
# render the {"error", "message"} envelope.
# =============================================================================

from fastapi import Request
from fastapi.responses import Response

from app import responses
from app.exceptions import BadRequestError
from app.validation import validate_body
from core.models import (
    ConflictErrorResponseDto,
    CreateUserDto,
    ErrorResponseDto,
    PaginationDto,
    UpdateUserDto,
    UserListResponseDto,
    UserResponseDto,
    ValidationErrorResponseDto,
)
from core.models.user import USER_ID_EXAMPLE
from core.services.user_service import UserService
from lib.logger import LoggerService
from swagger_docs import (
    ControllerBase,
    api_bad_request_response,
    api_body,
    api_conflict_response,
    api_created_response,
    api_no_content_response,
    api_not_found_response,
    api_ok_response,
    api_operation,
    api_param,
    api_query,
    api_tags,
    api_unprocessable_entity_response,
    delete_route,
    get_route,
    post_route,
    put_route,
)

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


def parse_int(value: str | None, default: int) -> int:
    """Parse a query value; missing or non-numeric values fall back to default."""
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        return default


@api_tags("Users")
class UserController(ControllerBase):
    """CRUD endpoints for users."""

    base_path = "/users"

    def __init__(
        self,
        user_service: UserService,
        logger: LoggerService | None = None,
        default_page_size: int = DEFAULT_PAGE_SIZE,
        max_page_size: int = MAX_PAGE_SIZE,
    ):
        self.user_service = user_service
        self.logger = (logger or LoggerService(__name__)).child({"module": "UserController"})
        self.default_page_size = default_page_size
        self.max_page_size = max_page_size
        super().__init__()

    @get_route("")
    @api_operation(
        summary="Get user list",
        description="Get all user information with pagination",
    )
    @api_query("page", description="Page number", schema_type="integer", example=1, minimum=1)
    @api_query(
        "limit",
        description="Items per page",
        schema_type="integer",
        example=10,
        minimum=1,
        maximum=MAX_PAGE_SIZE,
    )
    @api_ok_response(description="Successfully retrieved user list", model=UserListResponseDto)
    @api_bad_request_response(description="Request parameter error", model=ErrorResponseDto)
    async def get_users(self, request: Request) -> Response:
        page = parse_int(request.query_params.get("page"), 1)
        limit = parse_int(request.query_params.get("limit"), self.default_page_size)

        if page < 1 or limit < 1 or limit > self.max_page_size:
            raise BadRequestError("Invalid pagination parameters")

        result = await self.user_service.find_all(PaginationDto(page=page, limit=limit))
        return responses.paginated(result.data, result.meta)

    @get_route("/:id")
    @api_operation(
        summary="Get single user",
        description="Get user detailed information by user ID",
    )
    @api_param("id", description="User ID", schema_type="string", example=USER_ID_EXAMPLE)
    @api_ok_response(description="Successfully retrieved user information", model=UserResponseDto)
    @api_not_found_response(description="User not found", model=ErrorResponseDto)
    async def get_user_by_id(self, request: Request) -> Response:
        user = await self.user_service.find_by_id(request.path_params["id"])
        return responses.success(user)

    @post_route("", middlewares=[validate_body(CreateUserDto)])
    @api_operation(summary="Create user", description="Create a new user")
    @api_body(model=CreateUserDto, description="User creation data", required=True)
    @api_created_response(description="User created successfully", model=UserResponseDto)
    @api_conflict_response(description="Email already exists", model=ConflictErrorResponseDto)
    @api_unprocessable_entity_response(
        description="Request data validation failed",
        model=ValidationErrorResponseDto,
    )
    async def create_user(self, request: Request) -> Response:
        user = await self.user_service.create(request.state.body)
        self.logger.info("User created", data={"id": user.id})
        return responses.created(user)

    @put_route("/:id", middlewares=[validate_body(UpdateUserDto)])
    @api_operation(summary="Update user", description="Update specified user information")
    @api_param("id", description="User ID", schema_type="string", example=USER_ID_EXAMPLE)
    @api_body(model=UpdateUserDto, description="User update data", required=True)
    @api_ok_response(description="User updated successfully", model=UserResponseDto)
    @api_not_found_response(description="User not found", model=ErrorResponseDto)
    @api_conflict_response(
        description="Email is already used by another user",
        model=ConflictErrorResponseDto,
    )
    @api_unprocessable_entity_response(
        description="Request data validation failed",
        model=ValidationErrorResponseDto,
    )
    async def update_user(self, request: Request) -> Response:
        user = await self.user_service.update(request.path_params["id"], request.state.body)
        return responses.success(user)

    @delete_route("/:id")
    @api_operation(summary="Delete user", description="Delete specified user")
    @api_param("id", description="User ID", schema_type="string", example=USER_ID_EXAMPLE)
    @api_no_content_response(description="User deleted successfully")
    @api_not_found_response(description="User not found", model=ErrorResponseDto)
    async def delete_user(self, request: Request) -> Response:
        await self.user_service.delete(request.path_params["id"])
        return responses.no_content()
