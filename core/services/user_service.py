# =============================================================================
# core/services/user_service.py - User Business Logic
# =============================================================================
# Handles user CRUD operations and business rules:
# - emails are unique across users
# - lists are ordered newest first
# - passwords are never returned
#
# Separates HTTP concerns from database/business logic; the controller only
# parses the request and shapes the response.
# =============================================================================

from __future__ import annotations

import time

from app.exceptions import ConflictError, NotFoundError
from core.models import (
    CreateUserDto,
    PaginationDto,
    PaginationMetaDto,
    UpdateUserDto,
    UserListResponseDto,
    UserResponseDto,
)
from core.services.pagination import paginate
from lib.logger import LoggerService
from lib.repository import Record, Repository

# Columns exposed through the API
USER_COLUMNS = ["id", "email", "name", "is_active", "created_at", "updated_at"]


class UserService:
    """
    Service for user management operations.

    Args:
        repository: Data-access object for the users table
        logger: Structured logger (a child bound to this service is used)
    """

    def __init__(self, repository: Repository, logger: LoggerService | None = None):
        self.repository = repository
        self.logger = (logger or LoggerService(__name__)).child({"module": "UserService"})

    @staticmethod
    def _to_response(record: Record) -> UserResponseDto:
        return UserResponseDto.model_validate(record)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    async def find_all(self, pagination: PaginationDto | None = None) -> UserListResponseDto:
        """
        List users, newest first.

        Args:
            pagination: Page number and page size (defaults: page 1, 10 per page)

        Returns:
            UserListResponseDto with the page of users and its meta block
        """
        pagination = pagination or PaginationDto()
        self.logger.info("Fetching users", data={"page": pagination.page, "limit": pagination.limit})

        started = time.perf_counter()
        result = await paginate(
            self.repository,
            page=pagination.page,
            per_page=pagination.limit,
            order_by={"created_at": "desc"},
            select=USER_COLUMNS,
        )
        self.logger.db("find_many", self.repository.table, time.perf_counter() - started)

        response = UserListResponseDto(
            data=[self._to_response(record) for record in result.data],
            meta=PaginationMetaDto.model_validate(result.meta.to_dict()),
        )
        self.logger.info("Users fetched successfully", data={"count": len(response.data)})
        return response

    async def find_by_id(self, user_id: str) -> UserResponseDto:
        """
        Get a user by ID.

        Raises:
            NotFoundError: If no user has this ID
        """
        self.logger.debug("Looking for user by ID", data={"id": user_id})
        record = await self.repository.find_unique({"id": user_id}, select=USER_COLUMNS)
        if record is None:
            self.logger.warn("User not found", data={"id": user_id})
            raise NotFoundError("User not found")
        return self._to_response(record)

    async def find_by_email(self, email: str) -> UserResponseDto:
        """
        Get a user by email.

        Raises:
            NotFoundError: If no user has this email
        """
        self.logger.debug("Looking for user by email", data={"email": email})
        record = await self.repository.find_unique({"email": email}, select=USER_COLUMNS)
        if record is None:
            self.logger.warn("User not found", data={"email": email})
            raise NotFoundError("User not found")
        return self._to_response(record)

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    async def create(self, user_data: CreateUserDto) -> UserResponseDto:
        """
        Create a user.

        Raises:
            ConflictError: If the email is already registered
        """
        started = time.perf_counter()
        existing = await self.repository.find_unique({"email": user_data.email})
        if existing is not None:
            self.logger.operation("create_user", "failed", data={"reason": "email_exists"})
            raise ConflictError("Email already exists")

        record = await self.repository.create(
            user_data.model_dump(exclude_none=True),
            select=USER_COLUMNS,
        )
        self.logger.operation(
            "create_user",
            "success",
            duration=time.perf_counter() - started,
            data={"id": record["id"]},
        )
        return self._to_response(record)

    async def update(self, user_id: str, user_data: UpdateUserDto) -> UserResponseDto:
        """
        Update a user.

        Only the fields present in user_data are changed.

        Raises:
            NotFoundError: If no user has this ID
            ConflictError: If the new email belongs to another user
        """
        existing = await self.repository.find_unique({"id": user_id})
        if existing is None:
            raise NotFoundError("User not found")

        if user_data.email and user_data.email != existing.get("email"):
            taken = await self.repository.find_unique({"email": user_data.email})
            if taken is not None:
                raise ConflictError("Email already exists")

        changes = user_data.model_dump(exclude_unset=True, exclude_none=True)
        record = await self.repository.update({"id": user_id}, changes, select=USER_COLUMNS)
        if record is None:
            raise NotFoundError("User not found")

        self.logger.operation("update_user", "success", data={"id": user_id, "fields": sorted(changes)})
        return self._to_response(record)

    async def delete(self, user_id: str) -> None:
        """
        Delete a user.

        Raises:
            NotFoundError: If no user has this ID
        """
        existing = await self.repository.find_unique({"id": user_id})
        if existing is None:
            raise NotFoundError("User not found")

        await self.repository.delete({"id": user_id})
        self.logger.operation("delete_user", "success", data={"id": user_id})
