# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the User Management API:
# - test_registry / test_decorators / test_dto: metadata recording
# - test_controller: route binding and middleware chains
# - test_swagger_service: OpenAPI document generation
# - test_users_api / test_health_api: HTTP tests over the full app
# - test_user_service / test_repository / test_validation: service layer
#
# Run tests with: pytest
# =============================================================================
