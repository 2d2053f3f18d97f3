# =============================================================================
# tests/test_validation.py - Tests for Request Validation Middlewares
# =============================================================================
# Mounts small controllers whose routes use validate_body / validate_query /
# validate_params, with the application's exception handlers installed.
# =============================================================================

from fastapi import FastAPI, Request
from fastapi.testclient import TestClient

from app.exceptions import register_exception_handlers
from app.validation import validate_body, validate_params, validate_query
from swagger_docs import ApiModel, ControllerBase, api_property, api_property_optional, get_route, post_route


def build_client(store):
    class FilterDto(ApiModel):
        metadata_store = store
        search: str = api_property(min_length=2)
        page: int = api_property_optional(1, minimum=1)

    class ParamsDto(ApiModel):
        metadata_store = store
        id: int = api_property(minimum=1)

    class BodyDto(ApiModel):
        metadata_store = store
        display_name: str = api_property()

    class EchoController(ControllerBase):
        metadata_store = store
        base_path = "/echo"

        @post_route("", middlewares=[validate_body(BodyDto)])
        async def body(self, request: Request):
            return {"displayName": request.state.body.display_name}

        @get_route("", middlewares=[validate_query(FilterDto)])
        async def query(self, request: Request):
            return {"search": request.state.query.search, "page": request.state.query.page}

        @get_route("/:id", middlewares=[validate_params(ParamsDto)])
        async def params(self, request: Request):
            return {"id": request.state.params.id}

    app = FastAPI()
    register_exception_handlers(app)
    controller = EchoController()
    app.include_router(controller.router, prefix=controller.base_path)
    return TestClient(app)


class TestValidateBody:
    """Tests for validate_body()."""

    def test_valid_body(self, store):
        """A valid body is parsed into the DTO."""
        response = build_client(store).post("/echo", json={"displayName": "Ann"})

        assert response.json() == {"displayName": "Ann"}

    def test_empty_body_validated_as_empty_object(self, store):
        """No body at all reports the missing required fields."""
        response = build_client(store).post("/echo")

        assert response.status_code == 422
        assert response.json()["details"] == [{
            "property": "displayName",
            "constraints": {"missing": "Field required"},
            "value": None,
        }]


class TestValidateQuery:
    """Tests for validate_query()."""

    def test_valid_query(self, store):
        """Query values are coerced to the DTO types."""
        response = build_client(store).get("/echo", params={"search": "ann", "page": "3"})

        assert response.json() == {"search": "ann", "page": 3}

    def test_invalid_query(self, store):
        """Query errors use their own message."""
        response = build_client(store).get("/echo", params={"search": "a"})

        assert response.status_code == 422
        assert response.json()["message"] == "Query validation failed"
        assert response.json()["details"][0]["value"] == "a"


class TestValidateParams:
    """Tests for validate_params()."""

    def test_valid_params(self, store):
        """Path parameters are coerced."""
        assert build_client(store).get("/echo/7").json() == {"id": 7}

    def test_invalid_params(self, store):
        """Path parameter errors use their own message."""
        response = build_client(store).get("/echo/0")

        assert response.status_code == 422
        assert response.json()["message"] == "Parameter validation failed"
        assert response.json()["details"][0]["property"] == "id"
