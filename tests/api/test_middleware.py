"""Tests for RequestIDMiddleware and StaffContextMiddleware."""

import pytest
from uuid import UUID, uuid4
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.testclient import TestClient

from api.middleware import RequestIDMiddleware, StaffContextMiddleware
from utils.user_context import get_current_user_id


@pytest.fixture
def app():
    """Minimal FastAPI app with both middlewares, as create_app orders them."""
    app = FastAPI()
    app.add_middleware(StaffContextMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/whoami")
    async def whoami(request: Request):
        user_id = get_current_user_id()
        return JSONResponse({
            "request_id": request.state.request_id,
            "user_id": str(user_id) if user_id else None,
        })

    return app


@pytest.fixture
def client(app):
    return TestClient(app)


class TestRequestIDMiddleware:

    def test_response_has_request_id_header(self, client):
        response = client.get("/whoami")

        UUID(response.headers["X-Request-ID"])

    def test_request_state_matches_header(self, client):
        response = client.get("/whoami")

        assert response.headers["X-Request-ID"] == response.json()["request_id"]

    def test_each_request_gets_unique_id(self, client):
        r1 = client.get("/whoami")
        r2 = client.get("/whoami")

        assert r1.headers["X-Request-ID"] != r2.headers["X-Request-ID"]


class TestStaffContextMiddleware:

    def test_binds_staff_from_header(self, client):
        user_id = uuid4()

        response = client.get("/whoami", headers={"X-User-Id": str(user_id)})

        assert response.json()["user_id"] == str(user_id)

    def test_no_header_runs_unattributed(self, client):
        response = client.get("/whoami")

        assert response.status_code == 200
        assert response.json()["user_id"] is None

    def test_malformed_user_id_rejected(self, client):
        response = client.get("/whoami", headers={"X-User-Id": "clerk-7"})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_REQUEST"
        assert "X-Request-ID" in response.headers

    def test_context_does_not_leak_between_requests(self, client):
        client.get("/whoami", headers={"X-User-Id": str(uuid4())})

        assert client.get("/whoami").json()["user_id"] is None
