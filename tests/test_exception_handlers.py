import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from taskactivity.core.exception_handlers import setup_exception_handlers
from taskactivity.core.exceptions import NotFoundError


@pytest.fixture
def failing_client():
    app = FastAPI()
    setup_exception_handlers(app)

    @app.get("/boom")
    def boom():
        raise RuntimeError("boom")

    @app.get("/missing")
    def missing():
        raise NotFoundError("Dropdown value not found with ID: 7")

    @app.get("/bad")
    def bad():
        raise ValueError("Value is required")

    return TestClient(app, raise_server_exceptions=False)


def test_unhandled_error_gets_unique_error_id(failing_client):
    first = failing_client.get("/boom")
    second = failing_client.get("/boom")

    assert first.status_code == 500
    assert first.json()["detail"] == "Internal server error"
    first_id, second_id = first.json()["error_id"], second.json()["error_id"]
    assert len(first_id) == 32 and int(first_id, 16) >= 0
    assert first_id != second_id


def test_not_found_and_value_errors_use_envelope(failing_client):
    assert failing_client.get("/missing").json() == {
        "success": False,
        "message": "Dropdown value not found with ID: 7",
        "data": None,
    }
    response = failing_client.get("/bad")
    assert response.status_code == 400
    assert response.json()["message"] == "Value is required"
