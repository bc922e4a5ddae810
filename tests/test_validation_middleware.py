from typing import Any, Dict

import pytest
from fastapi import Depends, FastAPI, Request
from fastapi.testclient import TestClient

from taskboard.internal.api.error_handlers import register_exception_handlers
from taskboard.internal.api.middleware.validation import validate_body
from taskboard.internal.api.validators.task_validators import create_task_validator


@pytest.fixture()
def echo_client():
    """Tiny app whose only route echoes what the middleware let through."""
    app = FastAPI()
    register_exception_handlers(app)

    @app.post("/echo")
    async def echo(
        request: Request,
        payload: Dict[str, Any] = Depends(validate_body(create_task_validator)),
    ):
        return {"payload": payload, "state": request.state.body}

    return TestClient(app)


def test_valid_payload_is_normalized_and_stored_on_request(echo_client):
    response = echo_client.post("/echo", json={"title": "  Buy milk ", "extra": 1})

    assert response.status_code == 200
    assert response.json() == {
        "payload": {"title": "Buy milk"},
        "state": {"title": "Buy milk"},
    }


def test_invalid_payload_short_circuits_with_400(echo_client):
    response = echo_client.post("/echo", json={"title": ""})

    assert response.status_code == 400
    assert response.json() == {
        "errors": [{"field": "title", "message": "Title is required"}]
    }


def test_empty_body_reads_as_empty_object(echo_client):
    response = echo_client.post("/echo")

    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "title"


def test_malformed_json_is_reported_on_body(echo_client):
    response = echo_client.post(
        "/echo", content=b"{oops", headers={"Content-Type": "application/json"}
    )

    assert response.status_code == 400
    assert response.json() == {
        "errors": [{"field": "body", "message": "Malformed JSON body"}]
    }


def test_non_object_json_is_reported_on_body(echo_client):
    response = echo_client.post("/echo", json=["Buy milk"])

    assert response.status_code == 400
    assert response.json()["errors"] == [
        {"field": "body", "message": "Request body must be a JSON object"}
    ]
