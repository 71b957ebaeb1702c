from fastapi import FastAPI
from fastapi.testclient import TestClient

from portfolio import dependencies as deps
from portfolio.errors import UpstreamError
from portfolio.routers import contact
from tests.conftest import FakeGraphQLClient


def make_app(client):
    app = FastAPI()
    app.dependency_overrides[deps.get_graphql_client] = lambda: client
    app.include_router(contact.router)
    return TestClient(app)


def created_record(**overrides):
    record = {
        "id": "cf-1",
        "name": "Ada",
        "email": "ada@example.com",
        "message": "Hello",
        "subject": None,
        "createdAt": "2024-06-01T10:00:00Z",
        "status": "NEW",
    }
    record.update(overrides)
    return {"createContactForm": record}


def test_submit_returns_created_id():
    fake = FakeGraphQLClient(data=created_record())
    client = make_app(fake)

    res = client.post(
        "/api/contact/submit",
        json={"name": " Ada ", "email": "ada@example.com", "message": "Hello"},
    )

    assert res.status_code == 200
    assert res.json() == {"success": True, "id": "cf-1"}
    _query, variables = fake.executed[0]
    assert variables["input"]["name"] == "Ada"
    assert "subject" not in variables["input"]


def test_submit_missing_fields_returns_400_without_upstream_call():
    fake = FakeGraphQLClient(data=created_record())
    client = make_app(fake)

    res = client.post("/api/contact/submit", json={"name": "Ada", "message": "  "})

    assert res.status_code == 400
    assert res.json() == {"detail": "Missing required fields"}
    assert fake.executed == []


def test_submit_upstream_failure_returns_502():
    client = make_app(FakeGraphQLClient(data=UpstreamError("boom")))

    res = client.post(
        "/api/contact/submit",
        json={"name": "Ada", "email": "ada@example.com", "message": "Hello"},
    )

    assert res.status_code == 502
    assert res.json() == {"detail": "Upstream request failed"}


def test_submit_unexpected_error_returns_500():
    client = make_app(FakeGraphQLClient(data=RuntimeError("boom")))

    res = client.post(
        "/api/contact/submit",
        json={"name": "Ada", "email": "ada@example.com", "message": "Hello"},
    )

    assert res.status_code == 500
    assert res.json() == {"detail": "Contact form submission failed"}
