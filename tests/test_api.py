"""Tests for the HTTP contract of the advocates API."""

import pytest

from solace.api import app, coerce_positive_int
from solace.db import DatabaseUnavailableError, get_session


class FailingSession:
    """Stand-in session whose queries raise ``exc``."""

    def __init__(self, exc):
        self.exc = exc

    async def execute(self, *args, **kwargs):
        raise self.exc


def _override_session(session):
    async def override():
        yield session

    app.dependency_overrides[get_session] = override


@pytest.mark.asyncio
async def test_health(api_client):
    response = await api_client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


@pytest.mark.asyncio
async def test_list_advocates_uses_camel_case(api_client, seeded):
    response = await api_client.get("/api/advocates", params={"pageSize": 5})

    assert response.status_code == 200
    data = response.json()["data"]
    assert len(data) == 5
    assert {"id", "firstName", "lastName", "city", "degree", "specialties",
            "yearsOfExperience", "phoneNumber", "createdAt"} <= set(data[0])


@pytest.mark.asyncio
async def test_list_advocates_defaults(api_client, seeded):
    response = await api_client.get("/api/advocates")
    assert len(response.json()["data"]) == 15


@pytest.mark.asyncio
async def test_search_by_specialty(api_client, seeded):
    response = await api_client.get("/api/advocates", params={"search": "ADHD", "page": 1, "pageSize": 20})

    names = {(a["firstName"], a["lastName"]) for a in response.json()["data"]}
    assert names == {("John", "Doe"), ("Daniel", "Lewis")}


@pytest.mark.asyncio
async def test_page_two_does_not_repeat_page_one(api_client, seeded):
    first = (await api_client.get("/api/advocates", params={"page": 1, "pageSize": 4})).json()["data"]
    second = (await api_client.get("/api/advocates", params={"page": 2, "pageSize": 4})).json()["data"]

    assert len(first) == len(second) == 4
    assert not {a["id"] for a in first} & {a["id"] for a in second}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "params",
    [{"page": 0}, {"page": "abc"}, {"page": -3}, {"pageSize": 0}, {"pageSize": "x"}, {"page": "", "pageSize": ""}],
)
async def test_unusable_paging_falls_back_to_defaults(api_client, seeded, params):
    response = await api_client.get("/api/advocates", params=params)

    assert response.status_code == 200
    assert [a["id"] for a in response.json()["data"]] == sorted(r.id for r in seeded)


@pytest.mark.asyncio
async def test_large_page_size_is_accepted(api_client, seeded):
    response = await api_client.get("/api/advocates", params={"pageSize": 150})

    assert response.status_code == 200
    assert len(response.json()["data"]) == 15


def test_coerce_positive_int():
    assert coerce_positive_int(None, 20) == 20
    assert coerce_positive_int("0", 1) == 1
    assert coerce_positive_int("abc", 1) == 1
    assert coerce_positive_int("7", 1) == 7


@pytest.mark.asyncio
async def test_seed_endpoint_is_idempotent(api_client):
    first = await api_client.post("/api/seed")
    assert first.status_code == 200
    assert len(first.json()["advocates"]) == 15

    second = await api_client.post("/api/seed")
    assert second.status_code == 200
    assert second.json() == {"advocates": []}


@pytest.mark.asyncio
async def test_unconfigured_store_returns_fixed_500(api_client):
    async def unavailable():
        raise DatabaseUnavailableError()

    app.dependency_overrides[get_session] = unavailable

    response = await api_client.get("/api/advocates")
    assert response.status_code == 500
    assert response.json() == {
        "error": "database_unavailable",
        "detail": "Database connection not initialized",
    }


@pytest.mark.asyncio
async def test_connection_failure_returns_fixed_500(api_client):
    _override_session(FailingSession(ConnectionRefusedError("refused")))

    response = await api_client.get("/api/advocates", params={"search": "md"})
    assert response.status_code == 500
    assert response.json()["error"] == "database_unavailable"


@pytest.mark.asyncio
async def test_unexpected_error_is_generic_500(api_client):
    _override_session(FailingSession(RuntimeError("secret table detail")))

    response = await api_client.get("/api/advocates")
    assert response.status_code == 500
    assert response.json() == {"detail": "Internal Server Error"}
    assert "secret" not in response.text
