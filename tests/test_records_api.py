"""
Tests for the bookmark HTTP endpoints.
"""

import locale
from concurrent.futures import ThreadPoolExecutor

import pytest
from fastapi.testclient import TestClient

from flatstore.core.config import Settings, StoreSettings
from flatstore.main import create_app


@pytest.fixture
def client(tmp_path):
    """Test client over an app storing bookmarks in a temporary directory."""
    settings = Settings(
        environment="testing",
        log_format="text",
        store=StoreSettings(data_dir=str(tmp_path)),
    )
    with TestClient(create_app(settings)) as client:
        yield client


@pytest.fixture
def bookmarks(client):
    """Create a few bookmarks through the API."""
    created = []
    for name, url, category in [
        ("Python", "https://www.python.org", "Languages"),
        ("FastAPI", "https://fastapi.tiangolo.com", "Frameworks"),
        ("Pydantic", "https://docs.pydantic.dev", "Libraries"),
    ]:
        response = client.post("/api/bookmarks", json={"Name": name, "Url": url, "Category": category})
        assert response.status_code == 201
        created.append(response.json())
    return created


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["collections"]["bookmarks"].endswith("Bookmarks.json")


def test_create_assigns_ids(bookmarks):
    assert [b["Id"] for b in bookmarks] == [1, 2, 3]
    assert bookmarks[0]["Name"] == "Python"


def test_create_invalid(client):
    response = client.post("/api/bookmarks", json={"Name": "No url", "Category": "x"})
    assert response.status_code == 400


def test_create_duplicate_name(client, bookmarks):
    response = client.post(
        "/api/bookmarks",
        json={"Name": "Python", "Url": "https://docs.python.org", "Category": "Docs"},
    )
    assert response.status_code == 409


def test_list_empty_returns_message(client):
    response = client.get("/api/bookmarks")
    assert response.status_code == 200
    assert response.json() == "No search results found."


def test_list_sorted_and_filtered(client, bookmarks):
    response = client.get("/api/bookmarks", params={"sort": "name,desc"})
    assert [b["Name"] for b in response.json()] == ["Python", "Pydantic", "FastAPI"]

    response = client.get("/api/bookmarks", params={"Name": "p*", "sort": "name"})
    assert [b["Name"] for b in response.json()] == ["Pydantic", "Python"]

    response = client.get("/api/bookmarks", params={"Category": "*works"})
    assert [b["Id"] for b in response.json()] == [2]


def test_list_repeated_parameter_rejected(client, bookmarks):
    response = client.get("/api/bookmarks?Name=*a&Name=b")
    assert response.status_code == 400
    assert response.json()["detail"].startswith("Parameter 'Name' can't be an array")


def test_list_unknown_sort(client, bookmarks):
    response = client.get("/api/bookmarks", params={"sort": "url"})
    assert response.status_code == 400


def test_get(client, bookmarks):
    assert client.get("/api/bookmarks/2").json()["Name"] == "FastAPI"
    assert client.get("/api/bookmarks/99").status_code == 404


def test_replace(client, bookmarks):
    response = client.put(
        "/api/bookmarks/1",
        json={"Id": 50, "Name": "CPython", "Url": "https://github.com/python/cpython", "Category": "Source"},
    )
    assert response.status_code == 204
    assert client.get("/api/bookmarks/1").json() == {
        "Id": 1,
        "Name": "CPython",
        "Url": "https://github.com/python/cpython",
        "Category": "Source",
    }


@pytest.mark.parametrize(
    ("record_id", "body", "expected"),
    [
        (1, {"Name": "FastAPI", "Url": "https://example.com", "Category": "x"}, 409),
        (99, {"Name": "Ghost", "Url": "https://example.com", "Category": "x"}, 404),
        (1, {"Name": "Python"}, 400),
    ],
)
def test_replace_errors(client, bookmarks, record_id, body, expected):
    assert client.put(f"/api/bookmarks/{record_id}", json=body).status_code == expected


def test_delete(client, bookmarks):
    assert client.delete("/api/bookmarks/3").status_code == 204
    assert client.delete("/api/bookmarks/3").status_code == 404
    assert [b["Id"] for b in client.get("/api/bookmarks").json()] == [1, 2]


def test_concurrent_creates_get_distinct_ids(client):
    """Test overlapping requests are applied one at a time."""

    def create(n):
        response = client.post(
            "/api/bookmarks",
            json={"Name": f"Site {n}", "Url": f"https://example.com/{n}", "Category": "Bulk"},
        )
        assert response.status_code == 201
        return response.json()["Id"]

    with ThreadPoolExecutor(max_workers=8) as pool:
        ids = list(pool.map(create, range(20)))

    assert sorted(ids) == list(range(1, 21))
    assert len(client.get("/api/bookmarks").json()) == 20


def test_create_app_applies_collation_locale(tmp_path):
    settings = Settings(
        environment="testing",
        collation_locale="C",
        store=StoreSettings(data_dir=str(tmp_path)),
    )
    create_app(settings)
    assert locale.setlocale(locale.LC_COLLATE) == "C"
