from datetime import datetime, timedelta

import pytest


def test_create_book_trims_and_defaults(client):
    book = {"title": "  Emma ", "author": "Austen", "genre": "FICTION", "isbn": " 222 ", "copies": 2,
            "description": "A novel"}
    r = client.post("/api/books", json=book)
    assert r.status_code == 201
    data = r.json()["data"]
    assert data["title"] == "Emma"
    assert data["isbn"] == "222"
    assert data["available"] is True
    assert data["description"] == "A novel"
    assert "createdAt" in data and "updatedAt" in data


def test_create_book_without_copies_is_unavailable(make_book):
    data = make_book(copies=0, available=True)
    assert data["available"] is False


def test_duplicate_isbn(client, make_book):
    first = make_book(title="Original", isbn="111")
    r = client.post("/api/books", json={"title": "Copycat", "author": "X", "genre": "HISTORY",
                                        "isbn": "111", "copies": 1})
    assert r.status_code == 400
    assert r.json() == {
        "success": False,
        "message": "Duplicate entry",
        "error": "A book with the ISBN '111' already exists.",
    }
    r = client.get(f"/api/books/{first['_id']}")
    assert r.json()["data"]["title"] == "Original"


def test_create_book_validation_errors(client):
    r = client.post("/api/books", json={"author": "A", "genre": "POETRY", "isbn": "1", "copies": -1})
    assert r.status_code == 400
    body = r.json()
    assert body["success"] is False
    assert body["message"] == "Validation failed"
    errors = body["error"]["errors"]
    assert body["error"]["name"] == "ValidationError"
    assert errors["title"]["kind"] == "missing"
    assert errors["genre"]["kind"] == "enum"
    assert errors["genre"]["value"] == "POETRY"
    assert errors["copies"]["kind"] == "greater_than_equal"
    assert errors["copies"]["path"] == "copies"
    assert errors["copies"]["value"] == -1


def test_list_default_limit_is_ten(client, make_book):
    for _ in range(12):
        make_book()
    r = client.get("/api/books")
    assert r.status_code == 200
    assert r.json()["message"] == "Books retrieved successfully"
    assert len(r.json()["data"]) == 10


@pytest.mark.parametrize("direction,expected", [("asc", ["A", "B"]), ("desc", ["C", "B"])])
def test_list_sort_and_limit(client, make_book, direction, expected):
    for title in ["B", "A", "C"]:
        make_book(title=title)
    r = client.get("/api/books", params={"sortBy": "title", "sort": direction, "limit": 2})
    assert [b["title"] for b in r.json()["data"]] == expected


def test_list_filters(client, make_book):
    make_book(title="Hobbit", genre="FANTASY")
    make_book(title="Empty Hobbit", genre="FANTASY", copies=0)
    make_book(title="Cosmos", genre="SCIENCE")

    r = client.get("/api/books", params={"filter": "FANTASY"})
    assert sorted(b["title"] for b in r.json()["data"]) == ["Empty Hobbit", "Hobbit"]

    r = client.get("/api/books", params={"filter": "FANTASY", "available": "true"})
    assert [b["title"] for b in r.json()["data"]] == ["Hobbit"]


def test_list_defaults_to_newest_first(client, make_book):
    for title in ["first", "second", "third"]:
        make_book(title=title)
    r = client.get("/api/books", params={"limit": 2})
    assert [b["title"] for b in r.json()["data"]] == ["third", "second"]


@pytest.mark.parametrize("limit", [0, -1])
def test_list_without_limit_returns_everything(client, make_book, limit):
    for _ in range(12):
        make_book()
    r = client.get("/api/books", params={"limit": limit})
    assert len(r.json()["data"]) == 12


def test_list_unknown_sort_field_is_ignored(client, make_book):
    make_book()
    r = client.get("/api/books", params={"sortBy": "popularity"})
    assert r.status_code == 200
    assert len(r.json()["data"]) == 1


def test_get_missing_book(client):
    r = client.get("/api/books/" + "a" * 24)
    assert r.status_code == 404
    assert r.json()["success"] is False
    assert r.json()["message"] == "Book not found"


@pytest.mark.parametrize("method", ["get", "put", "delete"])
def test_malformed_id(client, method):
    kwargs = {"json": {"title": "x"}} if method == "put" else {}
    r = getattr(client, method)("/api/books/not-an-id", **kwargs)
    assert r.status_code == 400
    body = r.json()
    assert body["message"] == "Invalid ID format"
    assert body["error"]["name"] == "CastError"
    assert body["error"]["value"] == "not-an-id"
    assert body["error"]["reason"] == "Id must be a 24-character hexadecimal string."


def test_update_book(client, make_book):
    book = make_book(title="Old")
    r = client.put(f"/api/books/{book['_id']}", json={"title": "New", "description": "fresh"})
    assert r.status_code == 200
    data = r.json()["data"]
    assert data["title"] == "New"
    assert data["description"] == "fresh"
    assert data["copies"] == 3


def test_update_copies_overrides_available(client, make_book):
    book = make_book(copies=3)
    url = f"/api/books/{book['_id']}"

    r = client.put(url, json={"copies": 0, "available": True})
    assert r.json()["data"]["available"] is False

    # restocking through copies switches availability back on
    r = client.put(url, json={"copies": 5, "available": False})
    assert r.json()["data"]["available"] is True

    r = client.put(url, json={"available": False})
    assert r.json()["data"]["available"] is False
    r = client.put(url, json={"available": True})
    assert r.json()["data"]["available"] is True


def test_update_cannot_make_empty_book_available(client, make_book):
    book = make_book(copies=0)
    r = client.put(f"/api/books/{book['_id']}", json={"available": True})
    assert r.status_code == 200
    assert r.json()["data"]["available"] is False


def test_update_rejects_invalid_values(client, make_book):
    book = make_book()
    r = client.put(f"/api/books/{book['_id']}", json={"copies": -2, "title": None})
    assert r.status_code == 400
    errors = r.json()["error"]["errors"]
    assert set(errors) == {"copies", "title"}


def test_update_to_taken_isbn(client, make_book):
    make_book(isbn="taken")
    other = make_book(isbn="free")
    r = client.put(f"/api/books/{other['_id']}", json={"isbn": "taken"})
    assert r.status_code == 400
    assert r.json()["error"] == "A book with the ISBN 'taken' already exists."
    assert client.get(f"/api/books/{other['_id']}").json()["data"]["isbn"] == "free"


def test_update_missing_book(client):
    r = client.put("/api/books/" + "b" * 24, json={"title": "x"})
    assert r.status_code == 404


def test_delete_book(client, make_book):
    book = make_book()
    r = client.delete(f"/api/books/{book['_id']}")
    assert r.status_code == 200
    assert r.json() == {"success": True, "message": "Book deleted successfully", "data": None}

    r = client.delete(f"/api/books/{book['_id']}")
    assert r.status_code == 404
    r = client.get(f"/api/books/{book['_id']}")
    assert r.status_code == 404


def test_id_lookup_ignores_case(client, make_book):
    book = make_book(title="Shouty")
    r = client.get(f"/api/books/{book['_id'].upper()}")
    assert r.status_code == 200
    assert r.json()["data"]["_id"] == book["_id"]


def test_timestamps_carry_utc_offset(make_book):
    book = make_book()
    for key in ("createdAt", "updatedAt"):
        stamp = datetime.fromisoformat(book[key].replace("Z", "+00:00"))
        assert stamp.utcoffset() == timedelta(0)
