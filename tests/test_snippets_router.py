"""Tests for snippets and tags routers."""


def test_create_snippet(client):
    """POST /api/snippets creates a snippet with tags."""
    payload = {
        "title": "Debounce",
        "description": "Delay a function call",
        "code": "function debounce() {}",
        "language": "javascript",
        "tags": ["javascript", "utils"],
    }
    r = client.post("/api/snippets", json=payload)
    assert r.status_code == 201
    data = r.json()
    assert data["title"] == "Debounce"
    assert data["language"] == "javascript"
    assert sorted(data["tags"]) == ["javascript", "utils"]
    assert "createdAt" in data
    assert "updatedAt" in data


def test_create_snippet_without_tags_field(client):
    payload = {"title": "No tags", "code": "x = 1", "language": "python"}
    r = client.post("/api/snippets", json=payload)
    assert r.status_code == 201
    assert r.json()["tags"] == []


def test_create_snippet_missing_code(client):
    """POST with missing required fields returns 400."""
    r = client.post("/api/snippets", json={"title": "x", "language": "python"})
    assert r.status_code == 400
    assert r.json()["error"] == "Validation failed"


def test_list_snippets(client, setup_snippets):
    r = client.get("/api/snippets")
    assert r.status_code == 200
    titles = [s["title"] for s in r.json()]
    assert titles == ["Binary search", "Debounce", "Quick sort"]


def test_list_snippets_filtered(client, setup_snippets):
    r = client.get("/api/snippets", params={"tag": "algorithms", "search": "sort"})
    assert r.status_code == 200
    data = r.json()
    assert [s["title"] for s in data] == ["Quick sort"]
    assert sorted(data[0]["tags"]) == ["algorithms", "python"]


def test_get_snippet(client, setup_snippet):
    r = client.get(f"/api/snippets/{setup_snippet.id}")
    assert r.status_code == 200
    data = r.json()
    assert data["id"] == setup_snippet.id
    assert sorted(data["tags"]) == ["basics", "python"]


def test_get_snippet_not_found(client):
    r = client.get("/api/snippets/9999")
    assert r.status_code == 404
    assert r.json() == {"error": "Snippet not found"}


def test_update_snippet(client, setup_snippet):
    """PUT /api/snippets/{id} replaces fields and tags."""
    payload = {
        "title": "Hello, updated",
        "code": "print('hi')",
        "language": "python",
        "tags": ["io"],
    }
    r = client.put(f"/api/snippets/{setup_snippet.id}", json=payload)
    assert r.status_code == 200
    data = r.json()
    assert data["title"] == "Hello, updated"
    assert data["tags"] == ["io"]


def test_update_snippet_not_found(client):
    payload = {"title": "t", "code": "c", "language": "python", "tags": []}
    r = client.put("/api/snippets/9999", json=payload)
    assert r.status_code == 404


def test_delete_snippet(client, setup_snippet):
    r = client.delete(f"/api/snippets/{setup_snippet.id}")
    assert r.status_code == 200
    assert r.json() == {"success": True}
    r2 = client.get(f"/api/snippets/{setup_snippet.id}")
    assert r2.status_code == 404


def test_delete_snippet_not_found(client):
    r = client.delete("/api/snippets/9999")
    assert r.status_code == 404


def test_list_tags(client, setup_snippets):
    r = client.get("/api/tags")
    assert r.status_code == 200
    data = r.json()
    assert [t["name"] for t in data] == ["algorithms", "javascript", "python", "search"]
    assert {t["name"]: t["count"] for t in data}["python"] == 2
    assert set(data[0]) == {"id", "name", "count"}
