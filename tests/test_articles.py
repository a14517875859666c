"""Blog article CRUD and listing."""

from storyhub.models.article import ArticleStatus


def _article(client, title="Hello", **overrides) -> dict:
    payload = {
        "userId": 1,
        "title": title,
        "content": "Body text",
        "author": "Jane",
        "tags": "go,python",
        "excerpt": "Short",
        **overrides,
    }
    resp = client.post("/api/articles", json=payload)
    assert resp.status_code == 201, resp.text
    return resp.json()


def test_create_and_get_article(client):
    created = _article(client)
    assert created["id"] > 0
    assert created["userId"] == 1
    assert created["status"] == ArticleStatus.DRAFT

    resp = client.get(f"/api/articles/{created['id']}")
    assert resp.status_code == 200
    assert resp.json()["content"] == "Body text"


def test_create_article_validation(client):
    resp = client.post("/api/articles", json={"userId": 1, "title": "", "content": "x", "author": "Jane"})
    assert resp.status_code == 400
    assert "error" in resp.json()


def test_update_article_only_touches_given_fields(client):
    created = _article(client)
    resp = client.put(
        f"/api/articles/{created['id']}",
        json={"title": "Renamed", "status": ArticleStatus.PUBLISHED},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["title"] == "Renamed"
    assert body["status"] == ArticleStatus.PUBLISHED
    assert body["content"] == "Body text"
    assert body["author"] == "Jane"


def test_delete_article(client):
    created = _article(client)
    resp = client.delete(f"/api/articles/{created['id']}")
    assert resp.status_code == 200
    assert client.get(f"/api/articles/{created['id']}").status_code == 404


def test_missing_and_malformed_ids(client):
    assert client.get("/api/articles/999").status_code == 404
    assert client.put("/api/articles/999", json={"title": "x"}).status_code == 404
    assert client.delete("/api/articles/999").status_code == 404
    assert client.get("/api/articles/not-a-number").status_code == 400


def test_list_articles_paginates_by_id(client):
    ids = [_article(client, title=f"post {i}")["id"] for i in range(12)]

    body = client.get("/api/articles").json()
    assert body["total"] == 12
    assert [a["id"] for a in body["data"]] == ids[:10]
    assert "content" not in body["data"][0]

    body = client.get("/api/articles", params={"page": 2}).json()
    assert [a["id"] for a in body["data"]] == ids[10:]

    body = client.get("/api/articles", params={"page": 1, "page_size": 5}).json()
    assert len(body["data"]) == 5


def test_list_articles_page_beyond_integer_range_falls_back(client):
    first = _article(client)

    resp = client.get("/api/articles", params={"page": "99999999999999999999", "page_size": "99999999999999999999"})
    assert resp.status_code == 200
    assert [a["id"] for a in resp.json()["data"]] == [first["id"]]

    resp = client.get("/api/articles", params={"page": str(2**62)})
    assert resp.status_code == 200
    assert resp.json()["data"] == []
