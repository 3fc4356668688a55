# newscheck/tests/test_news_endpoints.py

def _submit(client, headers, title="X", category="science"):
    r = client.post("/news", headers=headers, json={
        "title": title,
        "content": f"conteúdo de {title}",
        "category": category,
        "source_url": "http://x/fonte",
    })
    assert r.status_code == 200
    return r.json()["data"]["id"]


def _feed(client, **params):
    r = client.get("/news", params=params)
    assert r.status_code == 200
    return r.json()["data"]


def _pending(client, headers):
    return {n["id"]: n for n in client.get("/news/pending", headers=headers).json()["data"]}


def test_submit_requires_auth(client):
    r = client.post("/news", json={"title": "X", "content": "c", "category": "science"})
    assert r.status_code == 401


def test_submit_then_verify_flow(client, admin_headers, user_headers):
    news_id = _submit(client, user_headers, title="X", category="science")

    item = _pending(client, admin_headers)[news_id]
    assert item["category"] == "science"
    assert item["is_manually_verified"] is False
    assert item["ai_verdict"] in {"real", "fake"}
    assert item["ai_reason"]
    assert item["manual_verdict"] is None
    assert news_id not in {n["id"] for n in _feed(client)}

    r = client.post(f"/news/{news_id}/verify", headers=admin_headers, json={"verdict": "real"})
    assert r.status_code == 200
    verified = r.json()["data"]
    assert verified["manual_verdict"] == "real"
    assert verified["is_manually_verified"] is True
    assert verified["verified_at"]

    assert news_id in {n["id"] for n in _feed(client)}
    assert news_id not in _pending(client, admin_headers)


def test_verify_by_non_admin_is_noop(client, admin_headers, user_headers):
    news_id = _submit(client, user_headers)
    before = _pending(client, admin_headers)[news_id]

    r = client.post(f"/news/{news_id}/verify", headers=user_headers, json={"verdict": "fake"})
    assert r.status_code == 403
    r = client.post(f"/news/{news_id}/verify", json={"verdict": "fake"})
    assert r.status_code == 401

    assert _pending(client, admin_headers)[news_id] == before


def test_reverify_overwrites(client, admin_headers, user_headers):
    news_id = _submit(client, user_headers)
    client.post(f"/news/{news_id}/verify", headers=admin_headers, json={"verdict": "real"})
    r = client.post(f"/news/{news_id}/verify", headers=admin_headers, json={"verdict": "fake"})
    assert r.json()["data"]["manual_verdict"] == "fake"
    feed = {n["id"]: n for n in _feed(client)}
    assert feed[news_id]["manual_verdict"] == "fake"


def test_verify_rejects_invalid_verdict_and_unknown_id(client, admin_headers):
    r = client.post("/news/nope/verify", headers=admin_headers, json={"verdict": "real"})
    assert r.status_code == 404
    r = client.post("/news/nope/verify", headers=admin_headers, json={"verdict": "pending"})
    assert r.status_code == 422


def test_category_filter_and_order(client, admin_headers, user_headers):
    ids = [
        _submit(client, user_headers, title="T1", category="technology"),
        _submit(client, user_headers, title="S1", category="science"),
        _submit(client, user_headers, title="T2", category="technology"),
    ]
    for news_id in ids:
        client.post(f"/news/{news_id}/verify", headers=admin_headers, json={"verdict": "real"})

    tech = _feed(client, category="technology")
    assert [n["title"] for n in tech] == ["T2", "T1"]
    assert all(n["category"] == "technology" for n in tech)

    everything = _feed(client, category="all")
    assert [n["title"] for n in everything] == ["T2", "S1", "T1"]
    assert all(n["is_manually_verified"] for n in everything)


def test_pending_is_admin_only(client, admin_headers, user_headers):
    _submit(client, user_headers)
    assert client.get("/news/pending").json()["data"] == []
    assert client.get("/news/pending", headers=user_headers).json()["data"] == []
    assert len(_pending(client, admin_headers)) == 1


def test_admin_create_is_visible_immediately(client, admin_headers, user_headers):
    body = {"title": "Oficial", "content": "c", "category": "world", "verdict": "fake", "reason": "Checado."}
    r = client.post("/news/admin", headers=user_headers, json=body)
    assert r.status_code == 403

    r = client.post("/news/admin", headers=admin_headers, json=body)
    assert r.status_code == 200
    news_id = r.json()["data"]["id"]

    item = client.get(f"/news/{news_id}").json()["data"]
    assert item["is_manually_verified"] is True
    assert item["manual_verdict"] == "fake"
    assert item["ai_verdict"] == "fake"
    assert item["ai_reason"] == "Checado."
    assert item["verified_by"] == item["submitted_by"]


def test_detail_hides_pending_from_public(client, admin_headers, user_headers):
    news_id = _submit(client, user_headers)
    assert client.get(f"/news/{news_id}").status_code == 404
    assert client.get(f"/news/{news_id}", headers=user_headers).status_code == 404
    assert client.get(f"/news/{news_id}", headers=admin_headers).status_code == 200


def test_delete(client, admin_headers, user_headers):
    news_id = _submit(client, user_headers)

    r = client.delete(f"/news/{news_id}", headers=user_headers)
    assert r.status_code == 403

    r = client.delete(f"/news/{news_id}", headers=admin_headers)
    assert r.status_code == 200
    assert news_id not in _pending(client, admin_headers)

    # delete de novo -> 404
    r = client.delete(f"/news/{news_id}", headers=admin_headers)
    assert r.status_code == 404


def test_pending_is_newest_first(client, admin_headers, user_headers):
    ids = [_submit(client, user_headers, title=t) for t in ("P1", "P2", "P3")]
    r = client.get("/news/pending", headers=admin_headers)
    assert r.status_code == 200
    assert [n["id"] for n in r.json()["data"]] == list(reversed(ids))
