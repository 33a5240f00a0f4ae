import pytest
from fastapi.testclient import TestClient

from recipeshare.app import app
from recipeshare.recipes.data_store import reset_store

client = TestClient(app)

CARBONARA_ID = "65a1f0c2e4b0a1d2c3e4f501"


@pytest.fixture(autouse=True)
def fresh_store():
    reset_store()
    yield
    reset_store()


def _titles(body) -> list[str]:
    return [r["title"] for r in body["recipes"]]


def test_health():
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_metadata():
    resp = client.get("/metadata")
    assert resp.status_code == 200
    body = resp.json()
    assert body["cuisines"] == sorted(body["cuisines"])
    assert "Italian" in body["cuisines"]
    assert "vegan" in body["tags"]
    assert body["difficulties"] == ["Easy", "Medium", "Hard"]


# ── Listing ──────────────────────────────────────────────────────────────


def test_list_defaults():
    resp = client.get("/api/recipes")
    assert resp.status_code == 200
    body = resp.json()
    assert body["pagination"] == {"page": 1, "pages": 1, "total": 11, "limit": 12}
    assert body["recipes"][0]["title"] == "Mushroom Risotto"


def test_list_uses_camel_case_fields():
    recipe = client.get("/api/recipes").json()["recipes"][0]
    for key in ("prepTime", "cookTime", "createdAt", "isPublished", "likes", "views"):
        assert key in recipe


def test_list_pagination():
    body = client.get("/api/recipes", params={"limit": 5, "page": 3}).json()
    assert body["pagination"] == {"page": 3, "pages": 3, "total": 11, "limit": 5}
    assert _titles(body) == ["Classic Spaghetti Carbonara"]


def test_list_popular():
    body = client.get("/api/recipes", params={"sort": "popular"}).json()
    assert _titles(body)[:2] == ["Homemade Pizza Margherita", "Chocolate Chip Cookies"]
    counts = [len(r["likes"]) for r in body["recipes"]]
    assert counts == sorted(counts, reverse=True)


def test_list_trending():
    body = client.get("/api/recipes", params={"sort": "trending"}).json()
    assert _titles(body)[0] == "Chicken Tikka Masala"


def test_list_unknown_sort_is_latest():
    latest = client.get("/api/recipes").json()
    other = client.get("/api/recipes", params={"sort": "bogus"}).json()
    assert _titles(latest) == _titles(other)


def test_list_tags_or():
    body = client.get("/api/recipes", params={"tags": "vegan,dessert"}).json()
    assert body["pagination"]["total"] == 4
    for recipe in body["recipes"]:
        assert {"vegan", "dessert"} & set(recipe["tags"])


def test_list_max_time():
    body = client.get("/api/recipes", params={"maxTime": 30}).json()
    assert set(_titles(body)) == {
        "Green Smoothie Bowl",
        "Vegan Chocolate Mousse",
        "Caprese Salad",
        "Beef Tacos",
    }
    for recipe in body["recipes"]:
        assert recipe["prepTime"] + recipe["cookTime"] <= 30


def test_list_search_and_cuisine():
    body = client.get("/api/recipes", params={"search": "BASIL"}).json()
    assert _titles(body) == ["Caprese Salad", "Homemade Pizza Margherita"]

    body = client.get("/api/recipes", params={"search": "basil", "cuisine": "Italian", "maxTime": 20}).json()
    assert _titles(body) == ["Caprese Salad"]


def test_list_difficulty():
    body = client.get("/api/recipes", params={"difficulty": "Hard"}).json()
    assert set(_titles(body)) == {"Lemon Garlic Roast Chicken", "Mushroom Risotto"}


def test_list_no_matches():
    body = client.get("/api/recipes", params={"cuisine": "Klingon"}).json()
    assert body["recipes"] == []
    assert body["pagination"]["total"] == 0
    assert body["pagination"]["pages"] == 0


def test_list_rejects_non_numeric_max_time():
    resp = client.get("/api/recipes", params={"maxTime": "soon"})
    assert resp.status_code == 400
    assert "maxTime" in resp.json()["detail"]


def test_list_rejects_bad_paging():
    assert client.get("/api/recipes", params={"limit": 0}).status_code == 400
    assert client.get("/api/recipes", params={"limit": 1000}).status_code == 400
    assert client.get("/api/recipes", params={"page": "-1"}).status_code == 400


# ── Suggestions ──────────────────────────────────────────────────────────


def test_suggest_chicken():
    resp = client.post("/api/recipes/suggest", json={"ingredients": ["chicken"]})
    assert resp.status_code == 200
    body = resp.json()
    assert body["ingredients"] == ["chicken"]
    assert [s["title"] for s in body["suggestions"]] == [
        "Chicken Tikka Masala",
        "Lemon Garlic Roast Chicken",
    ]
    assert all(s["matchScore"] >= 2 for s in body["suggestions"])


def test_suggest_tomato_basil():
    body = client.post("/api/recipes/suggest", json={"ingredients": ["Tomato", " basil "]}).json()
    scores = {s["title"]: s["matchScore"] for s in body["suggestions"]}
    assert scores["Homemade Pizza Margherita"] == 6
    assert scores["Caprese Salad"] == 4
    ordered = [s["matchScore"] for s in body["suggestions"]]
    assert ordered == sorted(ordered, reverse=True)
    assert len(body["suggestions"]) <= 6


def test_suggest_skips_unpublished():
    body = client.post("/api/recipes/suggest", json={"ingredients": ["mushroom"]}).json()
    assert body["suggestions"] == []


def test_suggest_rejects_empty_list():
    resp = client.post("/api/recipes/suggest", json={"ingredients": []})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Please provide at least one ingredient"


def test_suggest_rejects_missing_list():
    assert client.post("/api/recipes/suggest", json={}).status_code == 400


def test_suggest_rejects_missing_body():
    resp = client.post("/api/recipes/suggest")
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Please provide at least one ingredient"


def test_suggest_rejects_non_list_ingredients():
    for value in ("tomato", 3, {"name": "tomato"}):
        resp = client.post("/api/recipes/suggest", json={"ingredients": value})
        assert resp.status_code == 400
        assert resp.json()["detail"] == "Please provide at least one ingredient"


# ── Detail ───────────────────────────────────────────────────────────────


def test_detail_counts_views():
    first = client.get(f"/api/recipes/{CARBONARA_ID}")
    assert first.status_code == 200
    assert first.json()["title"] == "Classic Spaghetti Carbonara"
    second = client.get(f"/api/recipes/{CARBONARA_ID}")
    assert second.json()["views"] == first.json()["views"] + 1


def test_detail_not_found():
    resp = client.get("/api/recipes/does-not-exist")
    assert resp.status_code == 404


def test_view_counts_reset_with_store():
    seeded = client.get(f"/api/recipes/{CARBONARA_ID}").json()["views"]
    client.get(f"/api/recipes/{CARBONARA_ID}")
    reset_store()
    assert client.get(f"/api/recipes/{CARBONARA_ID}").json()["views"] == seeded
