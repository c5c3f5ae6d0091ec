from recipebox.models import Recipe


def test_health_endpoint(client):
    """Health endpoint reports the database probe."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"ok": True, "database_ok": True}


def test_seed_creates_recipes(client):
    response = client.post("/api/dev/seed")
    assert response.status_code == 200

    data = response.json()
    assert data["recipes_created"] == 4
    assert data["recipes_skipped"] == 0
    assert "Created" in data["message"]

    listing = client.get("/api/recipes").json()
    assert listing["total_count"] == 4


def test_seed_is_idempotent(client, db_session):
    """Running seed multiple times doesn't create duplicates."""
    client.post("/api/dev/seed")
    second = client.post("/api/dev/seed").json()

    assert second["recipes_created"] == 0
    assert second["recipes_skipped"] == 4
    assert db_session.query(Recipe).count() == 4


def test_seeded_equipment_is_shared(client):
    client.post("/api/dev/seed")
    names = [e["name"] for e in client.get("/api/recipes/equipment").json()]
    assert names.count("Pot") == 1
    assert names.count("Oven") == 1


def test_seeded_recipes_searchable(client):
    client.post("/api/dev/seed")
    titles = {
        r["title"]
        for r in client.get("/api/recipes", params={"search_term": "soup"}).json()["items"]
    }
    assert {"Tomato Soup", "Beef Noodle Soup"} <= titles
