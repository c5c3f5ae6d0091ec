"""Tag and equipment autocomplete endpoints."""


def _seed(make_recipe):
    make_recipe(
        title="Risotto",
        tags=[
            {"name": "Italian", "tag_type": "Cuisine"},
            {"name": "Japanese", "tag_type": "Cuisine"},
            {"name": "Rice", "tag_type": "Type"},
            {"name": "Date Night", "tag_type": "Custom"},
        ],
        equipment_names=["Pot", "Dutch Oven", "Oven"],
    )


def test_list_tags_ordered_by_type_then_name(client, make_recipe):
    _seed(make_recipe)
    response = client.get("/api/recipes/tags")
    assert response.status_code == 200
    assert [(t["tag_type"], t["name"]) for t in response.json()] == [
        ("Cuisine", "Italian"),
        ("Cuisine", "Japanese"),
        ("Type", "Rice"),
        ("Custom", "Date Night"),
    ]


def test_search_tags(client, make_recipe):
    _seed(make_recipe)
    names = [t["name"] for t in client.get("/api/recipes/tags", params={"search_term": "ital"}).json()]
    assert names == ["Italian"]


def test_list_equipment_ordered_by_name(client, make_recipe):
    _seed(make_recipe)
    names = [e["name"] for e in client.get("/api/recipes/equipment").json()]
    assert names == ["Dutch Oven", "Oven", "Pot"]


def test_search_equipment(client, make_recipe):
    _seed(make_recipe)
    names = [e["name"] for e in client.get("/api/recipes/equipment", params={"search_term": "OVEN"}).json()]
    assert names == ["Dutch Oven", "Oven"]


def test_lookups_empty(client):
    assert client.get("/api/recipes/tags").json() == []
    assert client.get("/api/recipes/equipment", params={"search_term": "wok"}).json() == []
