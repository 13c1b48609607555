async def test_catalog_lists_products_newest_first(client):
    response = await client.get("/catalog")

    assert response.status_code == 200
    data = response.json()
    assert [p["id"] for p in data["products"]] == ["p4", "p3", "p2", "p1"]
    assert [c["name"] for c in data["categories"]] == ["Books", "Electronics", "Home & Garden"]
    assert data["result_count"] == 4
    assert data["is_loading"] is False
    assert data["error"] is None
    assert data["filters"]["sort_by"] == "featured"


async def test_update_filters(client):
    response = await client.put("/catalog/filters", json={
        "search_query": "lap",
        "sort_by": "price-low"
    })

    assert response.status_code == 200
    data = response.json()
    assert [p["id"] for p in data["products"]] == ["p4", "p1"]
    assert data["result_count"] == 2
    assert data["filters"]["search_query"] == "lap"


async def test_filters_are_partial_updates(client):
    await client.put("/catalog/filters", json={"category": "Home & Garden"})
    response = await client.put("/catalog/filters", json={"price_range": {"min": "30", "max": ""}})

    data = response.json()
    assert data["filters"]["category"] == "Home & Garden"
    assert [p["id"] for p in data["products"]] == ["p2"]


async def test_invalid_sort_key_is_rejected(client):
    response = await client.put("/catalog/filters", json={"sort_by": "cheapest"})

    assert response.status_code == 422


async def test_clear_filters(client):
    await client.put("/catalog/filters", json={"search_query": "phone", "sort_by": "rating"})

    response = await client.delete("/catalog/filters")

    data = response.json()
    assert data["filters"]["search_query"] == ""
    assert data["filters"]["sort_by"] == "rating"
    assert [p["id"] for p in data["products"]] == ["p3", "p4", "p1", "p2"]
