"""Products REST API tests.

Learn: Each test creates its own data via the API and verifies the response.
Thanks to the fresh-database-per-test fixture in conftest.py, tests are isolated.

Pattern: test_<verb>_<noun>_<scenario>
"""

import pytest


LAMP = {
    "name": "Desk lamp",
    "price": 24.5,
    "description": "Warm white LED",
    "categories": ["home", "lighting"],
}


@pytest.fixture
async def lamp(client):
    """Create a product and return its data."""
    resp = await client.post("/api/products", json=LAMP)
    return resp.json()[0]


# ═══════════════════════════════════════════════════════════
# Create
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_add_single_product(client):
    """POST /api/products with one object returns a one-item list."""
    resp = await client.post("/api/products", json=LAMP)
    assert resp.status_code == 200
    data = resp.json()
    assert len(data) == 1
    assert data[0]["name"] == "Desk lamp"
    assert data[0]["price"] == 24.5
    assert data[0]["categories"] == ["home", "lighting"]
    assert isinstance(data[0]["id"], int)


@pytest.mark.asyncio
async def test_add_product_batch(client):
    """POST /api/products with a list inserts every item."""
    resp = await client.post("/api/products", json=[
        {"name": "Mug", "price": 9.99},
        {"name": "Kettle", "price": 39.0, "categories": ["kitchen"]},
    ])
    assert resp.status_code == 200
    data = resp.json()
    assert [p["name"] for p in data] == ["Mug", "Kettle"]
    assert data[0]["id"] != data[1]["id"]
    assert data[0]["description"] == ""
    assert data[0]["categories"] == []


@pytest.mark.asyncio
async def test_add_product_validates_body(client):
    """A product without a name is rejected."""
    resp = await client.post("/api/products", json={"price": 1.0})
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_add_product_rejects_negative_price(client):
    resp = await client.post("/api/products", json={"name": "Refund", "price": -5})
    assert resp.status_code == 422


# ═══════════════════════════════════════════════════════════
# Read
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_list_products_empty(client):
    resp = await client.get("/api/products")
    assert resp.status_code == 200
    assert resp.json() == []


@pytest.mark.asyncio
async def test_list_products_ordered_by_id(client):
    await client.post("/api/products", json={"name": "B", "price": 2})
    await client.post("/api/products", json={"name": "A", "price": 1})

    resp = await client.get("/api/products")
    products = resp.json()
    assert [p["name"] for p in products] == ["B", "A"]
    assert products[0]["id"] < products[1]["id"]


@pytest.mark.asyncio
async def test_get_product(client, lamp):
    resp = await client.get(f"/api/products/{lamp['id']}")
    assert resp.status_code == 200
    assert resp.json() == lamp


@pytest.mark.asyncio
async def test_get_product_not_found(client):
    resp = await client.get("/api/products/9999")
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Product not found"


# ═══════════════════════════════════════════════════════════
# Update / delete
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_update_product(client, lamp):
    """PUT replaces every field of the product."""
    resp = await client.put(
        f"/api/products/{lamp['id']}",
        json={"name": "Floor lamp", "price": 80, "categories": ["home"]},
    )
    assert resp.status_code == 200
    assert resp.json() == {"message": "Product updated successfully"}

    updated = (await client.get(f"/api/products/{lamp['id']}")).json()
    assert updated["name"] == "Floor lamp"
    assert updated["price"] == 80.0
    assert updated["description"] == ""
    assert updated["categories"] == ["home"]


@pytest.mark.asyncio
async def test_update_product_not_found(client):
    resp = await client.put("/api/products/9999", json={"name": "X", "price": 1})
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_delete_product(client, lamp):
    resp = await client.delete(f"/api/products/{lamp['id']}")
    assert resp.status_code == 200
    assert resp.json() == {"message": "Product deleted successfully"}

    resp = await client.get(f"/api/products/{lamp['id']}")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_delete_product_twice(client, lamp):
    """Deleting an already-deleted product is a 404, not a 500."""
    await client.delete(f"/api/products/{lamp['id']}")
    resp = await client.delete(f"/api/products/{lamp['id']}")
    assert resp.status_code == 404
