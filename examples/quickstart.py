#!/usr/bin/env python3
"""
Storefront Quickstart — the whole products API in one script.

Adds a couple of products → lists them over REST and GraphQL →
updates one → deletes one. Run with: python examples/quickstart.py

Requires: pip install httpx
Backend must be running: http://localhost:8080
For the chat room, open http://localhost:8080/ in two browser tabs.
"""

import sys

import httpx

BASE = "http://localhost:8080"


def main():
    client = httpx.Client(base_url=BASE, timeout=10)

    # ── Health check ──────────────────────────────────────────────
    print("Checking backend health...")
    try:
        resp = client.get("/health")
    except httpx.ConnectError:
        print(f"Backend not reachable at {BASE}")
        print("Start it with:  storefront serve")
        sys.exit(1)
    health = resp.json()
    print(f"  Status:   {health['status']}")
    print(f"  Database: {health['database']}")

    # ── Add products (batch) ──────────────────────────────────────
    print("\n1. Adding products...")
    resp = client.post("/api/products", json=[
        {"name": "Espresso cup", "price": 7.5, "categories": ["kitchen"]},
        {"name": "Desk lamp", "price": 24.0, "description": "Warm white LED",
         "categories": ["home", "lighting"]},
    ])
    assert resp.status_code == 200, f"Failed: {resp.text}"
    cup, lamp = resp.json()
    print(f"   #{cup['id']} {cup['name']}  #{lamp['id']} {lamp['name']}")

    # ── List over REST ────────────────────────────────────────────
    print("\n2. Listing products (REST)...")
    for p in client.get("/api/products").json():
        print(f"   #{p['id']:<4} {p['name']:<20} {p['price']:>8.2f}")

    # ── Same data over GraphQL ────────────────────────────────────
    print("\n3. Querying products (GraphQL)...")
    resp = client.post("/api/graphql", json={
        "query": "{ products { id name categories } }",
    })
    for p in resp.json()["data"]["products"]:
        print(f"   #{p['id']:<4} {p['name']:<20} {', '.join(p['categories'])}")

    # ── Update ────────────────────────────────────────────────────
    print("\n4. Updating lamp price...")
    resp = client.put(f"/api/products/{lamp['id']}", json={**lamp, "price": 19.99})
    print(f"   {resp.json()['message']}")

    # ── Delete ────────────────────────────────────────────────────
    print("\n5. Deleting cup...")
    resp = client.delete(f"/api/products/{cup['id']}")
    print(f"   {resp.json()['message']}")

    print("\nDone.")


if __name__ == "__main__":
    main()
