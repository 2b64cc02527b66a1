"""Storefront CLI — run the server and manage the catalogue from a shell.

Usage:
    storefront serve                               # Run the API + chat server
    storefront products                            # List products
    storefront add-product "Desk lamp" 24.5 -c home -c lighting
    storefront delete-product 7
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import json
import os
import sys
from typing import Optional

import click
import httpx

from storefront import __version__

# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------

DEFAULT_API_URL = "http://localhost:8080"


def _api_url() -> str:
    return os.environ.get("STOREFRONT_API_URL", DEFAULT_API_URL).rstrip("/")


def _client() -> httpx.AsyncClient:
    """Build an async HTTP client pointed at the Storefront backend."""
    return httpx.AsyncClient(base_url=_api_url(), timeout=30.0)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _run(coro):
    """Run an async coroutine from a synchronous Click handler.

    Falls back to a worker thread when a loop is already running
    (e.g. CliRunner invoked from an async test).
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)
    else:
        with concurrent.futures.ThreadPoolExecutor(max_workers=1) as pool:
            return pool.submit(asyncio.run, coro).result()


def _fail(resp: httpx.Response) -> None:
    try:
        detail = resp.json().get("detail", resp.text)
    except ValueError:
        detail = resp.text
    click.secho(f"Error {resp.status_code}: {detail}", fg="red", err=True)
    sys.exit(1)


def _print_table(rows: list[dict], columns: list[tuple[str, str, int]]):
    """Print a simple ASCII table.

    columns: list of (header, dict_key, width)
    """
    header = "  ".join(h.ljust(w) for h, _, w in columns)
    click.secho(header, bold=True)
    click.echo("-" * len(header))
    for row in rows:
        line = "  ".join(str(row.get(k, "—"))[:w].ljust(w) for _, k, w in columns)
        click.echo(line)


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(version=__version__, prog_name="storefront")
def main():
    """Storefront — products catalogue with a live chat room."""


@main.command()
@click.option("--host", default=None, help="Bind address (default: STOREFRONT_HOST)")
@click.option("--port", type=int, default=None, help="Port (default: STOREFRONT_PORT)")
@click.option("--reload", is_flag=True, help="Restart on code changes")
def serve(host: Optional[str], port: Optional[int], reload: bool):
    """Run the HTTP + WebSocket server."""
    import uvicorn

    from storefront.config import settings

    uvicorn.run(
        "storefront.main:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
    )


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Print raw JSON")
def products(as_json: bool):
    """List all products."""
    _run(_products_impl(as_json))


async def _products_impl(as_json: bool):
    async with _client() as c:
        r = await c.get("/api/products")
        if r.is_error:
            _fail(r)
        items = r.json()

    if as_json:
        click.echo(json.dumps(items, indent=2))
        return
    if not items:
        click.echo("No products found.")
        return

    rows = [{**p, "categories": ", ".join(p.get("categories") or [])} for p in items]
    _print_table(rows, [
        ("ID", "id", 6),
        ("NAME", "name", 30),
        ("PRICE", "price", 10),
        ("CATEGORIES", "categories", 30),
    ])


@main.command("add-product")
@click.argument("name")
@click.argument("price", type=float)
@click.option("--description", "-d", default="", help="Free-text description")
@click.option("--category", "-c", "categories", multiple=True, help="Category (repeatable)")
def add_product(name: str, price: float, description: str, categories: tuple[str, ...]):
    """Add a product with NAME and PRICE."""
    _run(_add_product_impl(name, price, description, list(categories)))


async def _add_product_impl(name: str, price: float, description: str, categories: list[str]):
    async with _client() as c:
        r = await c.post("/api/products", json={
            "name": name,
            "price": price,
            "description": description,
            "categories": categories,
        })
        if r.is_error:
            _fail(r)
        created = r.json()[0]
    click.secho(f"Product #{created['id']} created: {created['name']}", fg="green")


@main.command("delete-product")
@click.argument("product_id", type=int)
def delete_product(product_id: int):
    """Delete the product with PRODUCT_ID."""
    _run(_delete_product_impl(product_id))


async def _delete_product_impl(product_id: int):
    async with _client() as c:
        r = await c.delete(f"/api/products/{product_id}")
        if r.is_error:
            _fail(r)
    click.secho(f"Product #{product_id} deleted", fg="green")


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    main()
