"""Product REST routes.

Learn: FastAPI routers define HTTP endpoints. Each route function
receives dependencies (db session) via Depends() and delegates
to the service layer. Routes handle HTTP concerns (status codes,
error responses), services handle business logic.
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.db.engine import get_db
from storefront.schemas.product import (
    MessageResponse,
    ProductCreate,
    ProductRead,
    ProductUpdate,
)
from storefront.services.product_service import ProductService

router = APIRouter()


def _svc(db: AsyncSession = Depends(get_db)) -> ProductService:
    return ProductService(db)


@router.get("/products", response_model=list[ProductRead])
async def list_products(svc: ProductService = Depends(_svc)):
    return await svc.list_products()


@router.get("/products/{product_id}", response_model=ProductRead)
async def get_product(product_id: int, svc: ProductService = Depends(_svc)):
    product = await svc.get_product(product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


@router.post("/products", response_model=list[ProductRead])
async def add_products(
    body: list[ProductCreate] | ProductCreate,
    svc: ProductService = Depends(_svc),
):
    """Add one product or a batch. Always returns a list."""
    items = body if isinstance(body, list) else [body]
    return await svc.add_products(items)


@router.put("/products/{product_id}", response_model=MessageResponse)
async def update_product(
    product_id: int,
    body: ProductUpdate,
    svc: ProductService = Depends(_svc),
):
    product = await svc.update_product(product_id, body)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return {"message": "Product updated successfully"}


@router.delete("/products/{product_id}", response_model=MessageResponse)
async def delete_product(product_id: int, svc: ProductService = Depends(_svc)):
    if not await svc.delete_product(product_id):
        raise HTTPException(status_code=404, detail="Product not found")
    return {"message": "Product deleted successfully"}
