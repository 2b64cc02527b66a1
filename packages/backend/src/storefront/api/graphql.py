"""GraphQL endpoint — read-only view of the products catalogue.

Learn: strawberry builds the schema from type-annotated classes. The
resolvers share ProductService with the REST routes; the request-scoped
session arrives through the context getter, which is a normal FastAPI
dependency (so test overrides of get_db apply here too).
"""

from typing import Optional

import strawberry
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession
from strawberry.fastapi import GraphQLRouter
from strawberry.types import Info

from storefront.db.engine import get_db
from storefront.db.models import Product
from storefront.services.product_service import ProductService


@strawberry.type(name="Product")
class ProductType:
    id: int
    name: str
    price: float
    description: str
    categories: list[str]

    @classmethod
    def from_model(cls, product: Product) -> "ProductType":
        return cls(
            id=product.id,
            name=product.name,
            price=product.price,
            description=product.description or "",
            categories=list(product.categories or []),
        )


@strawberry.type
class Query:
    @strawberry.field
    async def products(self, info: Info) -> list[ProductType]:
        svc = ProductService(info.context["db"])
        return [ProductType.from_model(p) for p in await svc.list_products()]

    @strawberry.field
    async def product(self, info: Info, id: int) -> Optional[ProductType]:
        svc = ProductService(info.context["db"])
        product = await svc.get_product(id)
        return ProductType.from_model(product) if product else None


schema = strawberry.Schema(query=Query)


async def get_context(db: AsyncSession = Depends(get_db)) -> dict:
    return {"db": db}


router = GraphQLRouter(schema, context_getter=get_context)
