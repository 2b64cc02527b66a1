"""Product service — business logic for the products catalogue.

Learn: Service layer separates business logic from HTTP routing.
REST routes and GraphQL resolvers both call this class, so the two
APIs can never disagree about what a product looks like.
"""

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.db.models import Product
from storefront.schemas.product import ProductCreate, ProductUpdate

logger = structlog.get_logger()


class ProductService:
    """CRUD over the products table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_products(self) -> list[Product]:
        result = await self.db.execute(select(Product).order_by(Product.id))
        return list(result.scalars().all())

    async def get_product(self, product_id: int) -> Product | None:
        return await self.db.get(Product, product_id)

    async def add_products(self, items: list[ProductCreate]) -> list[Product]:
        """Insert one or more products in a single transaction.

        Learn: flush() assigns the autoincrement ids before commit, so the
        returned objects carry their ids even with expire_on_commit=False.
        """
        products = [
            Product(
                name=item.name,
                price=item.price,
                description=item.description,
                categories=list(item.categories),
            )
            for item in items
        ]
        self.db.add_all(products)
        await self.db.flush()
        await self.db.commit()
        logger.info("products.added", count=len(products))
        return products

    async def update_product(
        self, product_id: int, data: ProductUpdate
    ) -> Product | None:
        product = await self.get_product(product_id)
        if product is None:
            return None

        product.name = data.name
        product.price = data.price
        product.description = data.description
        product.categories = list(data.categories)
        await self.db.commit()
        logger.info("products.updated", product_id=product_id)
        return product

    async def delete_product(self, product_id: int) -> bool:
        product = await self.get_product(product_id)
        if product is None:
            return False

        await self.db.delete(product)
        await self.db.commit()
        logger.info("products.deleted", product_id=product_id)
        return True
