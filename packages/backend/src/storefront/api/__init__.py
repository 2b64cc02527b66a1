"""API route aggregation.

All routers registered here get mounted in main.py. REST lives under
/api and /health sits at the root so load balancers don't need to know
the API prefix. The GraphQL router is mounted separately (see main.py).
"""

from fastapi import APIRouter

from storefront.api.health import router as health_router
from storefront.api.products import router as products_router

api_router = APIRouter(prefix="/api")
api_router.include_router(products_router, tags=["products"])

root_router = APIRouter()
root_router.include_router(health_router, tags=["health"])
