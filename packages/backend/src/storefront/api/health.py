"""Health check endpoint.

Learn: Simple GET endpoint that verifies the server is running and the
database is reachable. Chat stats come from the hub on app.state.
"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from storefront import __version__
from storefront.db.engine import get_db

router = APIRouter()


@router.get("/health")
async def health_check(request: Request, db: AsyncSession = Depends(get_db)):
    """Check server health and database connectivity."""
    checks = {"server": "ok", "version": __version__}

    try:
        await db.execute(text("SELECT 1"))
        checks["database"] = "ok"
    except Exception as e:
        checks["database"] = f"error: {e}"

    hub = getattr(request.app.state, "chat_hub", None)
    chat = {"running": hub.running, "clients": len(hub.registry)} if hub else None

    status = "healthy" if checks["database"] == "ok" else "degraded"
    return {"status": status, **checks, "chat": chat}
