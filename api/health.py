"""
Health and status endpoints.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Request

from utils.schemas import HealthResponse

router = APIRouter(tags=["health"])

APP_VERSION = "2.0.0"


def _store_connected(request: Request) -> bool:
    database = getattr(request.app.state, "database", None)
    return bool(database and database.connected)


@router.get("/api/health", response_model=HealthResponse)
async def health(request: Request) -> Dict[str, Any]:
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc),
        "store_connected": _store_connected(request),
    }


async def service_status(request: Request) -> Dict[str, Any]:
    """Root status document, served when no static front end is mounted."""
    return {
        "status": "TraduciAMO Backend is running!",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "storeConnected": _store_connected(request),
        "version": APP_VERSION,
    }
