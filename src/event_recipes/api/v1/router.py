"""API v1 router aggregating all endpoint routers.

All endpoints are mounted under the configured v1_prefix (``/api/v1``).
"""

from __future__ import annotations

from fastapi import APIRouter

from event_recipes.api.v1.endpoints import events, health


router = APIRouter()

router.include_router(health.router)

router.include_router(events.router)
