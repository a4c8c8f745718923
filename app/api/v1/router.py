# 📄 File: app/api/v1/router.py
# 🧭 Purpose (Layman Explanation):
# Collects all version 1 endpoints in one place so the application can mount them
# under /api/v1.
# 🧪 Purpose (Technical Summary):
# API v1 router aggregation. Module routers are included with their prefixes and tags.
# 🔗 Dependencies:
# FastAPI, app.modules.authentication.presentation.api.v1
# 🔄 Connected Modules / Calls From:
# app.main.py

import logging

from fastapi import APIRouter

from app.modules.authentication.presentation.api.v1 import auth_router

from . import API_TAGS, ROUTE_PREFIXES

logger = logging.getLogger(__name__)

# Create main API v1 router
api_v1_router = APIRouter()

api_v1_router.include_router(
    auth_router,
    prefix=ROUTE_PREFIXES["auth"],
    tags=[API_TAGS["auth"]],
)


@api_v1_router.get("/", summary="API v1 Information", tags=["API Info"])
async def api_v1_info() -> dict:
    """List the v1 route groups."""
    return {
        "version": "v1",
        "routes": {name: f"/api/v1{prefix}" for name, prefix in ROUTE_PREFIXES.items()},
    }
