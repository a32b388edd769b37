"""Routes API / API routes."""

from fastapi import APIRouter

from smartpass.api import (
    credentials,
    routes,
    scans,
    verification,
)

api_router = APIRouter(prefix="/api")

api_router.include_router(verification.router, tags=["verification"])
api_router.include_router(credentials.router, prefix="/credentials", tags=["credentials"])
api_router.include_router(routes.router, prefix="/routes", tags=["routes"])
api_router.include_router(scans.router, prefix="/scans", tags=["scans"])
