"""Main API router aggregation."""

from fastapi import APIRouter

from vaultmem.api.routes import health, memories, vault_types

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(memories.router, tags=["memories"])
api_router.include_router(vault_types.router, tags=["vault-types"])
