"""
Integration test fixtures for FastAPI TestClient.

Provides:
- Test app with the production router and exception handlers
- Fresh in-memory index and session store per test, on app.state
- Seeded music vault memories relative to the wall clock

Strategy:
- No lifespan: state is assigned directly so each test owns its index
- Routes rank against datetime.now(), so seeded timestamps are relative to it
"""

import pytest
from contextlib import asynccontextmanager
from datetime import datetime, timedelta, timezone
from typing import Generator

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from fastapi.testclient import TestClient

from vaultmem.algos.mem_scoring.weights import build_weights_table
from vaultmem.api.router import api_router
from vaultmem.core.config import settings
from vaultmem.domain.exceptions import DomainValidationError, EntityNotFoundError
from vaultmem.domain.memory_index import InMemoryMemoryIndex, InMemorySessionStore
from vaultmem.models.dto.ranking import RankingConfig


# ---------------------------------------------------------------------------
# App Factory (no lifespan)
# ---------------------------------------------------------------------------

@asynccontextmanager
async def test_lifespan(app: FastAPI):
    """Lifespan that leaves app.state to the fixtures."""
    yield


def create_test_app() -> FastAPI:
    """Create FastAPI app for testing.

    Registers domain exception handlers to match production behavior (main.py).
    """
    app = FastAPI(
        title="Vaultmem Test API",
        lifespan=test_lifespan,
    )

    # Domain exception → HTTP response mapping (mirrors main.py)
    @app.exception_handler(EntityNotFoundError)
    async def _not_found(request, exc):
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(DomainValidationError)
    async def _validation(request, exc):
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    app.include_router(api_router, prefix=settings.API_PREFIX)
    return app


# ---------------------------------------------------------------------------
# Index Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def wall_now() -> datetime:
    return datetime.now(timezone.utc)


@pytest.fixture
def memory_index(make_entry, wall_now) -> InMemoryMemoryIndex:
    """Music vault with a spread of ages and qualities, plus one project memory."""
    return InMemoryMemoryIndex([
        make_entry(session_id="old-good", age=timedelta(days=30), quality=0.9,
                   tags=["jazz", "harmony"], reference_time=wall_now),
        make_entry(session_id="fresh-weak", age=timedelta(hours=1), quality=0.4,
                   reference_time=wall_now),
        make_entry(session_id="junk", age=timedelta(hours=2), quality=0.1,
                   reference_time=wall_now),
        make_entry(session_id="stale", age=timedelta(days=300), quality=0.2,
                   command="tune", summary="Tuned the guitar", reference_time=wall_now),
        make_entry(session_id="proj-1", node_id="project-vault", age=timedelta(days=2),
                   command="deploy", summary="Deployed the API", tags=["deploy"],
                   reference_time=wall_now),
    ])


@pytest.fixture
def memory_store(full_memory) -> InMemorySessionStore:
    return InMemorySessionStore([full_memory.model_copy(update={"session_id": "proj-1"})])


@pytest.fixture
def app(memory_index, memory_store) -> FastAPI:
    app = create_test_app()
    app.state.memory_index = memory_index
    app.state.memory_store = memory_store
    app.state.ranking_config = RankingConfig()
    app.state.weights_table = build_weights_table()
    return app


@pytest.fixture
def client(app) -> Generator[TestClient, None, None]:
    """TestClient bound to the test app."""
    with TestClient(app) as test_client:
        yield test_client
