from contextlib import asynccontextmanager
import os
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from vaultmem.api.router import api_router
from vaultmem.core.config import settings
from vaultmem.core.logging_config import configure_logging
from vaultmem.domain.exceptions import EntityNotFoundError, DomainValidationError
from vaultmem.domain.memory_index import InMemoryMemoryIndex, InMemorySessionStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    FastAPI lifespan event handler.

    Builds the engine configuration and the memory index owned by this app.
    """
    configure_logging()

    logger.info("FastAPI application starting up...")

    # Configure LangSmith tracing environment variables
    # The langsmith SDK reads these from os.environ
    if settings.LANGSMITH_TRACING:
        os.environ['LANGSMITH_TRACING'] = 'true'
        os.environ['LANGSMITH_API_KEY'] = settings.LANGSMITH_API_KEY
        os.environ['LANGSMITH_PROJECT'] = settings.LANGSMITH_PROJECT
        os.environ['LANGSMITH_ENDPOINT'] = settings.LANGSMITH_ENDPOINT
        logger.info(f"LangSmith tracing enabled (project: {settings.LANGSMITH_PROJECT})")
    else:
        os.environ['LANGSMITH_TRACING'] = 'false'
        logger.info("LangSmith tracing disabled")

    # Invalid ranking/weight settings fail here, before serving requests
    app.state.ranking_config = settings.ranking_config()
    app.state.weights_table = settings.vault_weights_table()
    app.state.memory_index = InMemoryMemoryIndex()
    app.state.memory_store = InMemorySessionStore()
    logger.info(
        f"Ranking configured (recency={app.state.ranking_config.recency_weight}, "
        f"quality={app.state.ranking_config.quality_weight}, "
        f"min_quality={app.state.ranking_config.min_quality_score}, "
        f"{len(app.state.weights_table)} vault type profiles)"
    )

    yield  # Application runs

    logger.info("FastAPI application shutting down...")


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
    lifespan=lifespan,
)


# Domain exception → HTTP response mapping
@app.exception_handler(EntityNotFoundError)
async def entity_not_found_handler(request: Request, exc: EntityNotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(DomainValidationError)
async def domain_validation_handler(request: Request, exc: DomainValidationError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


# Set up CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API router
app.include_router(api_router, prefix=settings.API_PREFIX)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Vaultmem Memory Ranking API",
        "version": settings.VERSION,
        "docs": "/docs"
    }


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    # Custom log config to work with our filter
    # Must disable uvicorn's default config and let our lifespan event handle it
    log_config = uvicorn.config.LOGGING_CONFIG.copy()
    log_config["loggers"]["uvicorn.access"] = {
        "handlers": [],  # Empty - handlers added by our filter in lifespan
        "level": "INFO",
        "propagate": False
    }

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_config=log_config
    )
