"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src import database
from src.api import auth, items
from src.api.errors import register_exception_handlers
from src.config import get_settings
from src.schemas.common import ApiResponse

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    # Tests and scripts may have initialized the engine already
    if not database.is_initialized():
        database.init_engine(settings.database_url)
    if settings.auto_create_tables:
        database.init_db()
    logger.info(f"Todo List API started ({settings.environment})")
    yield
    database.get_engine().dispose()


app = FastAPI(
    title="Todo List API",
    description="Multi-user todo list with token authentication",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware for development
if settings.is_development:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

register_exception_handlers(app)

# Register routers
app.include_router(auth.router)
app.include_router(items.router)


@app.get("/", response_model=ApiResponse[None])
async def root():
    """Welcome message."""
    return ApiResponse[None](message="Welcome to Todo List API")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}
