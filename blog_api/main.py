"""
Main FastAPI application entry point.
Configures the application, middleware, and routes.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from blog_api.api.routes import auth, comments, health, posts, users
from blog_api.core.config import settings
from blog_api.core.errors import BlogAPIError, register_exception_handlers
from blog_api.core.logging import get_logger, setup_logging
from blog_api.core.middleware import ResponseDelayMiddleware
from blog_api.db.store import JsonFileStore, get_store
from blog_api.models.user import UserRole
from blog_api.schemas.user import UserCreate
from blog_api.services.user_service import UserService

# Setup logging
setup_logging()
logger = get_logger(__name__)


def bootstrap_admin(store: JsonFileStore) -> None:
    """Create the first admin account if its email is not in the users file yet."""
    if UserService.get_by_email(store, settings.FIRST_ADMIN_EMAIL):
        return

    logger.info("Creating first admin user...")
    try:
        admin = UserService.create(
            store,
            UserCreate(
                name=settings.FIRST_ADMIN_NAME,
                email=settings.FIRST_ADMIN_EMAIL,
                password=settings.FIRST_ADMIN_PASSWORD,
                role=UserRole.ADMIN.value,
            ),
        )
        logger.info(f"Admin created: {admin.email}")
    except BlogAPIError as e:
        logger.error(f"Failed to create admin: {e}")
        logger.warning("Continuing without admin. User management endpoints may not be reachable.")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan handler.
    Runs startup and shutdown logic.
    """
    logger.info(f"Starting {settings.PROJECT_NAME} v{settings.VERSION}")

    # Honor dependency overrides so tests never touch the real data directory
    store = app.dependency_overrides.get(get_store, get_store)()
    logger.info(f"Using data directory {store.base_path}")
    if not store.ping():
        logger.error(f"Data directory {store.base_path} is not writable")

    if not settings.DISABLE_BOOTSTRAP_USERS:
        bootstrap_admin(store)
    else:
        logger.info("User bootstrapping disabled (DISABLE_BOOTSTRAP_USERS=true)")

    logger.info("Application startup complete")

    yield

    logger.info("Shutting down application...")


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
    docs_url=f"{settings.API_PREFIX}/docs",
    redoc_url=f"{settings.API_PREFIX}/redoc",
    lifespan=lifespan,
)

register_exception_handlers(app)

# Added first so it runs inside CORS; preflight responses are not delayed
app.add_middleware(ResponseDelayMiddleware, delay_ms=settings.RESPONSE_DELAY_MS)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["authorization", "content-type", "accept"],
)

app.include_router(health.router, prefix=settings.API_PREFIX)
app.include_router(auth.router, prefix=settings.API_PREFIX)
app.include_router(users.router, prefix=settings.API_PREFIX)
app.include_router(posts.router, prefix=settings.API_PREFIX)
app.include_router(comments.router, prefix=settings.API_PREFIX)


def run() -> None:
    """Start the API with uvicorn."""
    logger.info(f"API on http://{settings.HOST}:{settings.PORT}")
    uvicorn.run(
        "blog_api.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_config=None,
    )


if __name__ == "__main__":
    run()
