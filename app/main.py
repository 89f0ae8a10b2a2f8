# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the SocialHub API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.exceptions import (
    SocialHubException,
    socialhub_exception_handler,
    validation_exception_handler,
)
from app.routers import health, users, posts, comments
from app.auth import routes as auth_routes
from lib.supabase_client import SupabaseClient, SupabaseClientError

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs on startup and shutdown:
    - Startup: Create the shared Supabase client
    - Shutdown: Log
    """
    logger.info(f"Starting SocialHub API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    try:
        SupabaseClient.get_client()
    except SupabaseClientError as e:
        # Requests touching the database will fail until this is fixed
        logger.error(f"Database client unavailable at startup: {e}")

    yield

    logger.info("Shutting down SocialHub API")


# Create FastAPI application
app = FastAPI(
    title="SocialHub API",
    description="""
## Social Media Backend

Follow users, write posts, like them and comment on them.

### Authentication

Exchange credentials for a bearer token, then send it on every request:

```bash
curl -X POST http://localhost:3000/api/authenticate \\
  -H "Content-Type: application/json" \\
  -d '{"email": "test@example.com", "password": "password"}'

curl http://localhost:3000/api/posts -H "Authorization: Bearer <token>"
```
""",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Auth",
            "description": "Issue and verify bearer tokens",
        },
        {
            "name": "Users",
            "description": "Follow relationships and profile",
        },
        {
            "name": "Posts",
            "description": "Create, list, delete and like posts",
        },
        {
            "name": "Comments",
            "description": "Comment on posts",
        },
        {
            "name": "Health",
            "description": "API health and readiness checks",
        },
    ],
)


# =============================================================================
# Middleware
# =============================================================================

# CORS middleware - allows cross-origin requests
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(SocialHubException)
async def handle_socialhub_exception(request: Request, exc: SocialHubException):
    """Handle domain exceptions."""
    return await socialhub_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def handle_validation_exception(request: Request, exc: RequestValidationError):
    """Handle malformed path ids and request bodies."""
    return await validation_exception_handler(request, exc)


@app.exception_handler(SupabaseClientError)
async def handle_database_exception(request: Request, exc: SupabaseClientError):
    """Handle database failures."""
    logger.error(f"Database error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "A database error occurred",
            "code": "DATABASE_ERROR",
        }
    )


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

# Token issuance and verification
app.include_router(
    auth_routes.router,
    prefix=settings.api_prefix,
    tags=["Auth"]
)

# Health check endpoints
app.include_router(
    health.router,
    prefix=settings.api_prefix,
    tags=["Health"]
)

# Follow / profile endpoints
app.include_router(
    users.router,
    prefix=settings.api_prefix,
    tags=["Users"]
)

# Post and like endpoints
app.include_router(
    posts.router,
    prefix=settings.api_prefix,
    tags=["Posts"]
)

# Comment endpoints
app.include_router(
    comments.router,
    prefix=settings.api_prefix,
    tags=["Comments"]
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "SocialHub API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": f"{settings.api_prefix}/health",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.DEBUG,
    )
