"""
FastAPI main application
"""

import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from .core.config import settings
from .core.errors import AccountError
from .core.logging import configure_logging
from .api.router import api_router, views_router
from .db.database import SessionLocal, create_tables

# Import all ORM models to ensure relationships are resolved
from .infrastructure import orm  # noqa: F401

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    configure_logging()
    if settings.TESTING or settings.DATABASE_URL.startswith("sqlite"):
        # Postgres schemas are managed by alembic migrations
        create_tables()
    logger.info("Starting %s %s", settings.PROJECT_NAME, settings.VERSION)
    yield
    logger.info("Shutting down %s", settings.PROJECT_NAME)


def add_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AccountError)
    async def account_error_handler(request: Request, exc: AccountError):
        logger.error(
            "%s on %s %s: %s", exc.name, request.method, request.url.path, exc.message
        )
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "code": exc.code.value},
        )


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.PROJECT_NAME,
        description=settings.DESCRIPTION,
        version=settings.VERSION,
        lifespan=lifespan,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_HOSTS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    add_exception_handlers(app)

    app.include_router(api_router, prefix=settings.API_PREFIX)
    app.include_router(views_router)

    @app.get("/")
    async def root():
        """Root endpoint"""
        return {"message": settings.PROJECT_NAME, "version": settings.VERSION}

    @app.get("/health")
    async def health_check():
        """Health check endpoint that verifies database connectivity"""
        db = SessionLocal()
        try:
            db.execute(text("SELECT 1"))
            db_status = "healthy"
        except SQLAlchemyError:
            logger.exception("Database health check failed")
            db_status = "unhealthy"
        finally:
            db.close()

        return {
            "status": "healthy" if db_status == "healthy" else "degraded",
            "database": db_status,
            "version": settings.VERSION,
        }

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "shop_accounts.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level="info",
    )
