"""
Procurement Intelligence - FastAPI Application

API server for RFPs, vendors, proposal scoring and vendor ranking.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config.settings import settings
from config.logging_config import setup_logging
from api.middleware.error_handler import setup_error_handlers
from api.middleware.logging import LoggingMiddleware
from api.routes.email import router as email_router
from api.routes.proposals import router as proposals_router
from api.routes.rfps import router as rfps_router
from api.routes.vendors import router as vendors_router
from database.connection import init_db, close_db
from pipeline import ProcurementPipeline
from services.mail_service import MailConfig, MailService

logger = setup_logging(log_level="INFO", logs_dir=settings.logs_dir)


def create_app(
    pipeline: Optional[ProcurementPipeline] = None,
    mail_service: Optional[MailService] = None
) -> FastAPI:
    """
    Build the application.

    Args:
        pipeline: Pipeline to serve requests with (built from settings if omitted)
        mail_service: Mail transport (built from settings if omitted)
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifecycle management."""
        logger.info("Starting Procurement Intelligence API...")
        logger.info(f"Environment: {settings.api_env}")

        if pipeline is None:
            if not settings.openai_api_key:
                logger.warning("OPENAI_API_KEY is not set; completion calls will fail")
            app.state.pipeline = ProcurementPipeline.from_config(settings.llm_config())
        else:
            app.state.pipeline = pipeline
        app.state.mail_service = mail_service or MailService(MailConfig.from_settings(settings))

        await init_db()

        yield

        await close_db()
        logger.info("Shutting down Procurement Intelligence API...")

    app = FastAPI(
        title="Procurement Intelligence API",
        description="AI-assisted vendor proposal extraction, scoring and ranking",
        version="1.0.0",
        lifespan=lifespan
    )

    # Set up error handlers (before middleware)
    setup_error_handlers(app)

    app.add_middleware(LoggingMiddleware)

    # Configure CORS (should be last middleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(rfps_router, prefix="/api")
    app.include_router(vendors_router, prefix="/api")
    app.include_router(proposals_router, prefix="/api")
    app.include_router(email_router, prefix="/api")

    @app.get("/")
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Procurement Intelligence API",
            "version": "1.0.0",
            "status": "running",
            "environment": settings.api_env,
            "model": settings.llm_model,
            "docs": "/docs"
        }

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "environment": settings.api_env
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True
    )
