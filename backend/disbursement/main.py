"""Disbursement API - Main Application"""
import logging
import structlog
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from disbursement.config import Settings, get_settings
from disbursement.api.v1.router import api_router
from disbursement.exceptions import DisbursementError
from disbursement.services.registry import get_registry, reset_registry

ERROR_STATUS_CODES = {
    "unauthorized": 403,
    "insufficient_vested": 400,
    "invalid_amount": 400,
    "invalid_destination": 400,
    "invalid_configuration": 422,
    "schedule_not_found": 404,
    "transfer_failed": 409,
}


def configure_logging(settings: Settings) -> None:
    """Configure structured logging"""
    logging.basicConfig(format="%(message)s", level=settings.log_level.upper())

    if settings.log_renderer == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


settings = get_settings()
configure_logging(settings)
logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    logger.info("Starting Disbursement API", version=settings.app_version)
    get_registry()

    yield

    reset_registry()
    logger.info("Disbursement API shutdown complete")


async def disbursement_error_handler(request: Request, exc: DisbursementError):
    status_code = ERROR_STATUS_CODES.get(exc.kind, 400)
    logger.warning("Request rejected", path=request.url.path, error=exc.kind, detail=exc.message)
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message, "error": exc.kind},
    )


def create_app() -> FastAPI:
    """Create FastAPI application"""
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="API for token disbursement schedules with cliff and clawback",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(DisbursementError, disbursement_error_handler)
    app.include_router(api_router, prefix=settings.api_prefix)

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "version": settings.app_version,
            "token": settings.token_symbol,
        }

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "disbursement.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
    )
