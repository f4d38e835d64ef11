"""
FastAPI application factory and main app configuration.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api.errors import APIError
from .api.routers import health, voice
from .api.utils.responses import fail
from .core.config import Settings, get_settings
from .core.exceptions import DentalVoiceException, ExternalServiceError
from .core.structured_logger import configure_logging
from .domain.errors import DomainError
from .middleware.performance_middleware import PerformanceMiddleware

logger = logging.getLogger("dentalvoice")


async def init_database(settings: Settings) -> None:
    """Connect Motor and register the Beanie consultation model."""
    from beanie import init_beanie
    from motor.motor_asyncio import AsyncIOMotorClient
    import certifi

    from .adapters.db.mongo.models.consultation_m import ConsultationMongo

    mongo_uri = settings.database.uri

    # Enable TLS only for Atlas SRV URIs
    if mongo_uri.startswith("mongodb+srv://"):
        client = AsyncIOMotorClient(
            mongo_uri,
            serverSelectionTimeoutMS=15000,
            tls=True,
            tlsCAFile=certifi.where(),
            tlsAllowInvalidCertificates=False,
        )
    else:
        client = AsyncIOMotorClient(mongo_uri, serverSelectionTimeoutMS=15000)

    await init_beanie(database=client[settings.database.db_name], document_models=[ConsultationMongo])


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    settings = get_settings()
    configure_logging(settings.logging.level, settings.logging.format)
    logger.info(f"🚀 Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"📊 Environment: {settings.app_env}")

    if settings.database.enabled:
        try:
            await init_database(settings)
            logger.info("✅ Database connection established")
        except Exception as e:
            logger.error(f"❌ Database connection failed: {e}", exc_info=True)
            raise
    else:
        logger.warning("⚠️ MONGO_URI not set, running without consultation store")

    if not settings.azure_openai.is_configured:
        logger.warning("⚠️ Azure OpenAI not configured, extraction will use keyword fallback")

    yield

    logger.info(f"🛑 Shutting down {settings.app_name}")


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Structured clinical record extraction from dental consultation transcripts",
        version=settings.app_version,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.allowed_origins,
        allow_credentials=settings.cors.allow_credentials,
        allow_methods=settings.cors.allowed_methods,
        allow_headers=settings.cors.allowed_headers,
    )
    app.add_middleware(PerformanceMiddleware)

    app.include_router(health.router)
    app.include_router(voice.router)

    @app.get("/", tags=["health"])
    async def root():
        """Root endpoint with API information."""
        return {
            "service": settings.app_name,
            "version": settings.app_version,
            "environment": settings.app_env,
            "status": "running",
            "docs": "/docs",
            "endpoints": {
                "health": "/health",
                "process_global_transcript": "POST /voice/process-global-transcript",
            },
        }

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError):
        logger.error(f"APIError: {exc.code} ({exc.http_status}) {exc.message}")
        return JSONResponse(
            status_code=exc.http_status,
            content=fail(request, exc.code, exc.message, exc.details).model_dump(),
        )

    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError):
        return JSONResponse(
            status_code=400,
            content=fail(request, exc.error_code or "DOMAIN_ERROR", exc.message, exc.details).model_dump(),
        )

    @app.exception_handler(DentalVoiceException)
    async def service_error_handler(request: Request, exc: DentalVoiceException):
        logger.error(f"{type(exc).__name__}: {exc.message}")
        return JSONResponse(
            status_code=502 if isinstance(exc, ExternalServiceError) else 500,
            content=fail(request, exc.error_code or "SERVICE_ERROR", exc.message, exc.details).model_dump(),
        )

    @app.exception_handler(RequestValidationError)
    async def pydantic_error_handler(request: Request, exc: RequestValidationError):
        error_details = exc.errors()
        logger.error(f"ValidationError on {request.method} {request.url.path}: {error_details}")
        error_messages = [
            f"{' -> '.join(str(x) for x in error.get('loc', []))}: {error.get('msg', 'Validation error')}"
            for error in error_details
        ]
        return JSONResponse(
            status_code=422,
            content=fail(
                request,
                "INVALID_INPUT",
                f"Input validation failed: {'; '.join(error_messages)}",
                {"path": request.url.path},
            ).model_dump(),
        )

    return app


app = create_app()
