"""
Main FastAPI application entry point.
"""

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from sqlalchemy.exc import SQLAlchemyError, TimeoutError as PoolTimeoutError
import logging
from contextlib import asynccontextmanager
from typing import Optional

from app.core.config import Settings, settings as default_settings
from app.core.database import Database
from app.core.mailer import Mailer, MailDeliveryError
from app.routers import api_router

# Configure logging
logging.basicConfig(
    level=default_settings.LOG_LEVEL,
    format=default_settings.log_format,
)
logger = logging.getLogger(__name__)

# Suppress uvicorn warnings for invalid HTTP requests
logging.getLogger("uvicorn.error").setLevel(logging.ERROR)


# Lifespan context manager for startup/shutdown events
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: open the connection pool and the mail transport
    settings = app.state.settings
    db = Database(settings)

    if settings.DB_CREATE_TABLES:
        db.create_tables()

    if not db.ping():
        db.dispose()
        logger.error("❌ Error connecting to the database")
        raise RuntimeError("Database is unreachable")
    logger.info("🚀 Connected to the database")

    app.state.db = db
    app.state.mailer = Mailer(settings)

    yield

    # Shutdown: drain the pool
    db.dispose()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application for the given settings (process settings by default)."""
    settings = settings or default_settings

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Catch anything the exception handlers below did not
    @app.middleware("http")
    async def catch_unhandled_errors(request: Request, call_next):
        try:
            response = await call_next(request)
            return response
        except Exception as e:
            # Log the full error for debugging
            logger.error(f"Request failed: {str(e)}", exc_info=True)

            # Return detailed error in development, generic in production
            if settings.debug:
                return JSONResponse(
                    status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                    content={
                        "message": "Internal server error",
                        "detail": str(e),
                        "error_type": type(e).__name__
                    }
                )
            else:
                return JSONResponse(
                    status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                    content={"message": "Internal server error"}
                )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Render every HTTP error as {"message": ...}"""
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    # Add exception handler for validation errors
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle Pydantic validation errors with detailed messages"""
        errors = exc.errors()
        error_messages = []

        for error in errors:
            field = " -> ".join(str(x) for x in error["loc"])
            message = error["msg"]
            error_type = error["type"]
            error_messages.append(f"{field}: {message} (type: {error_type})")

        logger.error(f"Validation error: {error_messages}")

        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "message": "Validation Error",
                "errors": error_messages,
            }
        )

    @app.exception_handler(PoolTimeoutError)
    async def pool_timeout_handler(request: Request, exc: PoolTimeoutError):
        """No pooled connection became free within the configured wait"""
        logger.error(f"Connection pool exhausted: {str(exc)}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"message": "Service temporarily unavailable"}
        )

    @app.exception_handler(SQLAlchemyError)
    async def database_exception_handler(request: Request, exc: SQLAlchemyError):
        logger.error(f"Database error: {str(exc)}", exc_info=True)
        content = {"message": "Internal server error"}
        if settings.debug:
            content["error_type"] = type(exc).__name__
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content)

    @app.exception_handler(MailDeliveryError)
    async def mail_exception_handler(request: Request, exc: MailDeliveryError):
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Failed to send OTP email"}
        )

    # Include API router
    app.include_router(api_router)

    @app.get("/")
    def read_root():
        """Root endpoint for liveness checks."""
        return {
            "message": "From backend side running",
            "app_name": settings.app_name,
            "version": settings.app_version,
            "environment": settings.ENVIRONMENT
        }

    @app.get("/health")
    def health_check(request: Request):
        """Health check endpoint; pings the database."""
        if request.app.state.db.ping():
            return {"status": "healthy", "database": "connected"}
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unhealthy", "database": "disconnected"}
        )

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host=default_settings.host,
        port=default_settings.port,
        reload=default_settings.reload,
        log_level="error",  # Suppress invalid HTTP warnings
        access_log=False,   # Disable access logs to reduce noise
    )
