"""
FastAPI main application for the launch pad bookings service.
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, status
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from launchpad_bookings.api.bookings import router as bookings_router
from launchpad_bookings.api.health import router as health_router
from launchpad_bookings.api.middleware import RequestLoggingMiddleware
from launchpad_bookings.api.responses import error_response
from launchpad_bookings.clock import SystemClock
from launchpad_bookings.database import init_database, close_database
from launchpad_bookings.logging_config import setup_logging, get_logger
from launchpad_bookings.services import AvailabilityService
from launchpad_bookings.spacex import CachedLaunchDataService, SpaceXClient, SpaceXConfig

setup_logging()
logger = get_logger(__name__, component="main_app")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    logger.info("Starting launch pad bookings API")
    try:
        init_database()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error("Failed to initialize database", error=str(e))
        raise

    spacex_config = getattr(app.state, "spacex_config", None) or SpaceXConfig()
    spacex_client = SpaceXClient(spacex_config)
    await spacex_client.start_session()

    clock = SystemClock()
    launch_data = CachedLaunchDataService(spacex_client, clock)
    app.state.clock = clock
    app.state.spacex_client = spacex_client
    app.state.launch_data = launch_data
    app.state.availability_service = AvailabilityService(launch_data)

    try:
        yield
    finally:
        logger.info("Shutting down launch pad bookings API")
        await spacex_client.close_session()
        try:
            close_database()
            logger.info("Database connections closed")
        except Exception as e:
            logger.error("Error closing database connections", error=str(e))


app = FastAPI(
    title="Launch Pad Bookings API",
    description="Book SpaceX launch pads on dates free of scheduled launches",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(RequestLoggingMiddleware)

app.include_router(bookings_router)
app.include_router(health_router)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request, exc: StarletteHTTPException):
    """Render HTTP errors, including unknown routes, as ErrorResponse."""
    return error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request, exc: RequestValidationError):
    """Report request validation failures as 400 Bad Request."""
    detail = "; ".join(
        f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg')}"
        for error in exc.errors()
    )
    return error_response(status.HTTP_400_BAD_REQUEST, "bad request", detail)


@app.exception_handler(Exception)
async def general_exception_handler(request, exc: Exception):
    """General exception handler for unhandled exceptions."""
    logger.error("Unhandled exception", error=str(exc), exc_info=True)
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Internal server error",
        "An unexpected error occurred"
    )
