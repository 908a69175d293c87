from contextlib import asynccontextmanager
from datetime import datetime, timezone
import logging

from fastapi import FastAPI, Request

from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from radioinfo.config import setup_logging
from radioinfo.dependencies import get_services
from radioinfo.exceptions import ScheduleSourceError
from radioinfo.routers import main_router
from radioinfo.schemas import ErrorDetail, StandardErrorResponse
from radioinfo.utils.logging_helpers import log_section_end, log_section_start


setup_logging()
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events"""
    log_section_start(logger, "Radio Schedule Service startup")
    services = get_services()

    try:
        # A missing directory is not fatal; /channels retries on demand
        try:
            channels = await services.load_channels()
            logger.info("Channel directory loaded: %s channels", len(channels))
        except ScheduleSourceError as e:
            logger.warning(f"Channel directory unavailable at startup: {e}")

        logger.info("Starting scheduler...")
        services.scheduler.start()
        log_section_end(logger, "Radio Schedule Service startup")
    except Exception as e:
        logger.error(f"Failed to start Radio Schedule Service: {e}", exc_info=True)
        raise

    yield

    log_section_start(logger, "Radio Schedule Service shutdown")
    try:
        await services.aclose()
    except Exception as e:
        logger.error(f"Error during shutdown: {e}", exc_info=True)
    log_section_end(logger, "Radio Schedule Service shutdown")


app = FastAPI(
    title="Radio Schedule Service",
    version="0.1.0",
    lifespan=lifespan
)

app.include_router(main_router)


@app.exception_handler(ScheduleSourceError)
async def schedule_source_exception_handler(request: Request, exc: ScheduleSourceError):
    """Render upstream failures as a fallback error response"""
    logger.error(f"Schedule source error for {request.method} {request.url.path}: {exc}")

    body = StandardErrorResponse(
        timestamp=datetime.now(timezone.utc).isoformat(),
        error=ErrorDetail(
            code=exc.code,
            message=str(exc),
            context={"path": request.url.path}
        )
    )
    return JSONResponse(status_code=502, content=body.model_dump())


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Log validation errors with details"""
    logger.error(f"Validation error for {request.method} {request.url.path}")
    logger.error(f"Validation details: {exc.errors()}")

    # Create a properly serializable error response
    errors = []
    for error in exc.errors():
        error_dict = {
            "type": error.get("type"),
            "loc": error.get("loc"),
            "msg": error.get("msg"),
            "input": str(error.get("input", ""))[:100]
        }
        errors.append(error_dict)

    return JSONResponse(
        status_code=422,
        content={
            "detail": errors
        }
    )
