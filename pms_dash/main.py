import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from pms_dash.core.config import settings
from pms_dash.core.exceptions import ValidationFailed
from pms_dash.core.logging import configure_logging
from pms_dash.api.v1.api import api_router
from pms_dash.db.session import init_db

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("%s %s started", settings.PROJECT_NAME, settings.VERSION)
    yield


async def validation_failed_handler(request: Request, exc: ValidationFailed):
    return JSONResponse(
        status_code=400,
        content={"success": False, "message": exc.message, "detail": exc.message, "field": exc.field},
    )


def create_app() -> FastAPI:
    configure_logging()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        openapi_url=f"{settings.API_V1_STR}/openapi.json",
        lifespan=lifespan,
    )

    # Set up CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ValidationFailed, validation_failed_handler)

    # Include API routes separately
    app.include_router(api_router, prefix=settings.API_V1_STR)
    return app


app = create_app()
