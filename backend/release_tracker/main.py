from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import APIRouter
from fastapi import FastAPI
from fastapi import Request
from fastapi import status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from release_tracker import __version__
from release_tracker.configs.app_configs import API_PREFIX
from release_tracker.configs.app_configs import APP_HOST
from release_tracker.configs.app_configs import APP_PORT
from release_tracker.configs.app_configs import CORS_ALLOWED_ORIGIN
from release_tracker.configs.app_configs import RELEASE_CHECKLIST_STEPS
from release_tracker.db.engine.sql_engine import SqlEngine
from release_tracker.server.releases.api import router as releases_router
from release_tracker.utils.logger import setup_logger

logger = setup_logger()


class StatusResponse(BaseModel):
    success: bool
    message: str


health_router = APIRouter()


@health_router.get("/health")
def healthcheck() -> StatusResponse:
    return StatusResponse(success=True, message="ok")


def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    exc_str = f"{exc}".replace("\n", " ").replace("   ", " ")
    logger.warning(f"{request}: {exc_str}")
    content = {"detail": exc_str}
    return JSONResponse(content=content, status_code=status.HTTP_400_BAD_REQUEST)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    # Engine may already be installed, e.g. by tests
    SqlEngine.init_engine()

    logger.notice(f"Release Tracker version: {__version__}")
    logger.notice(f"Release checklist has {len(RELEASE_CHECKLIST_STEPS)} steps")

    yield

    SqlEngine.reset_engine()


def get_application() -> FastAPI:
    application = FastAPI(
        title="Release Tracker Backend", version=__version__, lifespan=lifespan
    )

    application.include_router(health_router)
    application.include_router(releases_router, prefix=API_PREFIX)

    application.add_exception_handler(
        RequestValidationError, validation_exception_handler  # type: ignore[arg-type]
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ALLOWED_ORIGIN,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    return application


app = get_application()


if __name__ == "__main__":
    logger.notice(f"Starting Release Tracker Backend on http://{APP_HOST}:{APP_PORT}/")
    uvicorn.run(app, host=APP_HOST, port=APP_PORT)
