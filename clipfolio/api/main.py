"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from dotenv import load_dotenv
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from clipfolio.api.config import get_api_config
from clipfolio.api.dependencies import get_organizer
from clipfolio.api.routes import clips, folders, videos
from clipfolio.api.schemas import ErrorResponse
from clipfolio.common.errors import DraftValidationError, GatewayError, NotFoundError
from clipfolio.gateway.factory import StorageBackend, get_storage_backend
from clipfolio.mongodb.client import get_mongodb_client

load_dotenv()

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Load drafts from storage before serving requests."""
    organizer = app.dependency_overrides.get(get_organizer, get_organizer)()
    await organizer.load()

    yield

    # Shutdown
    if get_storage_backend() == StorageBackend.MONGODB:
        await get_mongodb_client().close()


app = FastAPI(
    title="Clipfolio API",
    description="Clip composition and draft organization API",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_api_config().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(videos.router, prefix="/api/videos", tags=["videos"])
app.include_router(folders.router, prefix="/api/folders", tags=["folders"])
app.include_router(clips.router, prefix="/api/clips", tags=["clips"])


def _error(status_code: int, error: str, kind: str, message: str) -> JSONResponse:
    body = ErrorResponse(error=error, kind=kind, message=message)
    return JSONResponse(status_code=status_code, content=body.model_dump())


@app.exception_handler(DraftValidationError)
async def handle_validation_error(request: Request, exc: DraftValidationError) -> JSONResponse:
    logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc.message)
    return _error(422, "validation_error", exc.kind, exc.message)


@app.exception_handler(NotFoundError)
async def handle_not_found(request: Request, exc: NotFoundError) -> JSONResponse:
    return _error(404, "not_found", exc.entity, str(exc))


@app.exception_handler(GatewayError)
async def handle_gateway_error(request: Request, exc: GatewayError) -> JSONResponse:
    return _error(502, "gateway_error", exc.kind, exc.message)


@app.get("/health")
async def health_check(response: Response) -> dict[str, str]:
    """Health check endpoint. Reports 503 when MongoDB does not answer."""
    backend = get_storage_backend()
    if backend == StorageBackend.MONGODB and not await get_mongodb_client().ping():
        response.status_code = 503
        return {"status": "unavailable", "storage": backend}
    return {"status": "healthy", "storage": backend}
