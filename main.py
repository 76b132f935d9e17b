import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from mapserver.config import settings
from mapserver.exceptions import MapServiceError
from mapserver.routes import health, maps, notifications
from mapserver.services.maps import get_exclusion_rules
from mapserver.services.notifications import JsonFileTokenStore, NotificationDispatcher

# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup - fail fast on bad exclusion rule config
    get_exclusion_rules()

    token_store = JsonFileTokenStore(settings.tokens_file)
    token_store.open()
    http_client = httpx.AsyncClient(timeout=settings.push_timeout_seconds)

    app.state.token_store = token_store
    app.state.dispatcher = NotificationDispatcher(http_client)
    logger.info(f"Serving maps from {settings.maps_dir}")
    yield
    # Shutdown
    token_store.close()
    await http_client.aclose()


app = FastAPI(
    title="Venue Map API",
    description="Paginated SVG floor plans and shape data for interactive map clients",
    version="0.1.0",
    lifespan=lifespan,
)


async def map_service_error_handler(request: Request, exc: MapServiceError) -> JSONResponse:
    """Render map errors as {"error": message} with the error's status code."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}", exc_info=exc)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


app.add_exception_handler(MapServiceError, map_service_error_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/", response_class=PlainTextResponse)
async def root():
    return "API is working now!"


app.include_router(maps.router, prefix="/maps", tags=["maps"])
app.include_router(notifications.router, prefix="/notifications", tags=["notifications"])
app.include_router(health.router, prefix="/health", tags=["health"])
