"""FastAPI dependencies shared across routers."""

from fastapi import Request

from mapserver.config import settings
from mapserver.services.maps import MapService, MapStore
from mapserver.services.notifications import NotificationDispatcher, TokenStore


def get_map_store() -> MapStore:
    return MapStore(settings.maps_dir)


def get_map_service() -> MapService:
    """Fresh service per request; the exclusion rules are shared and immutable."""
    return MapService(get_map_store())


def get_token_store(request: Request) -> TokenStore:
    return request.app.state.token_store


def get_dispatcher(request: Request) -> NotificationDispatcher:
    return request.app.state.dispatcher
