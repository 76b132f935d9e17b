"""Shared fixtures: temporary map storage and an app client wired to it."""

import os
from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

# Override settings before importing app modules
os.environ["MAPS_DIR"] = "tests-maps-unused"
os.environ["TOKENS_FILE"] = "tests-tokens-unused.json"
os.environ["EXCLUSION_RULES_FILE"] = ""

from main import app
from mapserver.dependencies import (
    get_dispatcher,
    get_map_service,
    get_map_store,
    get_token_store,
)
from mapserver.services.maps import MapService, MapStore, build_rule_set
from mapserver.services.notifications import InMemoryTokenStore, NotificationDispatcher

FLOOR_PLAN_SVG = """<?xml version="1.0" encoding="UTF-8"?>
<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 800 600">
  <path id="outside-path" d="M0 0"/>
  <g id="Layer_1">
    <path id="vector_car_icon" d="M1 1"/>
    <path id="Room1" d="M2 2"/>
    <g id="stairwell">
      <path id="STAIRS AB1 B" d="M3 3"/>
      <path d="M4 4"/>
    </g>
    <rect id="Room2" x="1" y="2" width="3" height="4"/>
  </g>
  <g id="paths">
    <rect id="Hall" x="10" y="20.5" width="100" height="50"/>
    <circle id="Kiosk" cx="5" cy="5" r="2"/>
    <g>
      <line x="abc" y="7"/>
      <path id="vector_car_icon" d="M5 5"/>
    </g>
  </g>
</svg>
"""


@pytest.fixture
def test_rules():
    """Exclusion rules used across tests."""
    return build_rule_set(patterns=[r"^vector_", r"^STAIRS"])


@pytest.fixture
def maps_dir(tmp_path: Path) -> Path:
    """Directory with one floor plan stored as floor1.svg."""
    directory = tmp_path / "maps"
    directory.mkdir()
    (directory / "floor1.svg").write_text(FLOOR_PLAN_SVG, encoding="utf-8")
    return directory


@pytest.fixture
def map_store(maps_dir: Path) -> MapStore:
    return MapStore(maps_dir)


@pytest.fixture
def map_service(map_store: MapStore, test_rules) -> MapService:
    return MapService(map_store, rules=test_rules, svg_chunk_size=5000, record_chunk_size=1000)


@pytest.fixture
def token_store() -> InMemoryTokenStore:
    return InMemoryTokenStore()


@pytest.fixture
def override_dependencies(map_store, map_service, token_store):
    """Point the app's dependencies at test storage."""
    app.dependency_overrides[get_map_store] = lambda: map_store
    app.dependency_overrides[get_map_service] = lambda: map_service
    app.dependency_overrides[get_token_store] = lambda: token_store
    yield
    app.dependency_overrides.clear()


@pytest.fixture
async def client(override_dependencies) -> AsyncGenerator[AsyncClient, None]:
    """Create an async test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def override_dispatcher():
    """Install a dispatcher override; returns a setter taking the dispatcher."""

    def _install(dispatcher: NotificationDispatcher):
        app.dependency_overrides[get_dispatcher] = lambda: dispatcher

    yield _install
    app.dependency_overrides.pop(get_dispatcher, None)
