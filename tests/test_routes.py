"""Tests for the HTTP surface."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from main import app
from mapserver.config import settings
from mapserver.dependencies import get_map_service, get_map_store
from mapserver.services.maps import MapService, MapStore, build_rule_set
from mapserver.services.notifications import DeliveryStatus


class TestRoot:
    async def test_root(self, client):
        response = await client.get("/")
        assert response.status_code == 200
        assert response.text == "API is working now!"


class TestHealth:
    async def test_healthy(self, client):
        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["maps"] == 1

    async def test_missing_maps_dir(self, client, tmp_path):
        app.dependency_overrides[get_map_store] = lambda: MapStore(tmp_path / "missing")
        response = await client.get("/health")
        assert response.status_code == 503


class TestListMaps:
    async def test_lists_map_ids(self, client):
        response = await client.get("/maps")
        assert response.status_code == 200
        assert response.json() == {"maps": ["floor1"]}


class TestGetMapChunk:
    """Tests for GET /maps/{map_id}."""

    @pytest.fixture
    def big_map(self, maps_dir):
        (maps_dir / "big.svg").write_text("<" + "x" * 11999)
        service = MapService(MapStore(maps_dir), rules=build_rule_set())
        app.dependency_overrides[get_map_service] = lambda: service

    async def test_first_chunk(self, client, big_map):
        response = await client.get("/maps/big", params={"chunk": 0})

        assert response.status_code == 200
        data = response.json()
        assert data["mapId"] == "big"
        assert data["totalChunks"] == 3
        assert data["chunkIndex"] == 0
        assert len(data["chunk"]) == 5000
        assert data["chunk"].startswith("<x")

    async def test_chunk_defaults_to_zero(self, client, big_map):
        response = await client.get("/maps/big")

        assert response.status_code == 200
        assert response.json()["chunkIndex"] == 0

    async def test_chunk_out_of_range(self, client, big_map):
        response = await client.get("/maps/big", params={"chunk": 3})

        assert response.status_code == 400
        assert response.json() == {"error": "Chunk index out of range"}

    async def test_negative_chunk_out_of_range(self, client, big_map):
        response = await client.get("/maps/big", params={"chunk": -1})

        assert response.status_code == 400
        assert response.json() == {"error": "Chunk index out of range"}

    async def test_non_integer_chunk_rejected(self, client, big_map):
        response = await client.get("/maps/big", params={"chunk": "abc"})

        assert response.status_code == 422

    async def test_map_not_found(self, client):
        response = await client.get("/maps/missing")

        assert response.status_code == 404
        assert response.json() == {"error": "Map not found"}

    @pytest.mark.parametrize("map_id", ["a" * 300, "floor%00"])
    async def test_unusable_map_id_not_found(self, client, map_id):
        response = await client.get(f"/maps/{map_id}")

        assert response.status_code == 404
        assert response.json() == {"error": "Map not found"}

    async def test_chunks_reassemble_document(self, client, maps_dir):
        service = MapService(MapStore(maps_dir), rules=build_rule_set(), svg_chunk_size=100)
        app.dependency_overrides[get_map_service] = lambda: service
        original = (maps_dir / "floor1.svg").read_text(encoding="utf-8")

        first = (await client.get("/maps/floor1")).json()
        chunks = [first["chunk"]]
        for i in range(1, first["totalChunks"]):
            chunks.append((await client.get("/maps/floor1", params={"chunk": i})).json()["chunk"])

        assert "".join(chunks) == original


class TestGetMapIdentifiers:
    """Tests for GET /maps/{map_id}/gids."""

    async def test_identifiers_and_paths(self, client):
        response = await client.get("/maps/floor1/gids", params={"chunk": 0})

        assert response.status_code == 200
        data = response.json()
        assert data["mapId"] == "floor1"
        assert data["gIds"] == ["Room1"]
        assert data["totalChunks"] == 1
        assert data["chunkIndex"] == 0
        assert data["paths"][0] == {
            "id": "Hall",
            "x": 10.0,
            "y": 20.5,
            "width": 100.0,
            "height": 50.0,
        }
        assert data["paths"][2] == {"id": None, "x": 0.0, "y": 7.0, "width": 0.0, "height": 0.0}

    async def test_out_of_range(self, client):
        response = await client.get("/maps/floor1/gids", params={"chunk": 1})

        assert response.status_code == 400
        assert response.json() == {"error": "Chunk index out of range"}

    async def test_map_not_found(self, client):
        response = await client.get("/maps/missing/gids")

        assert response.status_code == 404
        assert response.json() == {"error": "Map not found"}

    async def test_parse_error_is_internal_error(self, client, maps_dir):
        (maps_dir / "broken.svg").write_text("definitely not markup")

        response = await client.get("/maps/broken/gids")

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to parse map"}


class TestNotifications:
    """Tests for token registration and sending."""

    async def test_register_token(self, client, token_store):
        response = await client.post("/notifications/tokens", json={"token": "ExponentPushToken[a]"})

        assert response.status_code == 200
        assert response.json() == {"registered": True, "count": 1}
        assert token_store.read() == ["ExponentPushToken[a]"]

    async def test_register_duplicate_token(self, client, token_store):
        token_store.append("ExponentPushToken[a]")

        response = await client.post("/notifications/tokens", json={"token": "ExponentPushToken[a]"})

        assert response.json() == {"registered": False, "count": 1}

    async def test_blank_token_rejected(self, client):
        response = await client.post("/notifications/tokens", json={"token": "   "})
        assert response.status_code == 400

    async def test_list_tokens(self, client, token_store):
        token_store.append("a")
        token_store.append("b")

        response = await client.get("/notifications/tokens")

        assert response.json() == {"tokens": ["a", "b"]}

    async def test_send_to_registered_tokens(self, client, token_store, override_dispatcher):
        token_store.append("a")
        token_store.append("b")
        dispatcher = MagicMock()
        dispatcher.send = AsyncMock(
            return_value=[
                DeliveryStatus(token="a", status="ok"),
                DeliveryStatus(token="b", status="error", message="DeviceNotRegistered"),
            ]
        )
        override_dispatcher(dispatcher)

        response = await client.post("/notifications/send", json={"title": "Hi", "body": "There"})

        assert response.status_code == 200
        data = response.json()
        assert data["sent"] == 1
        assert data["failed"] == 1
        assert data["results"][1] == {
            "token": "b",
            "status": "error",
            "message": "DeviceNotRegistered",
        }
        dispatcher.send.assert_awaited_once_with(["a", "b"], "Hi", "There")


class TestLifespan:
    """Tests for application startup wiring."""

    def test_startup_loads_token_store(self, tmp_path, monkeypatch):
        tokens_file = tmp_path / "tokens.json"
        tokens_file.write_text('["ExponentPushToken[x]"]')
        monkeypatch.setattr(settings, "tokens_file", str(tokens_file))

        with TestClient(app) as test_client:
            response = test_client.get("/notifications/tokens")

        assert response.json() == {"tokens": ["ExponentPushToken[x]"]}
