import logging

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from starlette.concurrency import run_in_threadpool

from mapserver.dependencies import get_map_service, get_map_store
from mapserver.services.maps import MapService, MapStore

logger = logging.getLogger(__name__)

router = APIRouter()


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MapListResponse(BaseModel):
    maps: list[str]


class MapChunkResponse(CamelModel):
    map_id: str
    total_chunks: int
    chunk_index: int
    chunk: str


class GeometryResponse(BaseModel):
    id: str | None
    x: float
    y: float
    width: float
    height: float


class MapIdentifiersResponse(CamelModel):
    map_id: str
    g_ids: list[str]
    total_chunks: int
    chunk_index: int
    paths: list[GeometryResponse]


@router.get("", response_model=MapListResponse)
async def list_maps(store: MapStore = Depends(get_map_store)):
    """List the ids of all stored maps."""
    map_ids = await run_in_threadpool(store.list_map_ids)
    return MapListResponse(maps=map_ids)


@router.get("/{map_id}", response_model=MapChunkResponse)
async def get_map_chunk(
    map_id: str,
    chunk: int = Query(0, description="Zero-based chunk index"),
    service: MapService = Depends(get_map_service),
):
    """Get one chunk of a map's raw SVG markup."""
    result = await run_in_threadpool(service.get_svg_chunk, map_id, chunk)

    return MapChunkResponse(
        map_id=result.map_id,
        total_chunks=result.total_chunks,
        chunk_index=result.chunk_index,
        chunk=result.chunk,
    )


@router.get("/{map_id}/gids", response_model=MapIdentifiersResponse)
async def get_map_identifiers(
    map_id: str,
    chunk: int = Query(0, description="Zero-based chunk index"),
    service: MapService = Depends(get_map_service),
):
    """Get one chunk of a map's filtered shape identifiers and geometry."""
    result = await run_in_threadpool(service.get_identifier_chunk, map_id, chunk)

    return MapIdentifiersResponse(
        map_id=result.map_id,
        g_ids=result.identifiers,
        total_chunks=result.total_chunks,
        chunk_index=result.chunk_index,
        paths=[GeometryResponse(**record.to_dict()) for record in result.geometry],
    )
