"""Health check endpoints."""

from fastapi import APIRouter, Depends, HTTPException
from starlette.concurrency import run_in_threadpool

from mapserver.dependencies import get_map_store
from mapserver.services.maps import MapStore

router = APIRouter()


@router.get("")
async def health(store: MapStore = Depends(get_map_store)):
    """Check that the maps directory is readable."""
    if not store.maps_dir.is_dir():
        raise HTTPException(503, f"Maps directory not found: {store.maps_dir}")

    map_ids = await run_in_threadpool(store.list_map_ids)
    return {"status": "healthy", "maps_dir": str(store.maps_dir), "maps": len(map_ids)}
