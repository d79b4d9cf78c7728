from typing import List

from fastapi import APIRouter, Depends

from src.data_models.entity_schemas import CacheHandle, CachedContentInfo, CacheTTLUpdateRequest
from src.resolution.bootstrap import ResolverRuntime
from src.resolution.exceptions import EntityResolverError
from src.routers.deps import _raise_http, get_runtime, require_api_key


router = APIRouter(prefix="/caches", tags=["caches"], dependencies=[Depends(require_api_key)])


@router.get("", response_model=List[CachedContentInfo])
async def list_caches(runtime: ResolverRuntime = Depends(get_runtime)) -> List[CachedContentInfo]:
    try:
        return await runtime.cache_manager.list()
    except EntityResolverError as e:
        _raise_http(e)


# Cache names look like "cachedContents/abc123"
@router.get("/{name:path}", response_model=CachedContentInfo)
async def get_cache(name: str, runtime: ResolverRuntime = Depends(get_runtime)) -> CachedContentInfo:
    try:
        return await runtime.cache_manager.get_metadata(name)
    except EntityResolverError as e:
        _raise_http(e)


@router.patch("/{name:path}", response_model=CachedContentInfo)
async def update_cache_ttl(
    name: str,
    body: CacheTTLUpdateRequest,
    runtime: ResolverRuntime = Depends(get_runtime),
) -> CachedContentInfo:
    try:
        return await runtime.cache_manager.update(name, body.ttl_seconds)
    except EntityResolverError as e:
        _raise_http(e)


@router.delete("/{name:path}")
async def delete_cache(name: str, runtime: ResolverRuntime = Depends(get_runtime)) -> dict:
    try:
        await runtime.cache_manager.delete(name)
    except EntityResolverError as e:
        _raise_http(e)
    return {"deleted": name}


@router.post("/{entity_type}", response_model=CacheHandle)
async def recreate_cache(entity_type: str, runtime: ResolverRuntime = Depends(get_runtime)) -> CacheHandle:
    """Create (or recreate after expiry) the context cache for one entity type."""
    try:
        return await runtime.cache_manager.create(entity_type)
    except EntityResolverError as e:
        _raise_http(e)
