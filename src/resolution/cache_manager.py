"""
Context cache lifecycle manager.

Owns one Gemini context cache per entity type. Each cache holds a system
instruction plus the serialized reference rows for that type, so resolvers
can send a short per-call prompt instead of the whole registry.

The manager is constructed explicitly and injected into the resolver
services. Its handle table is filled during ``initialize()`` (and by explicit
``create``/``delete`` calls) and only read otherwise. Expiry is not tracked
locally: once a cache's TTL elapses the service rejects it, the resolver
call returns None, and the handle can be recreated with ``create``.
"""
import asyncio
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence

from google import genai
from google.genai import types

from src.config.common_settings import CACHE_LIST_PAGE_SIZE, CACHE_TTL_SECONDS, RESOLVER_MODEL
from src.data_models.entity_schemas import CacheHandle, CachedContentInfo, EntityRecord
from src.utils.logger import logger

from .context_builder import build_context
from .exceptions import CacheManagerError, CachingDisabledError, UnknownEntityTypeError


@dataclass(frozen=True)
class CacheSpec:
    """What goes into one entity type's cache."""

    instruction: str
    records: Sequence[EntityRecord]
    fields: Sequence[str]


def _to_info(cached: Any) -> CachedContentInfo:
    return CachedContentInfo(
        name=cached.name,
        display_name=getattr(cached, "display_name", None),
        model=getattr(cached, "model", None),
        create_time=getattr(cached, "create_time", None),
        update_time=getattr(cached, "update_time", None),
        expire_time=getattr(cached, "expire_time", None),
    )


class ContextCacheManager:
    """Create/get/list/update/delete for the per-entity-type context caches."""

    def __init__(
        self,
        client: Optional[genai.Client],
        specs: Mapping[str, CacheSpec],
        model: str = RESOLVER_MODEL,
        ttl_seconds: int = CACHE_TTL_SECONDS,
        page_size: int = CACHE_LIST_PAGE_SIZE,
    ):
        self._client = client
        self._specs: Dict[str, CacheSpec] = dict(specs)
        self.model = model
        self.ttl_seconds = ttl_seconds
        self.page_size = page_size
        self._handles: Dict[str, Optional[CacheHandle]] = {entity_type: None for entity_type in self._specs}

    @property
    def is_enabled(self) -> bool:
        return self._client is not None

    @property
    def entity_types(self) -> List[str]:
        return list(self._specs)

    async def initialize(self) -> Dict[str, Optional[CacheHandle]]:
        """Create every configured cache, one entity type at a time.

        Without a client this is a no-op (one warning). A failure for one
        entity type leaves only that handle None.
        """
        if self._client is None:
            logger.warning("GOOGLE_API_KEY not found, context caching will be disabled")
            return self.handles()

        for entity_type in self._specs:
            try:
                await self.create(entity_type)
            except asyncio.CancelledError:
                logger.warning(
                    "%s cache creation interrupted; a cache the service already created is not tracked and expires after %ss",
                    entity_type, self.ttl_seconds,
                )
                raise
            except Exception as e:
                self._handles[entity_type] = None
                logger.error("Failed to initialize %s cache: %s", entity_type, e, exc_info=True)

        ready = [t for t, handle in self._handles.items() if handle is not None]
        if len(ready) == len(self._handles):
            logger.info("✅ All entity caches initialized successfully (%s)", ", ".join(ready))
        else:
            logger.warning(
                "Entity caches initialized for %d/%d types; uncached: %s",
                len(ready), len(self._handles),
                ", ".join(t for t, handle in self._handles.items() if handle is None),
            )
        return self.handles()

    def get(self, entity_type: str) -> Optional[CacheHandle]:
        return self._handles.get(entity_type)

    def handle_name(self, entity_type: str) -> Optional[str]:
        handle = self._handles.get(entity_type)
        return handle.name if handle is not None else None

    def handles(self) -> Dict[str, Optional[CacheHandle]]:
        return dict(self._handles)

    def _require_client(self) -> genai.Client:
        if self._client is None:
            raise CachingDisabledError()
        return self._client

    async def create(self, entity_type: str) -> CacheHandle:
        """Create (or recreate) the cache for one entity type and record its handle."""
        client = self._require_client()
        spec = self._specs.get(entity_type)
        if spec is None:
            raise UnknownEntityTypeError(entity_type)

        context = build_context(spec.records, spec.fields)
        try:
            cached = await client.aio.caches.create(
                model=self.model,
                config=types.CreateCachedContentConfig(
                    display_name=f"{entity_type}-resolver",
                    system_instruction=spec.instruction,
                    contents=[types.Content(role="user", parts=[types.Part(text=context)])],
                    ttl=f"{self.ttl_seconds}s",
                ),
            )
        except Exception as e:
            raise CacheManagerError(str(e), operation="create") from e

        if not getattr(cached, "name", None):
            raise CacheManagerError("service returned no cache name", operation="create")

        handle = CacheHandle(
            name=cached.name,
            entity_type=entity_type,
            ttl_seconds=self.ttl_seconds,
            display_name=getattr(cached, "display_name", None),
            expire_time=getattr(cached, "expire_time", None),
        )
        self._handles[entity_type] = handle
        logger.info("%s cache initialized (%s)", entity_type, handle.name)
        return handle

    async def get_metadata(self, name: str) -> CachedContentInfo:
        client = self._require_client()
        try:
            cached = await client.aio.caches.get(name=name)
        except Exception as e:
            raise CacheManagerError(str(e), operation="get") from e
        return _to_info(cached)

    async def list(self, page_size: Optional[int] = None) -> List[CachedContentInfo]:
        """Every cache visible to the API key, across all pages."""
        client = self._require_client()
        results: List[CachedContentInfo] = []
        try:
            pager = await client.aio.caches.list(
                config=types.ListCachedContentsConfig(page_size=page_size or self.page_size)
            )
            # The async pager fetches the next page until the service reports none left.
            async for cached in pager:
                results.append(_to_info(cached))
        except Exception as e:
            raise CacheManagerError(str(e), operation="list") from e
        return results

    async def update(self, name: str, ttl_seconds: int) -> CachedContentInfo:
        """Set a new TTL on an existing cache."""
        client = self._require_client()
        try:
            cached = await client.aio.caches.update(
                name=name,
                config=types.UpdateCachedContentConfig(ttl=f"{ttl_seconds}s"),
            )
        except Exception as e:
            raise CacheManagerError(str(e), operation="update") from e

        info = _to_info(cached)
        for entity_type, handle in self._handles.items():
            if handle is not None and handle.name == name:
                self._handles[entity_type] = handle.model_copy(
                    update={"ttl_seconds": ttl_seconds, "expire_time": info.expire_time}
                )
        logger.info("Cache %s TTL updated to %ss", name, ttl_seconds)
        return info

    async def delete(self, name: str) -> None:
        """Delete a cache; any entity type served by it falls back to inline mode."""
        client = self._require_client()
        try:
            await client.aio.caches.delete(name=name)
        except Exception as e:
            raise CacheManagerError(str(e), operation="delete") from e

        for entity_type, handle in self._handles.items():
            if handle is not None and handle.name == name:
                self._handles[entity_type] = None
                logger.info("%s cache deleted (%s)", entity_type, name)
