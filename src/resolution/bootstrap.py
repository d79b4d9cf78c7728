"""
Runtime wiring for the resolvers.

``ResolverRuntime.build()`` assembles registries, the Gemini client, the
context cache manager and the resolver services; ``await runtime.start()``
creates the context caches under a bounded timeout. A runtime that never
started (or timed out) still resolves, with inline reference context.
"""
import asyncio
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence

from google import genai

from src.config.common_settings import (
    CACHE_INIT_TIMEOUT_SECONDS,
    CACHE_LIST_PAGE_SIZE,
    CACHE_TTL_SECONDS,
    CACHED_ENTITY_TYPES,
    RESOLVER_MODEL,
)
from src.config.resolver_models import RESOLVER_MODEL_OVERRIDES
from src.data_models.entity_schemas import CacheHandle, EntityType
from src.knowledge.entity_registry import EntityRegistry, load_default_registries
from src.llm.factory import create_genai_client
from src.utils.logger import logger

from .cache_manager import ContextCacheManager
from .completion import CompletionClient, create_completion_client
from .entity_resolver import DebankEntityResolver, DefiLlamaEntityResolver, build_cache_specs


@dataclass
class ResolverSettings:
    """Knobs for building a runtime; defaults come from the environment."""

    api_key: Optional[str] = None
    model: str = RESOLVER_MODEL
    ttl_seconds: int = CACHE_TTL_SECONDS
    init_timeout_seconds: float = CACHE_INIT_TIMEOUT_SECONDS
    page_size: int = CACHE_LIST_PAGE_SIZE
    cached_entity_types: Sequence[str] = field(default_factory=lambda: list(CACHED_ENTITY_TYPES))


class ResolverRuntime:
    """Everything the HTTP layer (or any caller) needs to resolve entities."""

    def __init__(
        self,
        registries: Mapping[str, EntityRegistry],
        cache_manager: ContextCacheManager,
        defillama: DefiLlamaEntityResolver,
        debank: DebankEntityResolver,
        settings: ResolverSettings,
    ):
        self.registries = registries
        self.cache_manager = cache_manager
        self.defillama = defillama
        self.debank = debank
        self.settings = settings
        self.started = False

    @classmethod
    def build(
        cls,
        settings: Optional[ResolverSettings] = None,
        genai_client: Optional[genai.Client] = None,
        registries: Optional[Mapping[str, EntityRegistry]] = None,
        completion_client: Optional[CompletionClient] = None,
    ) -> "ResolverRuntime":
        settings = settings or ResolverSettings()
        registries = registries if registries is not None else load_default_registries()
        client = genai_client if genai_client is not None else create_genai_client(settings.api_key)

        cache_manager = ContextCacheManager(
            client,
            build_cache_specs(registries, settings.cached_entity_types),
            model=settings.model,
            ttl_seconds=settings.ttl_seconds,
            page_size=settings.page_size,
        )

        if completion_client is None:
            completion_client = create_completion_client(genai_client=client, model=settings.model)

        # Entity types with their own provider/model get their own client
        overrides: Dict[str, CompletionClient] = {
            entity_type: create_completion_client(entity_type, genai_client=client, model=settings.model)
            for entity_type in RESOLVER_MODEL_OVERRIDES
            if entity_type in registries
        }

        defillama = DefiLlamaEntityResolver(
            registries,
            completion_client,
            cache_manager=cache_manager,
            client_overrides=overrides,
        )
        debank = DebankEntityResolver(
            registries[EntityType.DEBANK_CHAINS.value],
            overrides.get(EntityType.DEBANK_CHAINS.value, completion_client),
        )
        return cls(registries, cache_manager, defillama, debank, settings)

    async def start(self, timeout: Optional[float] = None) -> Dict[str, Optional[CacheHandle]]:
        """Create the context caches, waiting at most ``timeout`` seconds.

        On timeout the runtime stays usable: caches created so far are kept,
        the rest stay None and those entity types run uncached.
        """
        timeout = self.settings.init_timeout_seconds if timeout is None else timeout
        try:
            await asyncio.wait_for(self.cache_manager.initialize(), timeout=timeout)
        except asyncio.TimeoutError:
            logger.warning(
                "Context cache initialization timed out after %ss; continuing without caches for: %s",
                timeout, ", ".join(self.uncached_entity_types()) or "none",
            )
        self.started = True
        return self.cache_manager.handles()

    def uncached_entity_types(self) -> List[str]:
        return [entity_type for entity_type, handle in self.cache_manager.handles().items() if handle is None]

    def status(self) -> dict:
        """Health summary: caching mode plus the handle table."""
        handles = self.cache_manager.handles()
        if not self.cache_manager.is_enabled:
            mode = "disabled"
        elif handles and all(handle is not None for handle in handles.values()):
            mode = "cached"
        else:
            mode = "degraded"
        return {
            "started": self.started,
            "caching": mode,
            "model": self.cache_manager.model,
            "caches": {
                entity_type: handle.name if handle is not None else None
                for entity_type, handle in handles.items()
            },
        }
