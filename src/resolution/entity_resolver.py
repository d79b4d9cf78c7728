"""
Universal entity resolvers for the DefiLlama and DeBank connectors.

Resolves human-friendly names to API-compatible ids:
- Protocols: "Uniswap" -> "uniswap"
- Chains: "Binance Smart Chain" -> "BSC"
- Stablecoins: "USDC" -> "2"
- Bridges: "Polygon Bridge" -> 1
- Options: "Aevo" -> "aevo" (local match, no model call)
- DeBank chains: "Arbitrum" -> "arb"
"""
import asyncio
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Sequence

from src.data_models.entity_schemas import (
    BatchResolveRequest,
    BatchResolveResponse,
    EntityType,
)
from src.knowledge.entity_registry import EntityRegistry
from src.prompts.resolver_prompts import (
    BRIDGES_PROFILE,
    CHAINS_PROFILE,
    DEBANK_CHAINS_PROFILE,
    PROTOCOLS_PROFILE,
    STABLECOINS_PROFILE,
    PromptProfile,
    build_cached_instruction,
)
from src.utils.logger import logger

from .cache_manager import CacheSpec, ContextCacheManager
from .completion import CompletionClient
from .context_builder import build_context, build_labelled_context
from .exceptions import UnknownEntityTypeError
from .resolver import Resolve, ResolverConfig, create_resolver
from .sanitizers import sanitize_chain_name, sanitize_numeric_string, sanitize_slug
from .validators import needs_resolution


@dataclass(frozen=True)
class EntitySetup:
    """How one LLM-resolved entity type is prompted, serialized and cleaned."""

    profile: PromptProfile
    fields: Sequence[str]
    sanitize: Callable[[str], str]
    coerce: Optional[Callable[[str], Any]] = None


DEFILLAMA_ENTITY_SETUPS: Dict[str, EntitySetup] = {
    EntityType.PROTOCOLS.value: EntitySetup(PROTOCOLS_PROFILE, ("id", "name", "symbol"), sanitize_slug),
    EntityType.CHAINS.value: EntitySetup(CHAINS_PROFILE, ("name", "symbol", "gecko_id"), sanitize_chain_name),
    EntityType.STABLECOINS.value: EntitySetup(STABLECOINS_PROFILE, ("id", "name", "symbol"), sanitize_numeric_string),
    EntityType.BRIDGES.value: EntitySetup(BRIDGES_PROFILE, ("id", "name", "display_name"), sanitize_numeric_string, coerce=int),
}


def build_cache_specs(
    registries: Mapping[str, EntityRegistry],
    entity_types: Iterable[str],
) -> Dict[str, CacheSpec]:
    """Cache specs for the requested entity types that have an LLM setup and a registry."""
    specs: Dict[str, CacheSpec] = {}
    for entity_type in entity_types:
        setup = DEFILLAMA_ENTITY_SETUPS.get(entity_type)
        registry = registries.get(entity_type)
        if setup is None or registry is None:
            logger.warning("No cacheable setup for entity type %s; skipping", entity_type)
            continue
        specs[entity_type] = CacheSpec(
            instruction=build_cached_instruction(setup.profile),
            records=registry.records,
            fields=setup.fields,
        )
    return specs


class DefiLlamaEntityResolver:
    """Resolvers for every DefiLlama entity type, sharing one cache manager."""

    def __init__(
        self,
        registries: Mapping[str, EntityRegistry],
        completion_client: CompletionClient,
        cache_manager: Optional[ContextCacheManager] = None,
        client_overrides: Optional[Mapping[str, CompletionClient]] = None,
    ):
        self.registries = registries
        self.cache_manager = cache_manager
        self._resolvers: Dict[str, Resolve] = {}

        for entity_type, setup in DEFILLAMA_ENTITY_SETUPS.items():
            registry = registries[entity_type]
            client = (client_overrides or {}).get(entity_type, completion_client)
            self._resolvers[entity_type] = create_resolver(ResolverConfig(
                entity_type=entity_type,
                entities=registry.records,
                get_context=lambda records, fields=setup.fields: build_context(records, fields),
                sanitize=setup.sanitize,
                completion_client=client,
                cache_handle=self._handle_source(entity_type, client),
                profile=setup.profile,
                coerce=setup.coerce,
            ))
        self._resolvers[EntityType.OPTIONS.value] = self.resolve_option

    def _handle_source(self, entity_type: str, client: CompletionClient) -> Callable[[], Optional[str]]:
        def current() -> Optional[str]:
            # A cache is bound to the model it was created for.
            if self.cache_manager is None or getattr(client, "model", None) != self.cache_manager.model:
                return None
            return self.cache_manager.handle_name(entity_type)
        return current

    @property
    def entity_types(self) -> Sequence[str]:
        return list(self._resolvers)

    def resolver_for(self, entity_type: str) -> Resolve:
        """The ``resolve(name)`` callable REST wrappers use for one entity type."""
        try:
            return self._resolvers[entity_type]
        except KeyError:
            raise UnknownEntityTypeError(entity_type) from None

    async def resolve(self, entity_type: str, name: str) -> Optional[Any]:
        return await self.resolver_for(entity_type)(name)

    async def resolve_if_needed(self, entity_type: str, value: Any) -> Optional[Any]:
        """Pass values that already are canonical ids through; resolve the rest."""
        registry = self.registries.get(entity_type)
        if registry is not None and registry.contains(value):
            return registry.get(value).id
        if value is None or not str(value).strip():
            return None
        return await self.resolve(entity_type, str(value))

    async def resolve_protocol(self, name: str) -> Optional[str]:
        return await self._resolvers[EntityType.PROTOCOLS.value](name)

    async def resolve_chain(self, name: str) -> Optional[str]:
        return await self._resolvers[EntityType.CHAINS.value](name)

    async def resolve_stablecoin(self, name: str) -> Optional[str]:
        return await self._resolvers[EntityType.STABLECOINS.value](name)

    async def resolve_bridge(self, name: str) -> Optional[int]:
        return await self._resolvers[EntityType.BRIDGES.value](name)

    async def resolve_option(self, name: str) -> Optional[str]:
        """Options DEXs: exact name/slug match, then partial containment. No model call."""
        try:
            registry = self.registries[EntityType.OPTIONS.value]
            query = name.strip().lower()
            if not query:
                return None

            for record in registry:
                if record.name.lower() == query or record.canonical_id.lower() == query:
                    logger.info('Resolved option "%s" → "%s"', name, record.canonical_id)
                    return record.canonical_id

            for record in registry:
                option_name = record.name.lower()
                if query in option_name or option_name in query:
                    logger.info('Resolved option "%s" → "%s" (partial match)', name, record.canonical_id)
                    return record.canonical_id

            logger.warning("Could not resolve option: %s", name)
            return None
        except Exception as e:
            logger.error("Error resolving option %r: %s", name, e, exc_info=True)
            return None

    async def resolve_entities(self, request: BatchResolveRequest) -> BatchResolveResponse:
        """Resolve every name in the request concurrently."""
        plan = [
            (entity_type, name)
            for entity_type in BatchResolveResponse.model_fields
            for name in getattr(request, entity_type)
        ]
        resolved = await asyncio.gather(*(self.resolve(entity_type, name) for entity_type, name in plan))

        results: Dict[str, Dict[str, Any]] = {entity_type: {} for entity_type in BatchResolveResponse.model_fields}
        for (entity_type, name), value in zip(plan, resolved):
            results[entity_type][name] = value
        return BatchResolveResponse(**results)


class DebankEntityResolver:
    """Chain and wrapped-token resolution for DeBank tool arguments."""

    def __init__(self, registry: EntityRegistry, completion_client: CompletionClient):
        self.registry = registry
        # Small registry: always sent inline, never cached.
        self._chain_resolver = create_resolver(ResolverConfig(
            entity_type="chain",
            entities=registry.records,
            get_context=build_labelled_context,
            sanitize=sanitize_slug,
            completion_client=completion_client,
            profile=DEBANK_CHAINS_PROFILE,
        ))

    async def resolve_chain(self, name: str) -> Optional[str]:
        return await self._chain_resolver(name)

    async def resolve_chains(self, comma_separated: str) -> Optional[str]:
        """Resolve "Ethereum, bsc, Arbitrum" to "eth,bsc,arb"; None if any item fails."""
        try:
            names = [name.strip() for name in comma_separated.split(",") if name.strip()]
            if not names:
                return None

            async def one(name: str) -> Optional[str]:
                if self.registry.contains(name):
                    return name
                return await self.resolve_chain(name)

            resolved = await asyncio.gather(*(one(name) for name in names))
            if any(chain_id is None for chain_id in resolved):
                logger.warning("Failed to resolve some chains in: %s", comma_separated)
                return None

            result = ",".join(resolved)
            logger.info('Resolved chains "%s" → "%s"', comma_separated, result)
            return result
        except Exception as e:
            logger.error("Error resolving comma-separated chains %s: %s", comma_separated, e, exc_info=True)
            return None

    def resolve_wrapped_token(self, token_keyword: str, chain_id: str) -> Optional[str]:
        """Wrapped native token address for a chain (e.g. "ETH" on eth -> WETH)."""
        chain = self.registry.get(chain_id)
        if chain is None:
            logger.warning("Chain not found for ID: %s", chain_id)
            return None

        wrapped = (chain.metadata.get("wrapped_token_id") or "").strip()
        if not wrapped:
            logger.warning("Chain %s (%s) does not have a wrapped token address", chain_id, chain.name)
            return None

        logger.info('Resolved wrapped token "%s" on %s → "%s"', token_keyword, chain.name, wrapped)
        return wrapped

    async def resolve_tool_args(self, args: Dict[str, Any]) -> Dict[str, Any]:
        """Rewrite chain_id / chain_ids / token_id / id in place where they are free text."""
        chain_id = args.get("chain_id")
        if isinstance(chain_id, str) and chain_id and not self.registry.contains(chain_id):
            resolved = await self.resolve_chain(chain_id)
            if resolved:
                args["chain_id"] = resolved

        chain_ids = args.get("chain_ids")
        if isinstance(chain_ids, str) and chain_ids:
            resolved = await self.resolve_chains(chain_ids)
            if resolved:
                args["chain_ids"] = resolved

        chain_id = args.get("chain_id")
        for key in ("token_id", "id"):
            value = args.get(key)
            if isinstance(value, str) and isinstance(chain_id, str) and needs_resolution(value, "token"):
                resolved = self.resolve_wrapped_token(value, chain_id)
                if resolved:
                    args[key] = resolved
        return args
