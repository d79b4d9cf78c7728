"""
Resolver protocol: free-text name -> canonical id, or None.

One completion call per resolution (plus one inline retry when a cached
call fails), then three gates on the raw output:
sentinel detection, sanitization, and membership in the registry. The model
is never trusted without the membership check, so a resolver only ever
returns an id that exists in the registry it was built with. Every failure
(remote error, sentinel, empty or unknown output) becomes None; nothing
raises to the caller.
"""
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, NamedTuple, Optional, Sequence, Union

from src.data_models.entity_schemas import CacheHandle, EntityRecord
from src.prompts.resolver_prompts import (
    PromptProfile,
    build_cached_user_message,
    build_system_message,
    build_user_message,
    generic_profile,
)
from src.utils.logger import logger

from .completion import CompletionClient
from .validators import is_not_found_response


class ResolverMessages(NamedTuple):
    system: Optional[str]
    user: str


HandleSource = Union[None, str, CacheHandle, Callable[[], Union[None, str, CacheHandle]]]
Resolve = Callable[[str], Awaitable[Optional[Any]]]


def default_build_messages(name: str, context: Optional[str], profile: PromptProfile) -> ResolverMessages:
    """System framing plus user turn. ``context`` is None when a cache carries the reference rows."""
    if context is None:
        return ResolverMessages(
            system=build_system_message(profile, None),
            user=build_cached_user_message(profile, name),
        )
    return ResolverMessages(
        system=build_system_message(profile, context),
        user=build_user_message(profile, name),
    )


def default_validate(sanitized: str, entities: Sequence[EntityRecord]) -> bool:
    return any(record.canonical_id == sanitized for record in entities)


@dataclass
class ResolverConfig:
    entity_type: str
    entities: Sequence[EntityRecord]
    get_context: Callable[[Sequence[EntityRecord]], str]
    sanitize: Callable[[str], str]
    completion_client: CompletionClient
    validate: Callable[[str, Sequence[EntityRecord]], bool] = default_validate
    is_not_found: Callable[[str], bool] = is_not_found_response
    # A handle, or a callable read on every call so caches created later are picked up
    cache_handle: HandleSource = None
    profile: Optional[PromptProfile] = None
    build_messages: Optional[Callable[[str, Optional[str], PromptProfile], ResolverMessages]] = None
    # Applied to the validated id before returning (e.g. int for bridge ids)
    coerce: Optional[Callable[[str], Any]] = None
    # Replaces the user turn when a cache handle is bound
    cached_prompt: Optional[Callable[[str], str]] = None


def _current_handle(source: HandleSource) -> Optional[str]:
    if callable(source):
        source = source()
    if isinstance(source, CacheHandle):
        return source.name
    return source or None


def create_resolver(config: ResolverConfig) -> Resolve:
    """Build ``resolve(name) -> canonical id | None`` for one entity type."""
    profile = config.profile or generic_profile(config.entity_type)
    build_messages = config.build_messages or default_build_messages
    entity_type = config.entity_type

    async def complete(name: str, handle: Optional[str]) -> str:
        context = None if handle else config.get_context(config.entities)
        messages = build_messages(name, context, profile)
        if handle and config.cached_prompt is not None:
            messages = messages._replace(user=config.cached_prompt(name))
        return await config.completion_client.complete(
            messages.system,
            messages.user,
            cached_content=handle,
        )

    async def resolve(name: str) -> Optional[Any]:
        try:
            handle = _current_handle(config.cache_handle)
            if handle and not config.completion_client.supports_cached_content:
                handle = None

            try:
                raw = await complete(name, handle)
            except Exception as e:
                if not handle:
                    raise
                # The service rejects expired or deleted caches; retry once with the rows inline
                logger.warning("Cached %s call failed (%s): %s; retrying with inline context", entity_type, handle, e)
                handle = None
                raw = await complete(name, None)
            raw_output = (raw or "").strip()

            if config.is_not_found(raw_output):
                logger.warning("Could not resolve %s: %s", entity_type, name)
                return None

            sanitized = config.sanitize(raw_output)
            if not sanitized:
                logger.warning("Model returned empty %s for: %s", entity_type, name)
                return None

            if config.validate(sanitized, config.entities):
                logger.info('Resolved %s "%s" → "%s"%s', entity_type, name, sanitized, " (cached)" if handle else "")
                return config.coerce(sanitized) if config.coerce else sanitized

            logger.warning("Model returned invalid %s: %s", entity_type, sanitized)
            return None
        except Exception as e:
            logger.error("Error resolving %s %r: %s", entity_type, name, e, exc_info=True)
            return None

    return resolve
