"""Test doubles for the completion client and the Gemini cache service."""
import re
from types import SimpleNamespace
from typing import Callable, Dict, List, Optional, Union
from unittest.mock import AsyncMock, MagicMock

_QUERY = re.compile(r'(?:User input|USER QUERY): "([^"]*)"')


def query_of(user_message: str) -> Optional[str]:
    match = _QUERY.search(user_message)
    return match.group(1) if match else None


class FakeCompletionClient:
    """Records every call; answers from a fixed string, a mapping of queries, or raises.

    ``cached_error`` is raised only for calls bound to a cache handle.
    """

    def __init__(
        self,
        output: Union[str, Dict[str, str], None] = "",
        error: Optional[BaseException] = None,
        cached_error: Optional[BaseException] = None,
        supports_cached_content: bool = True,
        model: str = "gemini-2.5-flash",
    ):
        self.output = output
        self.error = error
        self.cached_error = cached_error
        self.supports_cached_content = supports_cached_content
        self.model = model
        self.calls: List[dict] = []

    async def complete(self, system: Optional[str], user: str, cached_content: Optional[str] = None) -> str:
        self.calls.append({"system": system, "user": user, "cached_content": cached_content})
        if cached_content and self.cached_error is not None:
            raise self.cached_error
        if self.error is not None:
            raise self.error
        if isinstance(self.output, dict):
            return self.output.get(query_of(user), "__NOT_FOUND__")
        return self.output


def cached_content(name: str, display_name: Optional[str] = None, **extra) -> SimpleNamespace:
    return SimpleNamespace(name=name, display_name=display_name, expire_time=None, **extra)


async def _pages(items):
    for item in items:
        yield item


def make_genai_client(
    create: Optional[Callable] = None,
    listed: Optional[list] = None,
) -> MagicMock:
    """MagicMock shaped like ``genai.Client`` with async cache and model endpoints.

    ``create`` is an async side effect for ``caches.create``; by default each
    call returns ``cachedContents/<display_name>``.
    """

    async def default_create(model, config):
        return cached_content(f"cachedContents/{config.display_name}", config.display_name)

    client = MagicMock()
    client.aio.caches.create = AsyncMock(side_effect=create or default_create)
    client.aio.caches.get = AsyncMock(side_effect=lambda name: cached_content(name, model="models/gemini-2.5-flash"))
    client.aio.caches.list = AsyncMock(side_effect=lambda config: _pages(listed or []))
    client.aio.caches.update = AsyncMock(side_effect=lambda name, config: cached_content(name))
    client.aio.caches.delete = AsyncMock(return_value=None)
    client.aio.models.generate_content = AsyncMock(return_value=SimpleNamespace(text="uniswap"))
    return client
