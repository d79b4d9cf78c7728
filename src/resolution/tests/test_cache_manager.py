"""Unit tests for the context cache lifecycle manager.

The Gemini client is a MagicMock; no network calls are made.
"""
import pytest
from unittest.mock import patch

from src.knowledge.entity_registry import load_default_registries
from src.resolution.cache_manager import ContextCacheManager
from src.resolution.entity_resolver import build_cache_specs
from src.resolution.exceptions import CacheManagerError, CachingDisabledError, UnknownEntityTypeError

from .fakes import cached_content, make_genai_client

CACHED_TYPES = ["protocols", "chains", "stablecoins", "bridges"]


@pytest.fixture
def specs():
    return build_cache_specs(load_default_registries(), CACHED_TYPES)


class TestInitialize:

    @pytest.mark.asyncio
    async def test_creates_one_cache_per_entity_type_in_order(self, specs):
        client = make_genai_client()
        manager = ContextCacheManager(client, specs, model="gemini-2.5-flash", ttl_seconds=3600)

        handles = await manager.initialize()

        assert list(handles) == CACHED_TYPES
        assert handles["protocols"].name == "cachedContents/protocols-resolver"
        assert all(handle is not None for handle in handles.values())
        assert client.aio.caches.create.await_count == 4

        kwargs = client.aio.caches.create.await_args_list[0].kwargs
        assert kwargs["model"] == "gemini-2.5-flash"
        assert kwargs["config"].ttl == "3600s"
        assert kwargs["config"].display_name == "protocols-resolver"
        assert kwargs["config"].contents[0].parts[0].text.startswith("uniswap|Uniswap|UNI")

    @pytest.mark.asyncio
    async def test_no_client_disables_caching_with_one_warning(self, specs):
        manager = ContextCacheManager(None, specs)

        with patch("src.resolution.cache_manager.logger") as mock_logger:
            handles = await manager.initialize()

        assert manager.is_enabled is False
        assert handles == {entity_type: None for entity_type in CACHED_TYPES}
        mock_logger.warning.assert_called_once_with("GOOGLE_API_KEY not found, context caching will be disabled")
        mock_logger.error.assert_not_called()

    @pytest.mark.asyncio
    async def test_one_failure_only_affects_that_entity_type(self, specs):
        async def create(model, config):
            if config.display_name == "bridges-resolver":
                raise RuntimeError("quota exceeded")
            return cached_content(f"cachedContents/{config.display_name}")

        manager = ContextCacheManager(make_genai_client(create=create), specs)

        with patch("src.resolution.cache_manager.logger") as mock_logger:
            handles = await manager.initialize()

        assert handles["bridges"] is None
        assert handles["protocols"] is not None
        assert handles["chains"] is not None
        assert handles["stablecoins"] is not None
        assert mock_logger.error.call_count == 1
        assert "bridges" in mock_logger.error.call_args.args

    @pytest.mark.asyncio
    async def test_missing_cache_name_is_a_failure(self, specs):
        async def create(model, config):
            return cached_content(None)

        manager = ContextCacheManager(make_genai_client(create=create), specs)
        with patch("src.resolution.cache_manager.logger"):
            handles = await manager.initialize()

        assert all(handle is None for handle in handles.values())


class TestLifecycle:

    @pytest.mark.asyncio
    async def test_create_unknown_entity_type(self, specs):
        manager = ContextCacheManager(make_genai_client(), specs)
        with pytest.raises(UnknownEntityTypeError):
            await manager.create("options")

    @pytest.mark.asyncio
    async def test_operations_without_client_raise(self, specs):
        manager = ContextCacheManager(None, specs)
        with pytest.raises(CachingDisabledError):
            await manager.create("protocols")
        with pytest.raises(CachingDisabledError):
            await manager.list()

    @pytest.mark.asyncio
    async def test_create_wraps_remote_errors(self, specs):
        async def create(model, config):
            raise RuntimeError("boom")

        manager = ContextCacheManager(make_genai_client(create=create), specs)
        with pytest.raises(CacheManagerError) as exc_info:
            await manager.create("chains")

        assert exc_info.value.code == 502
        assert exc_info.value.operation == "create"
        assert manager.get("chains") is None

    @pytest.mark.asyncio
    async def test_list_reads_every_page(self, specs):
        listed = [cached_content(f"cachedContents/{i}") for i in range(3)]
        client = make_genai_client(listed=listed)
        manager = ContextCacheManager(client, specs, page_size=2)

        caches = await manager.list()

        assert [info.name for info in caches] == ["cachedContents/0", "cachedContents/1", "cachedContents/2"]
        assert client.aio.caches.list.await_args.kwargs["config"].page_size == 2

    @pytest.mark.asyncio
    async def test_get_metadata(self, specs):
        manager = ContextCacheManager(make_genai_client(), specs)
        info = await manager.get_metadata("cachedContents/abc")
        assert info.name == "cachedContents/abc"
        assert info.model == "models/gemini-2.5-flash"

    @pytest.mark.asyncio
    async def test_update_refreshes_matching_handle(self, specs):
        client = make_genai_client()
        manager = ContextCacheManager(client, specs)
        await manager.create("protocols")

        await manager.update("cachedContents/protocols-resolver", 7200)

        assert manager.get("protocols").ttl_seconds == 7200
        assert client.aio.caches.update.await_args.kwargs["config"].ttl == "7200s"

    @pytest.mark.asyncio
    async def test_delete_clears_matching_handle(self, specs):
        client = make_genai_client()
        manager = ContextCacheManager(client, specs)
        await manager.create("protocols")
        await manager.create("chains")

        await manager.delete("cachedContents/protocols-resolver")

        assert manager.handle_name("protocols") is None
        assert manager.handle_name("chains") == "cachedContents/chains-resolver"
        client.aio.caches.delete.assert_awaited_once_with(name="cachedContents/protocols-resolver")
