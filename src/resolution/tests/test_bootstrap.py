"""Tests for runtime wiring and bounded cache start-up."""
import asyncio

import pytest
from unittest.mock import patch

from src.knowledge.entity_registry import load_default_registries
from src.resolution.bootstrap import ResolverRuntime, ResolverSettings

from .fakes import FakeCompletionClient, cached_content, make_genai_client


def _build(genai_client, completion_client=None, **settings):
    settings.setdefault("model", "gemini-2.5-flash")
    return ResolverRuntime.build(
        ResolverSettings(**settings),
        genai_client=genai_client,
        registries=load_default_registries(),
        completion_client=completion_client or FakeCompletionClient("uniswap"),
    )


class TestResolverRuntime:

    @pytest.mark.asyncio
    async def test_start_creates_caches_and_resolvers_use_them(self):
        completion = FakeCompletionClient("uniswap")
        runtime = _build(make_genai_client(), completion)

        handles = await runtime.start()

        assert set(handles) == {"protocols", "chains", "stablecoins", "bridges"}
        assert runtime.status()["caching"] == "cached"
        assert await runtime.defillama.resolve_protocol("Uniswap") == "uniswap"
        assert completion.calls[0]["cached_content"] == "cachedContents/protocols-resolver"

    @pytest.mark.asyncio
    async def test_cached_entity_types_setting(self):
        runtime = _build(make_genai_client(), cached_entity_types=["chains"])
        handles = await runtime.start()
        assert list(handles) == ["chains"]

    @pytest.mark.asyncio
    async def test_without_credentials_runs_inline(self):
        completion = FakeCompletionClient("uniswap")
        with patch("src.resolution.bootstrap.create_genai_client", return_value=None):
            runtime = _build(None, completion)

        with patch("src.resolution.cache_manager.logger"):
            await runtime.start()

        status = runtime.status()
        assert status["caching"] == "disabled"
        assert status["started"] is True
        assert await runtime.defillama.resolve_protocol("Uniswap") == "uniswap"
        assert completion.calls[0]["cached_content"] is None

    @pytest.mark.asyncio
    async def test_start_timeout_keeps_created_caches_and_continues_cold(self):
        async def create(model, config):
            if config.display_name == "protocols-resolver":
                return cached_content("cachedContents/protocols-resolver")
            await asyncio.sleep(10)

        runtime = _build(make_genai_client(create=create))

        with patch("src.resolution.bootstrap.logger") as mock_logger, \
                patch("src.resolution.cache_manager.logger") as mock_cache_logger:
            handles = await runtime.start(timeout=0.05)

        assert handles["protocols"].name == "cachedContents/protocols-resolver"
        assert handles["chains"] is None
        assert runtime.started is True
        assert runtime.status()["caching"] == "degraded"
        assert runtime.uncached_entity_types() == ["chains", "stablecoins", "bridges"]
        mock_logger.warning.assert_called_once()
        interrupted = mock_cache_logger.warning.call_args.args
        assert "interrupted" in interrupted[0]
        assert interrupted[1] == "chains"

    @pytest.mark.asyncio
    async def test_failed_bridges_cache_resolves_inline_while_others_stay_cached(self):
        async def create(model, config):
            if config.display_name == "bridges-resolver":
                raise RuntimeError("quota exceeded")
            return cached_content(f"cachedContents/{config.display_name}")

        completion = FakeCompletionClient({"Stargate": "12", "Uniswap": "uniswap"})
        runtime = _build(make_genai_client(create=create), completion)

        with patch("src.resolution.cache_manager.logger"):
            handles = await runtime.start()

        assert handles["bridges"] is None
        assert runtime.uncached_entity_types() == ["bridges"]

        assert await runtime.defillama.resolve_bridge("Stargate") == 12
        bridge_call = completion.calls[-1]
        assert bridge_call["cached_content"] is None
        assert "12|stargate|Stargate" in bridge_call["system"]

        assert await runtime.defillama.resolve_protocol("Uniswap") == "uniswap"
        assert completion.calls[-1]["cached_content"] == "cachedContents/protocols-resolver"

    def test_status_before_start(self):
        runtime = _build(make_genai_client())
        status = runtime.status()
        assert status["started"] is False
        assert status["caching"] == "degraded"
        assert status["caches"]["bridges"] is None
