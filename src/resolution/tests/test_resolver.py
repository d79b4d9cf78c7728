"""Unit tests for the generic resolver.

Covers the resolution gates (sentinel, sanitization, registry membership),
failure containment, and cached versus inline prompting.
"""
import asyncio

import pytest
from unittest.mock import patch

from src.data_models.entity_schemas import CacheHandle
from src.knowledge.entity_registry import load_default_registries
from src.prompts.resolver_prompts import DEBANK_CHAINS_PROFILE, PROTOCOLS_PROFILE
from src.resolution.context_builder import build_context, build_labelled_context
from src.resolution.resolver import ResolverConfig, create_resolver
from src.resolution.sanitizers import sanitize_numeric_string, sanitize_slug

from .fakes import FakeCompletionClient

REGISTRIES = load_default_registries()


def _debank_resolver(client, **overrides):
    config = dict(
        entity_type="chain",
        entities=REGISTRIES["debank_chains"].records,
        get_context=build_labelled_context,
        sanitize=sanitize_slug,
        completion_client=client,
        profile=DEBANK_CHAINS_PROFILE,
    )
    config.update(overrides)
    return create_resolver(ResolverConfig(**config))


class TestResolutionGates:

    @pytest.mark.asyncio
    async def test_exact_answer_resolves(self):
        resolve = _debank_resolver(FakeCompletionClient("eth"))
        assert await resolve("Ethereum") == "eth"

    @pytest.mark.asyncio
    async def test_alias_answer_resolves(self):
        resolve = _debank_resolver(FakeCompletionClient("matic"))
        assert await resolve("Polygon") == "matic"

    @pytest.mark.asyncio
    async def test_decorated_answer_is_sanitized(self):
        resolve = _debank_resolver(FakeCompletionClient("  `Arb`.\n"))
        assert await resolve("Arbitrum") == "arb"

    @pytest.mark.asyncio
    async def test_decorated_sentinel_returns_none_with_warning(self):
        resolve = _debank_resolver(FakeCompletionClient('`"__NOT_FOUND__."`'))

        with patch("src.resolution.resolver.logger") as mock_logger:
            assert await resolve("Made Up Chain") is None

        mock_logger.warning.assert_called_once_with("Could not resolve %s: %s", "chain", "Made Up Chain")
        mock_logger.error.assert_not_called()

    @pytest.mark.asyncio
    async def test_sentinel_wins_over_validation(self):
        # A validator that accepts anything must never see the sentinel
        resolve = _debank_resolver(FakeCompletionClient("__NOT_FOUND__"), validate=lambda value, entities: True)
        assert await resolve("anything") is None

    @pytest.mark.asyncio
    async def test_answer_outside_registry_is_rejected(self):
        resolve = _debank_resolver(FakeCompletionClient("solana"))

        with patch("src.resolution.resolver.logger") as mock_logger:
            assert await resolve("Solana") is None

        mock_logger.warning.assert_called_once_with("Model returned invalid %s: %s", "chain", "solana")

    @pytest.mark.asyncio
    async def test_answer_that_sanitizes_to_empty_is_rejected(self):
        resolve = _debank_resolver(FakeCompletionClient("!!!"))
        with patch("src.resolution.resolver.logger"):
            assert await resolve("Ethereum") is None

    @pytest.mark.asyncio
    async def test_coerce_applies_to_validated_id(self):
        resolve = create_resolver(ResolverConfig(
            entity_type="bridges",
            entities=REGISTRIES["bridges"].records,
            get_context=lambda records: build_context(records, ("id", "name", "display_name")),
            sanitize=sanitize_numeric_string,
            completion_client=FakeCompletionClient('"12".'),
            coerce=int,
        ))
        assert await resolve("Stargate") == 12


class TestFailureContainment:

    @pytest.mark.asyncio
    async def test_completion_error_returns_none_and_logs_error(self):
        resolve = _debank_resolver(FakeCompletionClient(error=RuntimeError("503 upstream")))

        with patch("src.resolution.resolver.logger") as mock_logger:
            assert await resolve("Ethereum") is None

        assert mock_logger.error.call_count == 1
        assert mock_logger.error.call_args.kwargs["exc_info"] is True

    @pytest.mark.asyncio
    async def test_context_builder_error_returns_none(self):
        def broken_context(records):
            raise ValueError("bad registry")

        client = FakeCompletionClient("eth")
        resolve = _debank_resolver(client, get_context=broken_context)

        with patch("src.resolution.resolver.logger"):
            assert await resolve("Ethereum") is None
        assert client.calls == []

    @pytest.mark.asyncio
    async def test_cancellation_propagates(self):
        resolve = _debank_resolver(FakeCompletionClient(error=asyncio.CancelledError()))
        with pytest.raises(asyncio.CancelledError):
            await resolve("Ethereum")


class TestCachedVersusInline:

    def _protocol_resolver(self, client, cache_handle):
        return create_resolver(ResolverConfig(
            entity_type="protocols",
            entities=REGISTRIES["protocols"].records,
            get_context=lambda records: build_context(records, ("id", "name", "symbol")),
            sanitize=sanitize_slug,
            completion_client=client,
            cache_handle=cache_handle,
            profile=PROTOCOLS_PROFILE,
        ))

    @pytest.mark.asyncio
    async def test_inline_mode_sends_reference_context(self):
        client = FakeCompletionClient("uniswap")
        resolve = self._protocol_resolver(client, None)

        assert await resolve("Uniswap") == "uniswap"

        call = client.calls[0]
        assert call["cached_content"] is None
        assert "uniswap|Uniswap|UNI" in call["system"]
        assert 'User input: "Uniswap"' in call["user"]

    @pytest.mark.asyncio
    async def test_cached_mode_sends_short_prompt_against_handle(self):
        client = FakeCompletionClient("aave-v3")
        handle = CacheHandle(name="cachedContents/p1", entity_type="protocols")
        resolve = self._protocol_resolver(client, handle)

        assert await resolve("Aave") == "aave-v3"

        call = client.calls[0]
        assert call["cached_content"] == "cachedContents/p1"
        assert "uniswap|Uniswap|UNI" not in call["system"]
        assert call["user"].startswith('USER QUERY: "Aave"')

    @pytest.mark.asyncio
    async def test_handle_source_is_read_on_every_call(self):
        client = FakeCompletionClient("lido")
        current = {"name": None}
        resolve = self._protocol_resolver(client, lambda: current["name"])

        await resolve("Lido")
        current["name"] = "cachedContents/late"
        await resolve("Lido")

        assert [call["cached_content"] for call in client.calls] == [None, "cachedContents/late"]

    @pytest.mark.asyncio
    async def test_handle_ignored_for_clients_without_cache_support(self):
        client = FakeCompletionClient("lido", supports_cached_content=False)
        resolve = self._protocol_resolver(client, "cachedContents/p1")

        assert await resolve("Lido") == "lido"
        assert client.calls[0]["cached_content"] is None
        assert "lido|Lido|LDO" in client.calls[0]["system"]

    @pytest.mark.asyncio
    async def test_failed_cached_call_retries_inline(self):
        client = FakeCompletionClient("uniswap", cached_error=RuntimeError("404 cachedContents/expired not found"))
        resolve = self._protocol_resolver(client, "cachedContents/expired")

        with patch("src.resolution.resolver.logger") as mock_logger:
            assert await resolve("Uniswap") == "uniswap"

        assert [call["cached_content"] for call in client.calls] == ["cachedContents/expired", None]
        assert "uniswap|Uniswap|UNI" in client.calls[1]["system"]
        assert 'User input: "Uniswap"' in client.calls[1]["user"]
        mock_logger.warning.assert_called_once()
        mock_logger.error.assert_not_called()

    @pytest.mark.asyncio
    async def test_inline_failure_is_not_retried(self):
        client = FakeCompletionClient(error=RuntimeError("503 upstream"))
        resolve = self._protocol_resolver(client, None)

        with patch("src.resolution.resolver.logger"):
            assert await resolve("Uniswap") is None
        assert len(client.calls) == 1

    @pytest.mark.asyncio
    async def test_failed_retry_returns_none(self):
        client = FakeCompletionClient(error=RuntimeError("503 upstream"))
        resolve = self._protocol_resolver(client, "cachedContents/p1")

        with patch("src.resolution.resolver.logger") as mock_logger:
            assert await resolve("Uniswap") is None

        assert [call["cached_content"] for call in client.calls] == ["cachedContents/p1", None]
        assert mock_logger.error.call_count == 1

    @pytest.mark.asyncio
    async def test_cached_prompt_override(self):
        client = FakeCompletionClient("eth")
        resolve = _debank_resolver(
            client,
            cache_handle="cachedContents/c1",
            cached_prompt=lambda name: f"Chain: {name}",
        )

        assert await resolve("Ethereum") == "eth"
        assert client.calls[0]["user"] == "Chain: Ethereum"

    @pytest.mark.asyncio
    async def test_same_universe_in_both_modes(self):
        for handle in (None, "cachedContents/p1"):
            resolve = self._protocol_resolver(FakeCompletionClient("sushiswap-v9"), handle)
            with patch("src.resolution.resolver.logger"):
                assert await resolve("Sushi") is None
