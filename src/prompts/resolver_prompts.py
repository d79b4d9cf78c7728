from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from src.resolution.validators import NOT_FOUND_TOKEN

# Prompts for the entity resolvers.
#
# Each entity type has a PromptProfile. The cached system instruction is sent
# once when the remote cache is created; in inline mode the same framing is
# rebuilt per call with the reference context appended.


@dataclass(frozen=True)
class PromptProfile:
    entity_label: str  # e.g. "protocol slug"
    context_format: str  # e.g. "slug|name|symbol"
    domain: str = "DefiLlama API"
    rules: List[str] = field(default_factory=list)
    examples: List[Tuple[str, str]] = field(default_factory=list)
    overview: Optional[str] = None


SENTINEL_RULE = (
    f'If there is no confident match, respond with exactly {NOT_FOUND_TOKEN}. '
    "Never include explanations or extra text."
)

DEFAULT_GUIDELINES: List[str] = [
    "Match to the closest entry in the list, handling common aliases, abbreviations and symbols.",
    "If several entries are plausible, prefer the latest version or most widely used one unless the input names a version.",
]

BARE_ID_RULE = "Return the bare identifier only, exactly as it appears in the list."


PROTOCOLS_PROFILE = PromptProfile(
    entity_label="protocol slug",
    context_format="slug|name|symbol",
    overview=(
        "DefiLlama tracks 2,000+ DeFi protocols across all chains: DEXs (Uniswap, Curve, PancakeSwap), "
        "lending (Aave, Compound, MakerDAO), liquid staking (Lido, Rocket Pool), derivatives (GMX, dYdX) "
        "and yield aggregators (Yearn, Beefy)."
    ),
    rules=[
        "Return ONLY the slug from the provided list.",
        "Match by name, symbol, or slug (case-insensitive).",
        "For protocols with versions (v2, v3), prefer the latest unless the user specifies one.",
    ],
    examples=[
        ("Lido", "lido"),
        ("Aave V3", "aave-v3"),
        ("Curve", "curve-dex"),
        ("MakerDAO", "makerdao"),
        ("Unknown Protocol", NOT_FOUND_TOKEN),
    ],
)

CHAINS_PROFILE = PromptProfile(
    entity_label="chain name",
    context_format="name|tokenSymbol|gecko_id",
    overview=(
        "DefiLlama tracks 100+ blockchain networks: layer 1s (Ethereum, BSC, Solana), "
        "layer 2s (Arbitrum, Optimism, Base), sidechains and alt-L1s."
    ),
    rules=[
        "Return ONLY the exact chain name as it appears in the list (case-sensitive).",
        "Handle abbreviations: \"BSC\" = \"Binance Smart Chain\", \"ETH\" = \"Ethereum\", \"Matic\" = \"Polygon\".",
        "Match by name, token symbol, or CoinGecko ID.",
    ],
    examples=[
        ("Ethereum", "Ethereum"),
        ("Binance Smart Chain", "BSC"),
        ("Matic", "Polygon"),
        ("Unknown Chain", NOT_FOUND_TOKEN),
    ],
)

STABLECOINS_PROFILE = PromptProfile(
    entity_label="stablecoin ID",
    context_format="id|name|symbol",
    rules=[
        "Return ONLY the numeric ID.",
        "Match by name or symbol (case-insensitive).",
    ],
    examples=[
        ("USDT", "1"),
        ("USD Coin", "2"),
        ("DAI", "5"),
        ("Unknown Stablecoin", NOT_FOUND_TOKEN),
    ],
)

BRIDGES_PROFILE = PromptProfile(
    entity_label="bridge ID",
    context_format="id|name|displayName",
    overview=(
        "DefiLlama tracks volume and TVL across official chain bridges (Polygon PoS, Arbitrum, Optimism), "
        "third-party multi-chain bridges (Stargate, Synapse, Hop, Celer cBridge) and messaging-based "
        "bridges (Wormhole Portal, Axelar)."
    ),
    rules=[
        "Return ONLY the numeric ID from the provided list, never the bridge name.",
        "Match by name or display name (case-insensitive), with or without a \"Bridge\" suffix.",
        "Handle ticker and chain abbreviations: \"STG Bridge\" = Stargate, \"ARB Bridge\" = Arbitrum, \"OP Bridge\" = Optimism.",
        "Prioritize exact name matches over partial matches.",
    ],
    examples=[
        ("Polygon Bridge", "1"),
        ("Arbitrum", "2"),
        ("Stargate Finance", "12"),
        ("OP Bridge", "4"),
        ("Fictional Bridge XYZ", NOT_FOUND_TOKEN),
    ],
)

DEBANK_CHAINS_PROFILE = PromptProfile(
    entity_label="chain ID",
    context_format="Name: id",
    domain="DeBank",
    rules=[
        "Match to the closest chain in the list and handle common aliases (e.g., \"BSC\" -> \"bsc\", \"Polygon\" -> \"matic\").",
        "If multiple chains seem plausible, choose the most widely used interpretation.",
    ],
    examples=[
        ("Ethereum", "eth"),
        ("Binance Smart Chain", "bsc"),
        ("Arbitrum", "arb"),
        ("Made Up Chain", NOT_FOUND_TOKEN),
    ],
)


def generic_profile(entity_type: str) -> PromptProfile:
    return PromptProfile(entity_label=f"{entity_type} identifier", context_format="id|name|symbol")


def _format_examples(examples: List[Tuple[str, str]]) -> str:
    return "\n".join(f'- "{query}" -> {answer}' for query, answer in examples)


def build_cached_instruction(profile: PromptProfile) -> str:
    """System instruction stored with the remote cache; the reference rows follow it as content."""
    parts = [
        f"You are a precise resolver mapping user inputs to canonical {profile.entity_label}s for the {profile.domain}.",
    ]
    if profile.overview:
        parts.append(profile.overview)
    rules = profile.rules + [f"If no match is found, return exactly: {NOT_FOUND_TOKEN}"]
    parts.append("MATCHING RULES:\n" + "\n".join(f"{i}. {rule}" for i, rule in enumerate(rules, 1)))
    if profile.examples:
        parts.append("EXAMPLES:\n" + _format_examples(profile.examples))
    parts.append("Never include explanations, descriptions, or additional text.")
    parts.append(f"AVAILABLE ENTRIES (format: {profile.context_format}) are provided in the cached content.")
    return "\n\n".join(parts)


def build_system_message(profile: PromptProfile, context: Optional[str]) -> str:
    """Role framing, optional inline reference rows and the sentinel rule."""
    parts = [
        f"You are a precise resolver mapping user inputs to canonical {profile.entity_label}s for the {profile.domain}.",
    ]
    if context is not None:
        parts.append(f"Reference entries (format: {profile.context_format}):\n{context}")
    parts.append(SENTINEL_RULE)
    return "\n\n".join(parts)


def build_user_message(profile: PromptProfile, name: str) -> str:
    guidelines = list(profile.rules or DEFAULT_GUIDELINES[:2]) + [BARE_ID_RULE]
    parts = [
        f"Resolve the following user input to a {profile.entity_label}.",
        f'User input: "{name}"',
        "Rules:\n" + "\n".join(f"{i}. {rule}" for i, rule in enumerate(guidelines, 1)),
    ]
    if profile.examples:
        parts.append("Examples:\n" + _format_examples(profile.examples))
    parts.append(f"Your response must be the {profile.entity_label} only or {NOT_FOUND_TOKEN}.")
    return "\n\n".join(parts)


def build_cached_user_message(profile: PromptProfile, name: str) -> str:
    """Short per-call prompt when the instruction and reference rows live in the cache."""
    return f'USER QUERY: "{name}"\n\nReturn ONLY the {profile.entity_label} or {NOT_FOUND_TOKEN}:'
