"""
DeFi entity resolver backend.

Resolves free-text protocol, chain, stablecoin, bridge and options names to
the canonical ids the DefiLlama and DeBank APIs accept, using LLM
completions checked against bundled registries and Gemini context caches.
"""

__all__ = [
]
