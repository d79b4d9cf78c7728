"""
Per-entity-type LLM provider/model overrides.

Edit this mapping to customize which model resolves each entity type.

Keys should match the entity type values (e.g., "protocols", "debank_chains").

Supported providers: "gemini" (Gemini API, supports context caching),
"vertex_ai" and "openai" (inline context only). If an entity type is not
present here, the system defaults will be used (see `src/llm/factory.py`).

Examples:

RESOLVER_MODEL_OVERRIDES = {
    "protocols": {"provider": "gemini", "model": "gemini-2.5-flash"},
    "debank_chains": {"provider": "openai", "model": "gpt-4o-mini"},
}
"""

from typing import Dict, Any


# Keep the default mapping empty; users can fill it in.
RESOLVER_MODEL_OVERRIDES: Dict[str, Dict[str, Any]] = {}
