"""Sentinel detection and "does this value need resolving" checks."""
import re
from typing import Any, Optional

from .sanitizers import strip_decorations

NOT_FOUND_TOKEN = "__NOT_FOUND__"
# Older protocol-matcher prompts asked for the bare token.
_NOT_FOUND_TOKENS = {NOT_FOUND_TOKEN, "NOT_FOUND"}

_NUMERIC = re.compile(r"^\d+$")
_NEEDS_RESOLUTION = re.compile(r"[A-Z\s]")
_HEX_ADDRESS = re.compile(r"^0x[0-9a-fA-F]{40}$")


def is_not_found_response(output: Optional[str]) -> bool:
    """True when the raw model output is the sentinel, ignoring quotes and trailing punctuation.

    Longer text that merely contains the sentinel is not a match.
    """
    if output is None:
        return False
    return strip_decorations(output).upper() in _NOT_FOUND_TOKENS


def needs_resolution(value: Any, entity_type: str) -> bool:
    """Heuristic: does ``value`` look like free text rather than a canonical id?

    - stablecoins / bridges: anything that is not a pure number
    - token: upper-case letters or whitespace, never a hex address ("ETH" yes,
      the native id "eth" no)
    - protocols / chains / options / debank chains: upper-case letters or whitespace
    """
    if value is None or value == "":
        return False

    text = str(value).strip()
    if not text:
        return False

    if entity_type in ("stablecoin", "stablecoins", "bridge", "bridges"):
        return not _NUMERIC.match(text)

    if entity_type == "token":
        if _HEX_ADDRESS.match(text):
            return False

    return bool(_NEEDS_RESOLUTION.search(str(value)))
