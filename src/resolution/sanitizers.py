"""Cleanup of raw model output before it is checked against a registry.

Generic stripping always runs first; the type-specific pass runs on the
stripped text.
"""
import re

_QUOTES = "`\"'“”‘’"
_LEADING_QUOTES = re.compile(f"^[{_QUOTES}]+")
_TRAILING_QUOTES = re.compile(f"[{_QUOTES}]+$")
_TRAILING_PUNCTUATION = re.compile(r"[.!?]+$")
_NON_SLUG = re.compile(r"[^a-z0-9_-]")
_NON_DIGIT = re.compile(r"[^0-9]")


def strip_decorations(output: str) -> str:
    """Remove surrounding whitespace, quotes/backticks and trailing sentence punctuation."""
    text = output.strip()
    # Repeat until stable so `"x."` and `x."` strip the same way.
    while True:
        stripped = _LEADING_QUOTES.sub("", text)
        stripped = _TRAILING_QUOTES.sub("", stripped)
        stripped = _TRAILING_PUNCTUATION.sub("", stripped).strip()
        if stripped == text:
            return stripped
        text = stripped


def sanitize_slug(output: str) -> str:
    return _NON_SLUG.sub("", strip_decorations(output).lower())


def sanitize_chain_name(output: str) -> str:
    return strip_decorations(output)


def sanitize_numeric_string(output: str) -> str:
    return _NON_DIGIT.sub("", strip_decorations(output))
