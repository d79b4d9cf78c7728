"""Serialization of entity registries into compact reference text for the model."""
from typing import Iterable, Sequence

from src.data_models.entity_schemas import EntityRecord

DELIMITER = "|"


def _escape(value: object, delimiter: str) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        value = ", ".join(str(item) for item in value)
    text = str(value)
    if "\\" in text or delimiter in text:
        text = text.replace("\\", "\\\\").replace(delimiter, "\\" + delimiter)
    return text


def build_context(
    records: Iterable[EntityRecord],
    fields: Sequence[str] = ("id", "name", "symbol"),
    delimiter: str = DELIMITER,
) -> str:
    """One ``field|field|field`` line per record, in registry order.

    Missing fields render empty. A field containing the delimiter (or a
    backslash) is backslash-escaped so rows stay unambiguous; delimiter-free
    registries serialize unchanged.
    """
    return "\n".join(
        delimiter.join(_escape(record.field(key), delimiter) for key in fields)
        for record in records
    )


def _escape_label(value: str) -> str:
    if not any(char in value for char in "\\:\n"):
        return value
    return value.replace("\\", "\\\\").replace(":", "\\:").replace("\n", "\\n")


def build_labelled_context(records: Iterable[EntityRecord]) -> str:
    """``Name: id`` lines, used for small registries sent inline.

    Backslashes, colons and newlines inside a name or id are
    backslash-escaped so each row splits on its single unescaped ``: ``.
    """
    return "\n".join(
        f"{_escape_label(record.name)}: {_escape_label(record.canonical_id)}"
        for record in records
    )


def describe_format(fields: Sequence[str], delimiter: str = DELIMITER) -> str:
    """Header label such as ``slug|name|symbol`` for the prompt."""
    return delimiter.join(fields)
