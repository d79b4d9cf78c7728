"""
Entity registries.

Wraps the static catalogs in read-only ``EntityRegistry`` objects keyed by
entity type. Raw catalog dicts are validated into ``EntityRecord`` once, at
load time; nothing mutates a registry afterwards.
"""
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

from src.data_models.entity_schemas import EntityRecord, EntityType

from .debank_catalog import DEBANK_CHAINS
from .defillama_catalog import BRIDGES, CHAINS, OPTIONS, PROTOCOLS, STABLECOINS


class EntityRegistry:
    """Ordered, immutable universe of valid entities for one entity type."""

    def __init__(self, entity_type: str, records: Sequence[EntityRecord]):
        self.entity_type = entity_type
        self._records: Tuple[EntityRecord, ...] = tuple(records)
        self._by_id: Dict[str, EntityRecord] = {}
        for record in self._records:
            self._by_id.setdefault(record.canonical_id, record)

    @classmethod
    def from_raw(
        cls,
        entity_type: str,
        raw_records: Sequence[Mapping[str, Any]],
        id_key: str = "id",
        name_key: str = "name",
        key_map: Optional[Mapping[str, str]] = None,
    ) -> "EntityRegistry":
        records = [
            EntityRecord.from_raw(raw, id_key=id_key, name_key=name_key, key_map=key_map)
            for raw in raw_records
        ]
        return cls(entity_type, records)

    @property
    def records(self) -> Tuple[EntityRecord, ...]:
        return self._records

    @property
    def ids(self) -> List[str]:
        return [record.canonical_id for record in self._records]

    def contains(self, candidate: Any) -> bool:
        """Exact membership test against canonical ids (string comparison)."""
        if candidate is None:
            return False
        return str(candidate) in self._by_id

    def get(self, canonical_id: Any) -> Optional[EntityRecord]:
        if canonical_id is None:
            return None
        return self._by_id.get(str(canonical_id))

    def duplicate_ids(self) -> List[str]:
        seen, duplicates = set(), []
        for record in self._records:
            if record.canonical_id in seen:
                duplicates.append(record.canonical_id)
            seen.add(record.canonical_id)
        return duplicates

    def __iter__(self) -> Iterator[EntityRecord]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        return f"EntityRegistry({self.entity_type!r}, {len(self)} records)"


def load_default_registries() -> Dict[str, EntityRegistry]:
    """Load every bundled catalog into registries keyed by entity type value."""
    return {
        EntityType.PROTOCOLS.value: EntityRegistry.from_raw(
            EntityType.PROTOCOLS.value, PROTOCOLS, id_key="slug"
        ),
        # DefiLlama addresses chains by their display name
        EntityType.CHAINS.value: EntityRegistry.from_raw(
            EntityType.CHAINS.value, CHAINS, id_key="name",
            key_map={"tokenSymbol": "symbol"},
        ),
        EntityType.STABLECOINS.value: EntityRegistry.from_raw(
            EntityType.STABLECOINS.value, STABLECOINS
        ),
        EntityType.BRIDGES.value: EntityRegistry.from_raw(
            EntityType.BRIDGES.value, BRIDGES,
            key_map={"displayName": "display_name"},
        ),
        EntityType.OPTIONS.value: EntityRegistry.from_raw(
            EntityType.OPTIONS.value, OPTIONS, id_key="slug"
        ),
        EntityType.DEBANK_CHAINS.value: EntityRegistry.from_raw(
            EntityType.DEBANK_CHAINS.value, DEBANK_CHAINS
        ),
    }
