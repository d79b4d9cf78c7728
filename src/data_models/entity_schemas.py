# Schemas for entity registries, context cache handles and resolution results
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

CanonicalId = Union[str, int]

_RECORD_FIELDS = ("id", "name", "symbol", "display_name", "aliases")


class EntityType(str, Enum):
    """Entity types with a registry and a resolver."""

    PROTOCOLS = "protocols"
    CHAINS = "chains"
    STABLECOINS = "stablecoins"
    BRIDGES = "bridges"
    OPTIONS = "options"
    DEBANK_CHAINS = "debank_chains"


class EntityRecord(BaseModel):
    """One canonical entity from a static registry.

    Required fields are a closed set; anything else a registry carries
    (gecko ids, wrapped token addresses, ...) lives in ``metadata``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: CanonicalId
    name: str
    symbol: Optional[str] = None
    display_name: Optional[str] = None
    aliases: Tuple[str, ...] = ()
    metadata: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_raw(
        cls,
        raw: Mapping[str, Any],
        id_key: str = "id",
        name_key: str = "name",
        key_map: Optional[Mapping[str, str]] = None,
    ) -> "EntityRecord":
        """Build a record from a loose registry dict.

        ``key_map`` renames raw keys onto record fields (e.g.
        ``{"displayName": "display_name"}``); unknown keys are folded into
        ``metadata``.
        """
        key_map = dict(key_map or {})
        values: Dict[str, Any] = {"id": raw[id_key], "name": raw[name_key]}
        metadata: Dict[str, Any] = {}
        for key, value in raw.items():
            if key in (id_key, name_key):
                continue
            target = key_map.get(key, key)
            if target in _RECORD_FIELDS:
                values[target] = tuple(value) if target == "aliases" else value
            else:
                metadata[key] = value
        values["metadata"] = metadata
        return cls(**values)

    @property
    def canonical_id(self) -> str:
        """String form of the id, as compared against model output."""
        return str(self.id)

    def field(self, key: str) -> Any:
        """Look up a record field or a metadata entry by name."""
        if key in _RECORD_FIELDS:
            return getattr(self, key)
        return self.metadata.get(key)


class CacheHandle(BaseModel):
    """A server-held context cache serving one entity type."""

    model_config = ConfigDict(frozen=True)

    name: str
    entity_type: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    ttl_seconds: int = 3600
    display_name: Optional[str] = None
    expire_time: Optional[datetime] = None


class CachedContentInfo(BaseModel):
    """Metadata of a remote cache as reported by the service."""

    name: str
    display_name: Optional[str] = None
    model: Optional[str] = None
    create_time: Optional[datetime] = None
    update_time: Optional[datetime] = None
    expire_time: Optional[datetime] = None


class ResolutionResult(BaseModel):
    """Outcome of one resolution call. ``resolved`` is None when unresolved."""

    query: str
    entity_type: str
    resolved: Optional[CanonicalId] = None


# --------------------------------------------------
# HTTP payloads
# --------------------------------------------------

class ResolveRequest(BaseModel):
    query: str = Field(..., min_length=1, description="Free-text entity name, e.g. 'Arbitrum'")


class BatchResolveRequest(BaseModel):
    protocols: List[str] = Field(default_factory=list)
    chains: List[str] = Field(default_factory=list)
    stablecoins: List[str] = Field(default_factory=list)
    bridges: List[str] = Field(default_factory=list)
    options: List[str] = Field(default_factory=list)


class BatchResolveResponse(BaseModel):
    protocols: Dict[str, Optional[str]] = Field(default_factory=dict)
    chains: Dict[str, Optional[str]] = Field(default_factory=dict)
    stablecoins: Dict[str, Optional[str]] = Field(default_factory=dict)
    bridges: Dict[str, Optional[int]] = Field(default_factory=dict)
    options: Dict[str, Optional[str]] = Field(default_factory=dict)


class CacheTTLUpdateRequest(BaseModel):
    ttl_seconds: int = Field(..., ge=60, le=7 * 24 * 3600)
