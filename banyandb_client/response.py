"""Decoded trace query results."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterator, Optional

from .proto.banyandb import Entity, QueryResponse
from .tag import TagAndValue, build


@dataclass(frozen=True)
class RowEntity:
    """One entity of a query result, tags in wire order."""

    id: str
    timestamp: Optional[datetime]
    binary: bytes
    tags: tuple[TagAndValue, ...]

    @classmethod
    def from_proto(cls, entity: Entity) -> "RowEntity":
        timestamp = None
        if entity.HasField("timestamp"):
            timestamp = entity.timestamp.ToDatetime(tzinfo=timezone.utc)
        return cls(
            id=entity.entity_id,
            timestamp=timestamp,
            binary=bytes(entity.data_binary),
            tags=tuple(build(tag) for tag in entity.fields),
        )

    def tag(self, name: str) -> Optional[TagAndValue]:
        """Return the first tag called ``name``, or None."""
        for t in self.tags:
            if t.tag_name == name:
                return t
        return None


class TraceQueryResponse:
    """Wraps a QueryResponse and decodes all of its entities up front.

    Decoding is all-or-nothing: a single unrecognized tag variant fails
    construction with UnrecognizedVariantError.
    """

    def __init__(self, raw: QueryResponse):
        self.raw = raw
        self._entities = [RowEntity.from_proto(e) for e in raw.entities]

    @property
    def entities(self) -> list[RowEntity]:
        return list(self._entities)

    def __len__(self) -> int:
        return len(self._entities)

    def __iter__(self) -> Iterator[RowEntity]:
        return iter(self._entities)

    def __getitem__(self, index: int) -> RowEntity:
        return self._entities[index]
