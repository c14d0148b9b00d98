"""RoadQuery Field Catalog - Searchable Field Metadata.

The catalog describes every field of the indexed documents: its type,
whether it can be used as a filter, whether it takes part in free-text
search, and under which name it can be aggregated.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional

from roadquery_core.errors import UnknownField

logger = logging.getLogger(__name__)


class FieldType(Enum):
    """Field type enumeration."""

    INTEGER = "integer"
    STRING = "string"
    BOOLEAN = "boolean"
    TEXT = "text"
    URL = "url"

    @property
    def is_filterable(self) -> bool:
        """Whether values of this type can be filtered and aggregated."""
        return self in (FieldType.INTEGER, FieldType.STRING, FieldType.BOOLEAN)


@dataclass(frozen=True)
class FieldDescriptor:
    """Field definition.

    Attributes:
        name: Unique field name
        type: Field type
        filterable: Offered as a filter
        freetext_searchable: Part of free-text search
        search_boost: Boost applied in free-text search
        aggregation_target_name: Index field to aggregate on (None: not aggregatable)
    """

    name: str
    type: FieldType
    filterable: bool = False
    freetext_searchable: bool = False
    search_boost: float = 1.0
    aggregation_target_name: Optional[str] = None

    @property
    def exact_name(self) -> str:
        """Non-analyzed sub-field used for exact string matching."""
        return f"{self.name}.keyword"

    @property
    def boosted_name(self) -> str:
        """Field name with boost suffix, as used by multi-field matches."""
        return f"{self.name}^{self.search_boost:g}"


class FieldCatalog(ABC):
    """Read-only catalog of searchable fields."""

    @abstractmethod
    def list_fields(self) -> List[FieldDescriptor]:
        pass

    @abstractmethod
    def get_field(self, name: str) -> FieldDescriptor:
        """Get a field by name, raising UnknownField if absent."""
        pass

    def list_filterable_fields(self) -> List[FieldDescriptor]:
        return [f for f in self.list_fields() if f.filterable]

    def list_freetext_fields(self) -> List[FieldDescriptor]:
        return [f for f in self.list_fields() if f.freetext_searchable]


class StaticFieldCatalog(FieldCatalog):
    """In-memory field catalog, loaded once and never mutated."""

    def __init__(self, fields: Iterable[FieldDescriptor]):
        self._fields: Dict[str, FieldDescriptor] = {}
        for descriptor in fields:
            if descriptor.name in self._fields:
                raise ValueError(f"Duplicate field name: {descriptor.name}")
            self._fields[descriptor.name] = descriptor
        logger.debug(f"Loaded field catalog with {len(self._fields)} fields")

    def list_fields(self) -> List[FieldDescriptor]:
        return list(self._fields.values())

    def get_field(self, name: str) -> FieldDescriptor:
        try:
            return self._fields[name]
        except KeyError:
            raise UnknownField(name) from None

    def __contains__(self, name: object) -> bool:
        return name in self._fields

    def __len__(self) -> int:
        return len(self._fields)


__all__ = ["FieldType", "FieldDescriptor", "FieldCatalog", "StaticFieldCatalog"]
