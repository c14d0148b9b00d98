"""RoadQuery Field Catalog Components.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from roadquery_core.fields.catalog import (
    FieldType,
    FieldDescriptor,
    FieldCatalog,
    StaticFieldCatalog,
)

__all__ = [
    "FieldType",
    "FieldDescriptor",
    "FieldCatalog",
    "StaticFieldCatalog",
]
