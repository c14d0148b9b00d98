"""RoadQuery Filter Codec - Tilde-Delimited Filter Grammar.

Filters travel in query strings as a single value per field, made of
tokens separated by "~":

- integer: "≥10~≤200~unknown"
- boolean: "1~unknown"
- string:  "Forgotten Realms~Grey~~hawk~unknown~"

A literal "~" inside a string value is escaped as "~~". The token
"unknown" additionally matches documents without a value. For strings it
sits in the options slot: the last run of the value when that run is
followed by a final "~". A bare trailing "~unknown" is accepted as well.
Parsing is lenient: malformed tokens are dropped, never reported.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
import re
from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Union

from roadquery_core.errors import InvalidFilterEncoding
from roadquery_core.fields.catalog import FieldDescriptor, FieldType
from roadquery_core.filters.values import (
    MAX_INTEGER_FILTER_VALUE,
    BooleanFilter,
    FilterValue,
    IntegerFilter,
    StringFilter,
)

logger = logging.getLogger(__name__)

SEPARATOR = "~"
ESCAPED_SEPARATOR = "~~"
UNKNOWN_TOKEN = "unknown"
MIN_PREFIX = "≥"
MAX_PREFIX = "≤"


class FilterCodec:
    """Decodes and encodes filter values.

    String values are processed in a fixed order: the options slot (or a
    bare "~unknown" suffix) is detected first, then the remainder is split
    on unpaired separators, and only then is "~~" unescaped.
    """

    # "<values><options>~": the run before a final "~" holds the options.
    _OPTIONS_SLOT = re.compile(r"(?P<rest>.*?)(?P<options>[^~]+)~", re.DOTALL)
    # Trailing "~<suffix>" whose separator is not half of an escaped "~~".
    _UNKNOWN_SUFFIX = re.compile(r"(?P<rest>.*?)(?<!~)~(?P<suffix>[^~]+)", re.DOTALL)
    # Every "~" that is neither preceded nor followed by another "~".
    _STRING_SPLIT = re.compile(r"(?<!~)~(?!~)")
    _INTEGER = re.compile(r"0|[1-9][0-9]*")

    def decode(self, field_type: Union[FieldType, str], raw: str) -> FilterValue:
        """Decode a raw filter value.

        Args:
            field_type: Type of the filtered field
            raw: Raw encoded value (may be empty)

        Returns:
            Decoded filter value
        """
        field_type = self._resolve_type(field_type)
        raw = raw or ""

        if field_type is FieldType.INTEGER:
            return self._decode_integer(raw)
        if field_type is FieldType.BOOLEAN:
            return self._decode_boolean(raw)
        if field_type is FieldType.STRING:
            return self._decode_string(raw)
        raise InvalidFilterEncoding(field_type.value)

    def encode(self, value: FilterValue) -> str:
        """Encode a filter value into its query-string form."""
        tokens: List[str] = []

        if isinstance(value, IntegerFilter):
            if value.minimum is not None:
                tokens.append(f"{MIN_PREFIX}{value.minimum}")
            if value.maximum is not None:
                tokens.append(f"{MAX_PREFIX}{value.maximum}")
        elif isinstance(value, BooleanFilter):
            if value.value is not None:
                tokens.append("1" if value.value else "0")
        elif isinstance(value, StringFilter):
            tokens.extend(v.replace(SEPARATOR, ESCAPED_SEPARATOR) for v in value.values)
            if value.include_unknown:
                return SEPARATOR.join(tokens + [UNKNOWN_TOKEN]) + SEPARATOR
            return SEPARATOR.join(tokens)
        else:
            raise InvalidFilterEncoding(type(value).__name__)

        if value.include_unknown:
            tokens.append(UNKNOWN_TOKEN)
        return SEPARATOR.join(tokens)

    def _resolve_type(self, field_type: Union[FieldType, str]) -> FieldType:
        if isinstance(field_type, FieldType):
            return field_type
        try:
            return FieldType(field_type)
        except ValueError:
            raise InvalidFilterEncoding(field_type) from None

    def _decode_integer(self, raw: str) -> IntegerFilter:
        minimum: Optional[int] = None
        maximum: Optional[int] = None
        include_unknown = False

        for part in raw.split(SEPARATOR):
            if part == UNKNOWN_TOKEN:
                include_unknown = True
            elif part.startswith(MIN_PREFIX):
                valid, number = self._parse_bound(part[len(MIN_PREFIX):])
                if valid:
                    minimum = number
                else:
                    logger.debug(f"Ignoring malformed integer filter token: {part}")
            elif part.startswith(MAX_PREFIX):
                valid, number = self._parse_bound(part[len(MAX_PREFIX):])
                if valid:
                    maximum = number
                else:
                    logger.debug(f"Ignoring malformed integer filter token: {part}")

        return IntegerFilter(minimum=minimum, maximum=maximum, include_unknown=include_unknown)

    def _parse_bound(self, text: str) -> Tuple[bool, Optional[int]]:
        """Parse one bound. An empty bound is valid and clears the value."""
        if text == "":
            return True, None
        if not self._INTEGER.fullmatch(text):
            return False, None
        number = int(text)
        if number > MAX_INTEGER_FILTER_VALUE:
            return False, None
        return True, number

    def _decode_boolean(self, raw: str) -> BooleanFilter:
        value: Optional[bool] = None
        include_unknown = False

        for part in raw.split(SEPARATOR):
            if part == UNKNOWN_TOKEN:
                include_unknown = True
            elif part in ("1", "0"):
                value = part == "1"

        return BooleanFilter(value=value, include_unknown=include_unknown)

    def _decode_string(self, raw: str) -> StringFilter:
        include_unknown = False

        slot = self._OPTIONS_SLOT.fullmatch(raw)
        if slot:
            # Options other than "unknown" are dropped with the slot.
            include_unknown = slot.group("options") == UNKNOWN_TOKEN
            raw = slot.group("rest")
        else:
            suffix = self._UNKNOWN_SUFFIX.fullmatch(raw)
            if suffix and suffix.group("suffix") == UNKNOWN_TOKEN:
                include_unknown = True
                raw = suffix.group("rest")

        values = [
            part.replace(ESCAPED_SEPARATOR, SEPARATOR)
            for part in self._STRING_SPLIT.split(raw)
            if part
        ]
        return StringFilter(values=tuple(values), include_unknown=include_unknown)


def parse_filters(
    params: Mapping[str, str],
    fields: Iterable[FieldDescriptor],
    codec: Optional[FilterCodec] = None,
) -> Dict[str, FilterValue]:
    """Decode the raw filter parameter of every filterable field.

    Fields missing from ``params`` decode from the empty string. Text and
    url fields cannot be filtered and are skipped.

    Args:
        params: Raw request parameters
        fields: Filterable catalog fields
        codec: Codec to use

    Returns:
        Mapping of field name to decoded filter
    """
    codec = codec or FilterCodec()
    filters: Dict[str, FilterValue] = {}

    for descriptor in fields:
        if not descriptor.type.is_filterable:
            continue
        raw = params.get(descriptor.name, "") or ""
        filters[descriptor.name] = codec.decode(descriptor.type, str(raw))

    return filters


__all__ = [
    "FilterCodec",
    "parse_filters",
    "SEPARATOR",
    "UNKNOWN_TOKEN",
    "MIN_PREFIX",
    "MAX_PREFIX",
]
