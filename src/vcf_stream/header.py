"""VCF header parsing.

``MetaSchemaBuilder`` is fed header lines one at a time until the ``#CHROM``
column header, then produces an immutable ``VCFSchema``.
"""

import logging
import re
from enum import Enum
from types import MappingProxyType
from typing import Any

from .attributes import parse_attributes
from .errors import (
    InvalidFieldNumberError,
    InvalidFieldTypeError,
    MalformedHeaderError,
    MalformedMetaLineError,
    MissingRequiredKeyError,
    TypeMismatchError,
    UnexpectedMetadataEndError,
)
from .models import (
    AttributeValue,
    ExtraMeta,
    FieldCardinality,
    FieldNumber,
    FieldType,
    FilterDeclaration,
    FormatDeclaration,
    InfoDeclaration,
    VCFSchema,
)

logger = logging.getLogger(__name__)

FIXED_COLUMNS = ("#CHROM", "POS", "ID", "REF", "ALT", "QUAL", "FILTER", "INFO")
GENOTYPE_COLUMNS = FIXED_COLUMNS + ("FORMAT",)

META_LINE_PATTERN = re.compile(r"^##(.+?)=(.*)$", re.DOTALL)

FIELD_REQUIRED_KEYS = ("ID", "Number", "Type", "Description")
FILTER_REQUIRED_KEYS = ("ID", "Description")
STANDARD_KEYS = {"ID", "Number", "Type", "Description", "Source", "Version"}


class HeaderState(Enum):
    AWAITING_HEADER = "awaiting_header"
    TERMINATED = "terminated"


def _require(attrs: dict[str, AttributeValue], keys: tuple[str, ...], kind: str) -> None:
    for key in keys:
        if key not in attrs:
            raise MissingRequiredKeyError(key, kind)


def _get_string(attrs: dict[str, AttributeValue], key: str) -> str:
    value = attrs[key]
    if isinstance(value, str):
        return value
    kind = "nothing" if value is None else type(value).__name__
    raise TypeMismatchError(f"expected a string for '{key}', got {kind}.")


def _get_optional_string(attrs: dict[str, AttributeValue], key: str) -> str | None:
    if key not in attrs:
        return None
    return _get_string(attrs, key)


def _get_number(attrs: dict[str, AttributeValue]) -> FieldNumber:
    value = attrs["Number"]
    if isinstance(value, int) and value >= 0:
        return value
    if value == ".":
        return None
    for cardinality in FieldCardinality:
        if value == cardinality.value:
            return cardinality
    raise InvalidFieldNumberError(f"expected a number, got '{value}'.")


def _get_type(attrs: dict[str, AttributeValue]) -> FieldType:
    value = attrs["Type"]
    try:
        return FieldType(value)
    except ValueError:
        raise InvalidFieldTypeError(f"expected a type, got '{value}'.") from None


def _field_kwargs(attrs: dict[str, AttributeValue], kind: str) -> dict[str, Any]:
    _require(attrs, FIELD_REQUIRED_KEYS, kind)
    return {
        "id": _get_string(attrs, "ID"),
        "number": _get_number(attrs),
        "type": _get_type(attrs),
        "description": _get_string(attrs, "Description"),
        "source": _get_optional_string(attrs, "Source"),
        "version": _get_optional_string(attrs, "Version"),
        "extra": MappingProxyType({k: v for k, v in attrs.items() if k not in STANDARD_KEYS}),
    }


def info_from_attributes(attrs: dict[str, AttributeValue]) -> InfoDeclaration:
    """Build an INFO declaration from the parsed body of an ##INFO line."""
    return InfoDeclaration(**_field_kwargs(attrs, "INFO"))


def format_from_attributes(attrs: dict[str, AttributeValue]) -> FormatDeclaration:
    """Build a FORMAT declaration from the parsed body of a ##FORMAT line."""
    return FormatDeclaration(**_field_kwargs(attrs, "FORMAT"))


def filter_from_attributes(attrs: dict[str, AttributeValue]) -> FilterDeclaration:
    """Build a FILTER declaration; only ID and Description are required."""
    _require(attrs, FILTER_REQUIRED_KEYS, "FILTER")
    return FilterDeclaration(
        id=_get_string(attrs, "ID"),
        description=_get_string(attrs, "Description"),
        source=_get_optional_string(attrs, "Source"),
        version=_get_optional_string(attrs, "Version"),
        extra=MappingProxyType({k: v for k, v in attrs.items() if k not in STANDARD_KEYS}),
    )


def check_column_header(parts: list[str]) -> list[str]:
    """Validate the fixed columns of a split #CHROM line.

    Returns:
        Sample IDs (empty for the 8-column, sites-only layout).

    Raises:
        MalformedHeaderError: At the first column that does not match.
    """
    expected = FIXED_COLUMNS if len(parts) == len(FIXED_COLUMNS) else GENOTYPE_COLUMNS
    for position, name in enumerate(expected):
        actual = parts[position] if position < len(parts) else None
        if actual != name:
            raise MalformedHeaderError(position, name, actual)
    return parts[len(expected):]


class MetaSchemaBuilder:
    """State machine consuming header lines into a VCFSchema."""

    def __init__(self) -> None:
        self.state = HeaderState.AWAITING_HEADER
        self._info: dict[str, InfoDeclaration] = {}
        self._filters: dict[str, FilterDeclaration] = {}
        self._formats: dict[str, FormatDeclaration] = {}
        self._structured: dict[str, dict[str, dict[str, AttributeValue]]] = {}
        self._unstructured: dict[str, list[str]] = {}
        self._sample_ids: tuple[str, ...] | None = None

    @property
    def terminated(self) -> bool:
        return self.state is HeaderState.TERMINATED

    def consume_line(self, line: str) -> bool:
        """Consume one header line.

        Returns:
            True once the #CHROM column header has been consumed.
        """
        if self.terminated:
            raise RuntimeError("header already complete")
        if not line.startswith("#"):
            raise UnexpectedMetadataEndError("unexpected end of metadata.")

        line = line.strip()
        if line.startswith("##"):
            self._consume_meta_line(line)
            return False

        if line.startswith("#CHROM"):
            self._sample_ids = tuple(check_column_header(line.split("\t")))
            self.state = HeaderState.TERMINATED
            return True

        logger.debug("Ignoring header comment: %s", line)
        return False

    def _consume_meta_line(self, line: str) -> None:
        match = META_LINE_PATTERN.match(line)
        if not match:
            raise MalformedMetaLineError(f"malformed metadata line: {line}")
        key, value = match.group(1), match.group(2)

        if not value.startswith("<"):
            self._unstructured.setdefault(key, []).append(value.strip())
            return

        if not value.endswith(">"):
            raise MalformedMetaLineError(f"unterminated structured value for '{key}'.")
        body = value[1:-1]
        attrs = parse_attributes(body, ",")

        if key == "INFO":
            self._insert(self._info, info_from_attributes(attrs), key)
        elif key == "FILTER":
            self._insert(self._filters, filter_from_attributes(attrs), key)
        elif key == "FORMAT":
            self._insert(self._formats, format_from_attributes(attrs), key)
        else:
            index = body if attrs.get("ID") is None else str(attrs["ID"])
            self._structured.setdefault(key, {})[index] = attrs

    @staticmethod
    def _insert(target: dict, declaration, kind: str) -> None:
        if declaration.id in target:
            logger.warning("Duplicate %s declaration '%s'; keeping the last one", kind, declaration.id)
        target[declaration.id] = declaration

    def build(self) -> VCFSchema:
        """Return the finished schema; only valid after the #CHROM line."""
        if not self.terminated or self._sample_ids is None:
            raise RuntimeError("header is not complete")

        structured = MappingProxyType(
            {
                kind: MappingProxyType(
                    {index: MappingProxyType(attrs) for index, attrs in entries.items()}
                )
                for kind, entries in self._structured.items()
            }
        )
        unstructured = MappingProxyType(
            {key: tuple(values) for key, values in self._unstructured.items()}
        )
        return VCFSchema(
            info=MappingProxyType(dict(self._info)),
            filters=MappingProxyType(dict(self._filters)),
            formats=MappingProxyType(dict(self._formats)),
            sample_ids=self._sample_ids,
            extra=ExtraMeta(structured=structured, unstructured=unstructured),
        )
