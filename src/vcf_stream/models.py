"""Data models for VCF schemas and records."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

AttributeValue = int | float | str | None


def _empty_mapping() -> Mapping:
    return MappingProxyType({})


class FieldType(str, Enum):
    """Value type of an INFO or FORMAT field."""

    INTEGER = "Integer"
    FLOAT = "Float"
    FLAG = "Flag"
    CHARACTER = "Character"
    STRING = "String"


class FieldCardinality(str, Enum):
    """Allele-dependent Number values."""

    PER_ALT = "A"
    PER_ALLELE = "R"
    PER_GENOTYPE = "G"


FieldNumber = int | FieldCardinality | None


@dataclass(frozen=True)
class FieldDeclaration:
    """Shape shared by INFO and FORMAT declarations.

    ``number`` is None for ``Number=.`` (unknown or variable count). Any
    attributes beyond the standard ones (e.g. bcftools' ``IDX``) are kept in
    ``extra``.
    """

    id: str
    number: FieldNumber
    type: FieldType
    description: str
    source: str | None = None
    version: str | None = None
    extra: Mapping[str, AttributeValue] = field(default_factory=_empty_mapping)


@dataclass(frozen=True)
class InfoDeclaration(FieldDeclaration):
    """A ##INFO=<...> declaration."""


@dataclass(frozen=True)
class FormatDeclaration(FieldDeclaration):
    """A ##FORMAT=<...> declaration."""


@dataclass(frozen=True)
class FilterDeclaration:
    """A ##FILTER=<...> declaration."""

    id: str
    description: str
    source: str | None = None
    version: str | None = None
    extra: Mapping[str, AttributeValue] = field(default_factory=_empty_mapping)


@dataclass(frozen=True)
class ExtraMeta:
    """Header lines that are not INFO, FILTER or FORMAT declarations."""

    structured: Mapping[str, Mapping[str, Mapping[str, AttributeValue]]] = field(
        default_factory=_empty_mapping
    )
    unstructured: Mapping[str, tuple[str, ...]] = field(default_factory=_empty_mapping)


@dataclass(frozen=True)
class VCFSchema:
    """Everything learned from the header of one VCF source."""

    info: Mapping[str, InfoDeclaration]
    filters: Mapping[str, FilterDeclaration]
    formats: Mapping[str, FormatDeclaration]
    sample_ids: tuple[str, ...]
    extra: ExtraMeta = field(default_factory=ExtraMeta)

    @property
    def has_genotypes(self) -> bool:
        return len(self.sample_ids) > 0

    @property
    def data_column_count(self) -> int:
        """Number of tab-separated columns every data line must have."""
        if not self.has_genotypes:
            return 8
        return 9 + len(self.sample_ids)

    @property
    def file_format(self) -> str | None:
        values = self.extra.unstructured.get("fileformat")
        return values[0] if values else None


@dataclass
class VCFRecord:
    """One decoded data line.

    ALT, QUAL and FILTER are kept as the raw column text. ``genotypes`` maps
    each sample ID to its FORMAT key -> raw sub-value mapping and is None when
    the source has no sample columns.
    """

    chrom: str
    pos: int
    variant_id: str
    ref: str
    alt: str
    qual: str
    filter: str
    info: dict[str, AttributeValue]
    format: str | None = None
    genotypes: dict[str, dict[str, str | None]] | None = None

    @property
    def alts(self) -> list[str]:
        if self.alt == ".":
            return []
        return self.alt.split(",")

    @property
    def filters(self) -> list[str]:
        if self.filter == ".":
            return []
        return self.filter.split(";")

    @property
    def format_keys(self) -> list[str]:
        if self.format is None:
            return []
        return self.format.split(":")
