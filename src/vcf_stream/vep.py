"""Parsers for VEP-style pipe-delimited annotations (CSQ, ANN).

The layout of each annotation is declared in free text inside the INFO
declaration, e.g.::

    ##INFO=<ID=CSQ,Number=.,Type=String,Description="Consequence annotations
    from Ensembl VEP. Format: Allele|Consequence|IMPACT|SYMBOL">

and each record carries a comma-separated list of annotations whose
components are separated by ``|``.
"""

import logging
from collections.abc import Callable

from .attributes import coerce_number
from .errors import (
    AnnotationArityMismatchError,
    MissingFormatSpecError,
    TypeMismatchError,
    UnknownFieldError,
)
from .models import AttributeValue, VCFRecord, VCFSchema

logger = logging.getLogger(__name__)

FORMAT_MARKER = "Format: "

VEPAnnotation = dict[str, AttributeValue]
VEPParser = Callable[[VCFRecord], list[VEPAnnotation] | None]


def annotation_fields(schema: VCFSchema, field: str = "ANN") -> tuple[str, ...]:
    """Return the component names declared for a VEP INFO field."""
    if field not in schema.info:
        raise UnknownFieldError(field)
    description = schema.info[field].description
    start = description.find(FORMAT_MARKER)
    if start < 0:
        raise MissingFormatSpecError(field)
    return tuple(name.strip() for name in description[start + len(FORMAT_MARKER):].split("|"))


def build_vep_parser(schema: VCFSchema, field: str = "ANN", strict: bool = True) -> VEPParser:
    """Build a function decoding the VEP annotations of one INFO field.

    Args:
        schema: Schema whose INFO declarations describe ``field``.
        field: INFO field holding the annotations, usually ANN or CSQ.
        strict: If False, annotations with the wrong number of components
            are decoded as far as they go and a warning is logged.

    Returns:
        Function taking a record and returning its annotations, or None if
        the record does not carry ``field``.

    Raises:
        UnknownFieldError: If ``field`` is not declared in the INFO header.
        MissingFormatSpecError: If its description has no ``Format:`` part.
    """
    names = annotation_fields(schema, field)

    def parse(record: VCFRecord) -> list[VEPAnnotation] | None:
        if field not in record.info:
            return None

        value = record.info[field]
        if not isinstance(value, str):
            if strict:
                raise TypeMismatchError(f"INFO field '{field}' was not a string.")
            logger.warning("INFO field %s was not a string", field)
            value = "" if value is None else str(value)

        annotations = []
        for element in value.split(","):
            components = element.split("|")
            if len(components) != len(names):
                if strict:
                    raise AnnotationArityMismatchError(len(names), len(components))
                logger.warning(
                    "VEP format expects %d components, but the value has %d",
                    len(names),
                    len(components),
                )
            pairs = zip(names, components, strict=False)
            annotations.append({name: coerce_number(component) for name, component in pairs})
        return annotations

    return parse
