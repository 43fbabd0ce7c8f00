"""vcf-stream: incremental, schema-driven VCF parsing."""

__version__ = "0.1.0"

from .attributes import coerce_number, format_attributes, parse_attributes  # noqa: E402
from .config import ParserConfig, load_config  # noqa: E402
from .errors import (  # noqa: E402
    AnnotationArityMismatchError,
    DeclarationError,
    FieldCountMismatchError,
    GenotypeArityMismatchError,
    InvalidFieldNumberError,
    InvalidFieldTypeError,
    InvalidPositionError,
    MalformedAttributeError,
    MalformedHeaderError,
    MalformedMetaLineError,
    MissingFormatSpecError,
    MissingRequiredKeyError,
    TypeMismatchError,
    UnexpectedEndOfInputError,
    UnexpectedMetadataEndError,
    UnknownFieldError,
    UnterminatedQuotedValueError,
    VCFError,
    VEPError,
)
from .header import MetaSchemaBuilder  # noqa: E402
from .models import (  # noqa: E402
    FieldCardinality,
    FieldType,
    FilterDeclaration,
    FormatDeclaration,
    InfoDeclaration,
    VCFRecord,
    VCFSchema,
)
from .parser import AsyncVCFReader, VCFReader  # noqa: E402
from .records import DataLineDecoder  # noqa: E402
from .sources import iter_lines, open_vcf, stream_url_lines  # noqa: E402
from .vep import build_vep_parser  # noqa: E402

__all__ = [
    "AnnotationArityMismatchError",
    "AsyncVCFReader",
    "DataLineDecoder",
    "DeclarationError",
    "FieldCardinality",
    "FieldCountMismatchError",
    "FieldType",
    "FilterDeclaration",
    "FormatDeclaration",
    "GenotypeArityMismatchError",
    "InfoDeclaration",
    "InvalidFieldNumberError",
    "InvalidFieldTypeError",
    "InvalidPositionError",
    "MalformedAttributeError",
    "MalformedHeaderError",
    "MalformedMetaLineError",
    "MetaSchemaBuilder",
    "MissingFormatSpecError",
    "MissingRequiredKeyError",
    "ParserConfig",
    "TypeMismatchError",
    "UnexpectedEndOfInputError",
    "UnexpectedMetadataEndError",
    "UnknownFieldError",
    "UnterminatedQuotedValueError",
    "VCFError",
    "VCFReader",
    "VCFRecord",
    "VCFSchema",
    "VEPError",
    "__version__",
    "build_vep_parser",
    "coerce_number",
    "format_attributes",
    "iter_lines",
    "load_config",
    "open_vcf",
    "parse_attributes",
    "stream_url_lines",
]
