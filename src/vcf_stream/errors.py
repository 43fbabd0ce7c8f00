"""Exceptions raised while parsing VCF streams."""


class VCFError(Exception):
    """Base class for all VCF parsing errors.

    Errors raised while a line is being handled are stamped with the source
    name and the 1-based line number, so ``str(exc)`` reads
    ``reading <source>:<line>: <message>``.
    """

    def __init__(self, message: str, source_name: str | None = None, line_num: int | None = None):
        super().__init__(message)
        self.message = message
        self.source_name = source_name
        self.line_num = line_num

    def locate(self, source_name: str, line_num: int) -> None:
        """Attach a source location unless one is already present."""
        if self.source_name is None:
            self.source_name = source_name
            self.line_num = line_num

    def __str__(self) -> str:
        if self.source_name is None:
            return self.message
        return f"reading {self.source_name}:{self.line_num}: {self.message}"


class UnexpectedMetadataEndError(VCFError):
    """A non-header line appeared before the #CHROM column header."""

    pass


class MalformedMetaLineError(VCFError):
    """A ## line does not have the key=value shape."""

    pass


class MalformedHeaderError(VCFError):
    """The #CHROM column header does not list the fixed columns in order."""

    def __init__(self, position: int, expected: str, actual: str | None):
        shown = actual if actual is not None else "<missing>"
        super().__init__(
            f"malformed header - expected {expected} but got {shown} at column {position}."
        )
        self.position = position
        self.expected = expected
        self.actual = actual


class MalformedAttributeError(VCFError):
    """An attribute list (key=value,...) could not be scanned."""

    pass


class UnterminatedQuotedValueError(MalformedAttributeError):
    """A quoted attribute value has no closing quote."""

    def __init__(self, key: str):
        super().__init__(f"unterminated string value for '{key}'.")
        self.key = key


class DeclarationError(VCFError):
    """An INFO, FILTER or FORMAT declaration is invalid."""

    pass


class MissingRequiredKeyError(DeclarationError):
    def __init__(self, key: str, kind: str):
        super().__init__(f"required key '{key}' not found in {kind} declaration.")
        self.key = key
        self.kind = kind


class TypeMismatchError(VCFError):
    """A value has the wrong kind (e.g. a number where a string is required)."""

    pass


class InvalidFieldNumberError(DeclarationError):
    pass


class InvalidFieldTypeError(DeclarationError):
    pass


class FieldCountMismatchError(VCFError):
    """A data line has the wrong number of tab-separated columns."""

    def __init__(self, expected: int, actual: int):
        super().__init__(f"expected {expected} fields, got {actual}.")
        self.expected = expected
        self.actual = actual


class InvalidPositionError(VCFError):
    """The POS column is not a non-negative integer."""

    pass


class GenotypeArityMismatchError(VCFError):
    """A sample column has more sub-values than the FORMAT column has keys."""

    pass


class UnexpectedEndOfInputError(VCFError):
    """The line source ended before the #CHROM column header."""

    pass


class VEPError(VCFError):
    """Error building or applying a VEP annotation parser."""

    pass


class UnknownFieldError(VEPError):
    def __init__(self, field: str):
        super().__init__(f"cannot find VEP annotation '{field}'.")
        self.field = field


class MissingFormatSpecError(VEPError):
    def __init__(self, field: str):
        super().__init__(
            f"cannot find format specification for VEP annotations in INFO declaration of '{field}'."
        )
        self.field = field


class AnnotationArityMismatchError(VEPError):
    def __init__(self, expected: int, actual: int):
        super().__init__(
            f"VEP format expects {expected} components, but the value has {actual}."
        )
        self.expected = expected
        self.actual = actual
