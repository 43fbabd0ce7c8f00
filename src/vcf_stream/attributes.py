"""Scanner for VCF attribute lists.

The same grammar is used for the body of structured header lines
(``ID=DP,Number=1,Type=Integer,Description="Total Depth"``, separator ``,``)
and for the INFO column of data lines (``DP=10;AF=0.5;DB``, separator ``;``):

- ``key`` on its own maps to None (a flag)
- ``key=value`` maps to a number when ``value`` is a finite decimal literal,
  otherwise to the raw string
- ``key="value"`` always maps to the string, with ``\\"`` and ``\\\\`` unescaped
"""

import math
import re
from collections.abc import Mapping

from .errors import MalformedAttributeError, UnterminatedQuotedValueError
from .models import AttributeValue

INT_PATTERN = re.compile(r"[+-]?[0-9]+")
FLOAT_PATTERN = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def coerce_number(text: str) -> int | float | str:
    """Return ``text`` as an int or finite float if it is one, else unchanged."""
    if INT_PATTERN.fullmatch(text):
        return int(text)
    if FLOAT_PATTERN.fullmatch(text):
        value = float(text)
        if math.isfinite(value):
            return value
    return text


def parse_attributes(text: str, sep: str) -> dict[str, AttributeValue]:
    """Parse a ``sep``-delimited attribute list into an ordered dict.

    Args:
        text: The attribute list, without enclosing ``<`` ``>``.
        sep: Single separator character, ``,`` or ``;``.

    Returns:
        Mapping of key to value in order of appearance. Repeated keys keep
        the last value.

    Raises:
        UnterminatedQuotedValueError: If a quoted value has no closing quote.
        MalformedAttributeError: If a quoted value is followed by anything
            other than the separator.
    """
    result: dict[str, AttributeValue] = {}
    i = 0
    n = len(text)

    while i < n:
        key_start = i
        while i < n and text[i] != "=" and text[i] != sep:
            i += 1
        key = text[key_start:i]

        if i == n or text[i] == sep:
            result[key] = None
            i += 1
            continue

        i += 1
        if i < n and text[i] == '"':
            value, i = _read_quoted(text, i + 1, key)
            if i < n and text[i] != sep:
                raise MalformedAttributeError(
                    f"unexpected '{text[i]}' after quoted value for '{key}'."
                )
            result[key] = value
        else:
            value_start = i
            while i < n and text[i] != sep:
                i += 1
            result[key] = coerce_number(text[value_start:i])

        if i < n and text[i] == sep:
            i += 1

    return result


def _read_quoted(text: str, start: int, key: str) -> tuple[str, int]:
    """Read a quoted value whose opening quote precedes ``start``.

    Returns the unescaped value and the index just past the closing quote.
    """
    chars: list[str] = []
    i = start
    n = len(text)
    while i < n:
        char = text[i]
        if char == "\\" and i + 1 < n and text[i + 1] in ('"', "\\"):
            chars.append(text[i + 1])
            i += 2
            continue
        if char == '"':
            return "".join(chars), i + 1
        chars.append(char)
        i += 1
    raise UnterminatedQuotedValueError(key)


def format_attributes(attributes: Mapping[str, AttributeValue], sep: str) -> str:
    """Render a mapping back into attribute-list text.

    Strings are quoted whenever they would otherwise be read back as a number
    or would be cut short by the separator, so that parsing the output gives
    back an equal mapping.
    """
    parts = []
    for key, value in attributes.items():
        if "=" in key or sep in key or key.startswith('"'):
            raise ValueError(f"attribute key cannot be rendered: {key!r}")
        if value is None:
            parts.append(key)
        elif isinstance(value, str):
            parts.append(f"{key}={_format_string(value, sep)}")
        else:
            parts.append(f"{key}={value!r}")
    return sep.join(parts)


def _format_string(value: str, sep: str) -> str:
    needs_quotes = (
        sep in value
        or value.startswith('"')
        or not isinstance(coerce_number(value), str)
    )
    if not needs_quotes:
        return value
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'
