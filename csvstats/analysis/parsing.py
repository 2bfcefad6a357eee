"""Line/field splitting and the numeric literal grammar used by the analyzer."""

import re

FIELD_SEPARATOR = ","

_LINE_BREAK = re.compile(r"\r\n|\r|\n")

# Optional sign, digits with an optional fraction (or a bare fraction),
# optional exponent. ASCII digits only: no grouping separators, no NaN/Infinity.
_DECIMAL = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")

_BOOLEAN_LITERALS = ("true", "false")


def split_rows(text: str) -> list[list[str]]:
    """Split trimmed CSV text into rows of raw (untrimmed) fields.

    Empty fields are kept, so ``"a,,c"`` and ``"a,b,"`` both give three fields.
    """
    return [line.split(FIELD_SEPARATOR) for line in _LINE_BREAK.split(text.strip())]


def is_null(value: str | None) -> bool:
    return value is None or not value.strip()


def is_decimal(value: str) -> bool:
    return _DECIMAL.fullmatch(value) is not None


def is_integer(value: str) -> bool:
    if "." in value or "e" in value or "E" in value:
        return False
    return is_decimal(value)


def is_boolean(value: str) -> bool:
    return value.lower() in _BOOLEAN_LITERALS
