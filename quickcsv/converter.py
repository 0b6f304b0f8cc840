"""Conversion between cell text and typed values."""

from __future__ import annotations

import locale
import math
import re
import struct
from enum import Enum

from quickcsv.params import ConverterParams

_SPACE = "[ \t\n\v\f\r]"
_INTEGER_RE = re.compile(rf"{_SPACE}*([+-]?)(\d+)")
_INF_NAN = r"inf(?:inity)?|nan(?:\([0-9A-Za-z_]*\))?"


class ValueKind(Enum):
    """The value types a cell can be read as."""

    INT = "int"
    LONG = "long"
    LONG_LONG = "long long"
    UNSIGNED = "unsigned"
    UNSIGNED_LONG = "unsigned long"
    UNSIGNED_LONG_LONG = "unsigned long long"
    FLOAT = "float"
    DOUBLE = "double"
    LONG_DOUBLE = "long double"
    CHAR = "char"
    STRING = "string"

    @classmethod
    def of(cls, kind: ValueKind | type) -> ValueKind:
        """Return the kind for a ValueKind or one of the types int, float and str."""
        if isinstance(kind, ValueKind):
            return kind
        mapping = {int: cls.LONG_LONG, float: cls.DOUBLE, str: cls.STRING}
        if isinstance(kind, type) and kind in mapping:
            return mapping[kind]
        raise NoConverterError()

    @property
    def is_integer(self) -> bool:
        return self in _INTEGER_BITS

    @property
    def is_float(self) -> bool:
        return self in (ValueKind.FLOAT, ValueKind.DOUBLE, ValueKind.LONG_DOUBLE)


# (bits, signed) of each integer kind.
_INTEGER_BITS = {
    ValueKind.INT: (32, True),
    ValueKind.LONG: (64, True),
    ValueKind.LONG_LONG: (64, True),
    ValueKind.UNSIGNED: (32, False),
    ValueKind.UNSIGNED_LONG: (64, False),
    ValueKind.UNSIGNED_LONG_LONG: (64, False),
}


class NoConverterError(TypeError):
    """Raised when a value type has no conversion to or from text."""

    def __init__(self, message: str = "unsupported conversion datatype") -> None:
        super().__init__(message)


def _wrap(value: int, bits: int, signed: bool) -> int:
    value &= (1 << bits) - 1
    if signed and value >= 1 << (bits - 1):
        value -= 1 << bits
    return value


def _to_float32(value: float) -> float:
    return struct.unpack("f", struct.pack("f", value))[0]


def _parse_integer(text: str, kind: ValueKind) -> int:
    match = _INTEGER_RE.match(text)
    if match is None:
        raise ValueError(f"no integer conversion: {text!r}")
    sign, digits = match.groups()
    magnitude = int(digits)
    bits, signed = _INTEGER_BITS[kind]
    if signed:
        value = -magnitude if sign == "-" else magnitude
        # the parse itself is done in the widest signed type
        if not -(1 << 63) <= value < 1 << 63:
            raise OverflowError(f"integer out of range: {text!r}")
        if not -(1 << (bits - 1)) <= value < 1 << (bits - 1):
            raise OverflowError(f"integer out of range: {text!r}")
        return value
    if magnitude >= 1 << 64:
        raise OverflowError(f"integer out of range: {text!r}")
    value = (-magnitude if sign == "-" else magnitude) % (1 << 64)
    return _wrap(value, bits, False)


def _locale_float_pattern(point: str) -> re.Pattern[str]:
    dp = re.escape(point)
    hexd = "[0-9a-fA-F]"
    return re.compile(
        rf"{_SPACE}*([+-]?(?:"
        rf"0[xX](?:{hexd}+(?:{dp}{hexd}*)?|{dp}{hexd}+)(?:[pP][+-]?\d+)?"
        rf"|{_INF_NAN}"
        rf"|(?:\d+(?:{dp}\d*)?|{dp}\d+)(?:[eE][+-]?\d+)?"
        rf"))",
        re.IGNORECASE,
    )


_STREAM_FLOAT_RE = re.compile(
    rf"{_SPACE}*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)"
)


def _parse_locale_float(text: str) -> float:
    point = locale.localeconv()["decimal_point"] or "."
    match = _locale_float_pattern(point).match(text)
    if match is None:
        raise ValueError(f"no floating-point conversion: {text!r}")
    number = match.group(1)
    if point != ".":
        number = number.replace(point, ".")
    body = number.lstrip("+-")
    if body[:2].lower() == "0x":
        value = float.fromhex(number)
    else:
        value = float(number.split("(")[0])
        if math.isinf(value) and not body[:1].lower() == "i":
            raise OverflowError(f"floating-point value out of range: {text!r}")
    return value


def _parse_stream_float(text: str) -> float:
    match = _STREAM_FLOAT_RE.fullmatch(text)
    if match is None:
        raise ValueError(f"no floating-point conversion: {text!r}")
    value = float(match.group(1))
    if math.isinf(value):
        raise ValueError(f"no floating-point conversion: {text!r}")
    return value


class Converter:
    """Converts between cell text and values according to ConverterParams."""

    def __init__(self, params: ConverterParams | None = None) -> None:
        self.params = params if params is not None else ConverterParams()

    def to_str(self, value: object) -> str:
        """Return the text representation of an int, float or str value."""
        if isinstance(value, str):
            return value
        if isinstance(value, bool):
            raise NoConverterError()
        if isinstance(value, int):
            return str(value)
        if isinstance(value, float):
            return format(value, ".6g")
        raise NoConverterError()

    def to_val(self, text: str, kind: ValueKind | type = ValueKind.STRING) -> int | float | str:
        """Convert cell text to a value of the given kind."""
        kind = ValueKind.of(kind)
        if kind is ValueKind.STRING:
            return text
        if kind is ValueKind.CHAR:
            return text[0] if text else "\0"
        if kind.is_integer:
            try:
                return _parse_integer(text, kind)
            except (ValueError, OverflowError):
                if not self.params.has_default_converter:
                    raise
                bits, signed = _INTEGER_BITS[kind]
                return _wrap(int(self.params.default_integer), bits, signed)
        try:
            return self._parse_float(text, kind)
        except (ValueError, OverflowError):
            if not self.params.has_default_converter:
                raise
            default = float(self.params.default_float)
            return _to_float32(default) if kind is ValueKind.FLOAT else default

    def _parse_float(self, text: str, kind: ValueKind) -> float:
        if self.params.numeric_locale:
            value = _parse_locale_float(text)
            if kind is ValueKind.FLOAT:
                try:
                    return _to_float32(value)
                except OverflowError:
                    raise OverflowError(f"floating-point value out of range: {text!r}") from None
            return value
        value = _parse_stream_float(text)
        if kind is ValueKind.FLOAT:
            try:
                return _to_float32(value)
            except OverflowError:
                raise ValueError(f"no floating-point conversion: {text!r}") from None
        return value