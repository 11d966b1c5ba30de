"""Conversion of typed text input into field values."""

from __future__ import annotations

import enum
import math
import re
import string
import struct
from typing import Any, Dict, Union


class FieldType(enum.IntEnum):
    """Protocol Buffers field types."""

    DOUBLE = 1
    FLOAT = 2
    INT64 = 3
    UINT64 = 4
    INT32 = 5
    FIXED64 = 6
    FIXED32 = 7
    BOOL = 8
    STRING = 9
    GROUP = 10
    MESSAGE = 11
    BYTES = 12
    UINT32 = 13
    ENUM = 14
    SFIXED32 = 15
    SFIXED64 = 16
    SINT32 = 17
    SINT64 = 18

    def __str__(self) -> str:
        return f"TYPE_{self.name}"


class ConversionError(ValueError):
    """Input text cannot be converted to the requested field type."""


_DEFAULTS: Dict[FieldType, Any] = {
    FieldType.DOUBLE: 0.0,
    FieldType.FLOAT: 0.0,
    FieldType.INT64: 0,
    FieldType.UINT64: 0,
    FieldType.INT32: 0,
    FieldType.UINT32: 0,
    FieldType.FIXED64: 0,
    FieldType.FIXED32: 0,
    FieldType.BOOL: False,
    FieldType.STRING: "",
    FieldType.BYTES: b"",
    FieldType.SFIXED64: 0,
    FieldType.SFIXED32: 0,
    FieldType.SINT64: 0,
    FieldType.SINT32: 0,
}

_INT_RE = re.compile(r"[+-]?[0-9]+")
_UINT_RE = re.compile(r"[0-9]+")
_DEC_FLOAT_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_HEX_FLOAT_RE = re.compile(
    r"[+-]?0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)[pP][+-]?[0-9]+"
)
_SPECIAL_FLOAT_RE = re.compile(r"[+-]?(?:inf|infinity)|nan", re.IGNORECASE)

_TRUE = {"1", "t", "T", "TRUE", "true", "True"}
_FALSE = {"0", "f", "F", "FALSE", "false", "False"}

_SIMPLE_ESCAPES = {
    "a": 0x07,
    "b": 0x08,
    "f": 0x0C,
    "n": 0x0A,
    "r": 0x0D,
    "t": 0x09,
    "v": 0x0B,
    "\\": 0x5C,
}
_HEX_ESCAPE_LENGTHS = {"x": 2, "u": 4, "U": 8}
_OCTAL_DIGITS = "01234567"


def _parse_float(text: str, bits: int) -> float:
    if _SPECIAL_FLOAT_RE.fullmatch(text):
        return float(text)
    if _HEX_FLOAT_RE.fullmatch(text):
        value = float.fromhex(text)
    elif _DEC_FLOAT_RE.fullmatch(text):
        value = float(text)
    else:
        raise ValueError("invalid syntax")
    if math.isinf(value):
        raise ValueError("value out of range")
    if bits == 32:
        try:
            value = struct.unpack("<f", struct.pack("<f", value))[0]
        except OverflowError as exc:
            raise ValueError("value out of range") from exc
    return value


def _parse_int(text: str, bits: int) -> int:
    if not _INT_RE.fullmatch(text):
        raise ValueError("invalid syntax")
    value = int(text)
    limit = 1 << (bits - 1)
    if not -limit <= value < limit:
        raise ValueError("value out of range")
    return value


def _parse_uint(text: str, bits: int) -> int:
    if not _UINT_RE.fullmatch(text):
        raise ValueError("invalid syntax")
    value = int(text)
    if value >= 1 << bits:
        raise ValueError("value out of range")
    return value


def _parse_bool(text: str) -> bool:
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValueError("invalid syntax")


def unquote(text: str) -> bytes:
    """Interpret a double-quoted, single-quoted or back-quoted literal.

    Escape sequences are resolved and the result is returned as bytes, so
    that escapes such as ``\\xff`` can produce arbitrary byte values.
    """
    if len(text) < 2 or text[0] != text[-1]:
        raise ValueError("invalid syntax")
    quote = text[0]
    body = text[1:-1]

    if quote == "`":
        if "`" in body:
            raise ValueError("invalid syntax")
        return body.replace("\r", "").encode("utf-8")
    if quote not in "\"'":
        raise ValueError("invalid syntax")
    if "\n" in body:
        raise ValueError("invalid syntax")

    out = bytearray()
    units = 0
    i = 0
    while i < len(body):
        ch = body[i]
        units += 1
        if ch == quote:
            raise ValueError("invalid syntax")
        if ch != "\\":
            out += ch.encode("utf-8")
            i += 1
            continue
        if i + 1 >= len(body):
            raise ValueError("invalid syntax")
        esc = body[i + 1]
        i += 2
        if esc in _SIMPLE_ESCAPES:
            out.append(_SIMPLE_ESCAPES[esc])
        elif esc == quote:
            out.append(ord(quote))
        elif esc in _HEX_ESCAPE_LENGTHS:
            length = _HEX_ESCAPE_LENGTHS[esc]
            digits = body[i : i + length]
            if len(digits) != length or not all(d in string.hexdigits for d in digits):
                raise ValueError("invalid syntax")
            i += length
            value = int(digits, 16)
            if esc == "x":
                out.append(value)
            else:
                if 0xD800 <= value <= 0xDFFF or value > 0x10FFFF:
                    raise ValueError("invalid syntax")
                out += chr(value).encode("utf-8")
        elif esc in _OCTAL_DIGITS:
            digits = body[i - 1 : i + 2]
            if len(digits) != 3 or not all(d in _OCTAL_DIGITS for d in digits):
                raise ValueError("invalid syntax")
            value = int(digits, 8)
            if value > 0xFF:
                raise ValueError("invalid syntax")
            out.append(value)
            i += 2
        else:
            raise ValueError("invalid syntax")

    if quote == "'" and units != 1:
        raise ValueError("invalid syntax")
    return bytes(out)


def _convert(text: str, field_type: FieldType) -> Any:
    if field_type is FieldType.DOUBLE:
        return _parse_float(text, 64)
    if field_type is FieldType.FLOAT:
        return _parse_float(text, 32)
    if field_type in (FieldType.INT64, FieldType.SFIXED64, FieldType.SINT64):
        return _parse_int(text, 64)
    if field_type in (FieldType.INT32, FieldType.SFIXED32, FieldType.SINT32):
        return _parse_int(text, 32)
    if field_type in (FieldType.UINT64, FieldType.FIXED64):
        return _parse_uint(text, 64)
    if field_type in (FieldType.UINT32, FieldType.FIXED32):
        return _parse_uint(text, 32)
    if field_type is FieldType.BOOL:
        return _parse_bool(text)
    if field_type is FieldType.STRING:
        return text
    if field_type is FieldType.BYTES:
        return unquote(f'"{text}"')
    raise ConversionError(f"invalid type: {field_type}")


def convert_value(text: str, field_type: Union[FieldType, int]) -> Any:
    """Convert input ``text`` to a value of ``field_type``.

    Empty input yields the type's default value where one exists.
    """
    try:
        ftype = FieldType(field_type)
    except ValueError:
        raise ConversionError(f"invalid type: {field_type}") from None

    if text == "" and ftype in _DEFAULTS:
        return _DEFAULTS[ftype]

    try:
        return _convert(text, ftype)
    except ConversionError:
        raise
    except ValueError as exc:
        raise ConversionError(
            f"failed to convert an inputted value '{text}' to type {ftype}: {exc}"
        ) from exc