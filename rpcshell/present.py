"""Presenters that turn response values into display text."""

from __future__ import annotations

import base64
import dataclasses
import json
import math
import re
import textwrap
import typing
from decimal import Decimal
from typing import Any, List, Optional, Protocol, Sequence


class PresentError(ValueError):
    """A value cannot be presented in the requested layout."""


class Presenter(Protocol):
    def format(self, value: Any) -> str: ...


def _is_struct(value: Any) -> bool:
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value == 0:
        return "-0" if math.copysign(1.0, value) < 0 else "0"
    dec = Decimal(repr(value)).normalize()
    exp = dec.adjusted()
    if exp < -4 or exp >= 6:
        sign, digits, _ = dec.as_tuple()
        mantissa = str(digits[0])
        if len(digits) > 1:
            mantissa += "." + "".join(str(d) for d in digits[1:])
        exp_sign = "-" if exp < 0 else "+"
        return f"{'-' if sign else ''}{mantissa}e{exp_sign}{abs(exp):02d}"
    return format(dec, "f")


def _sprint(value: Any) -> str:
    """Render a value the way a default value formatter shows it."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "<nil>"
    if isinstance(value, float):
        return _format_float(value)
    if isinstance(value, (bytes, bytearray)):
        return "[" + " ".join(str(b) for b in value) + "]"
    if _is_struct(value):
        return "{" + " ".join(_sprint(getattr(value, f.name)) for f in dataclasses.fields(value)) + "}"
    if isinstance(value, (list, tuple)):
        return "[" + " ".join(_sprint(v) for v in value) + "]"
    if isinstance(value, dict):
        items = sorted((_sprint(k), _sprint(v)) for k, v in value.items())
        return "map[" + " ".join(f"{k}:{v}" for k, v in items) + "]"
    return str(value)


def _to_jsonable(value: Any) -> Any:
    if _is_struct(value):
        return {f.name: _to_jsonable(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, dict):
        converted = {str(k): _to_jsonable(v) for k, v in value.items()}
        return {k: converted[k] for k in sorted(converted)}
    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(bytes(value)).decode("ascii")
    if isinstance(value, (list, tuple)):
        return [_to_jsonable(v) for v in value]
    return value


class JSONPresenter:
    """Formats values as JSON text, indented by ``indent``."""

    def __init__(self, indent: str = "") -> None:
        self.indent = indent

    def format(self, value: Any) -> str:
        try:
            return json.dumps(
                _to_jsonable(value), indent=self.indent, ensure_ascii=False, allow_nan=False
            )
        except (TypeError, ValueError) as exc:
            raise PresentError(f"failed to format v into JSON string: {exc}") from exc


def _has_name_tag(f: dataclasses.Field) -> bool:
    return bool(f.metadata.get("name"))


def _format_names(value: Any) -> str:
    if not _is_struct(value):
        raise PresentError("v should be a struct type")

    for f in dataclasses.fields(value):
        field_value = getattr(value, f.name)
        if not _has_name_tag(f):
            if _is_struct(field_value):
                try:
                    return _format_names(field_value)
                except PresentError:
                    pass
            continue

        if isinstance(field_value, (list, tuple)):
            rows: List[str] = []
            for item in field_value:
                if not _is_struct(item):
                    raise PresentError("v should have a slice of a struct")
                item_fields = dataclasses.fields(item)
                if not item_fields:
                    raise PresentError("struct should have at least 1 field")
                tagged = next((g for g in item_fields if _has_name_tag(g)), None)
                rows.append(_sprint(getattr(item, tagged.name)) if tagged else "")
            return "\n".join(rows)
        return _sprint(field_value)
    raise PresentError("invalid type")


class NamePresenter:
    """Formats the first field tagged with ``name`` metadata as a list of names."""

    def format(self, value: Any) -> str:
        return _format_names(value)


_NUMERIC = re.compile(r"^-?\d+\.?\d*$")
_MAX_CELL_WIDTH = 30


def _title(name: str) -> str:
    chars = list(name)
    for i, ch in enumerate(chars):
        if ch == "_":
            chars[i] = " "
        elif ch == ".":
            before = i != 0 and not (chars[i - 1].isdigit() or chars[i - 1].isspace())
            after = i != len(chars) - 1 and not (chars[i + 1].isdigit() or chars[i + 1].isspace())
            if before or after:
                chars[i] = " "
    titled = "".join(chars).strip()
    if not titled and name:
        titled = " "
    return titled.upper()


def _wrap(cell: str) -> List[str]:
    lines: List[str] = []
    for raw in cell.split("\n"):
        if len(raw) <= _MAX_CELL_WIDTH:
            lines.append(raw)
            continue
        words = raw.split()
        width = max([_MAX_CELL_WIDTH, *(len(w) for w in words)])
        lines.extend(textwrap.wrap(raw, width=width, break_long_words=False) or [""])
    return lines


def _center(text: str, width: int) -> str:
    gap = width - len(text)
    left = gap // 2
    return " " * left + text + " " * (gap - left)


def _align_cell(text: str, width: int) -> str:
    if _NUMERIC.match(text.strip()):
        return text.rjust(width)
    return text.ljust(width)


def render_table(header: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
    """Render ``rows`` under ``header`` as an ASCII table."""
    cols = max([len(header), *(len(r) for r in rows)])
    head_cells = [_wrap(_title(h)) for h in header] + [[""]] * (cols - len(header))
    body = [[_wrap(c) for c in r] + [[""]] * (cols - len(r)) for r in rows]

    widths = [0] * cols
    for cells in ([head_cells] if header else []) + body:
        for col, cell in enumerate(cells):
            widths[col] = max([widths[col], *(len(line) for line in cell)])

    border = "+" + "+".join("-" * (w + 2) for w in widths) + "+"

    def lines_of(cells: List[List[str]], align) -> List[str]:
        height = max(len(c) for c in cells) if cells else 0
        out = []
        for i in range(height):
            parts = [align(c[i] if i < len(c) else "", w) for c, w in zip(cells, widths)]
            out.append("| " + " | ".join(parts) + " |")
        return out

    out = [border]
    if header:
        out.extend(lines_of(head_cells, _center))
        out.append(border)
    for cells in body:
        out.extend(lines_of(cells, _align_cell))
    out.append(border)
    return "\n".join(out) + "\n"


def _element_type(field: dataclasses.Field, items: Sequence[Any]) -> Optional[type]:
    if items:
        return type(items[0])
    annotation = field.type
    if isinstance(annotation, str):
        return None
    args = typing.get_args(annotation)
    return args[0] if args and isinstance(args[0], type) else None


class TablePresenter:
    """Formats the first list field of a dataclass as a table."""

    def format(self, value: Any) -> str:
        if not _is_struct(value):
            raise PresentError("v should be a struct type")

        found = next(
            (f for f in dataclasses.fields(value)
             if isinstance(getattr(value, f.name), (list, tuple))),
            None,
        )
        if found is None:
            raise PresentError("the struct should have a slice field")
        items = list(getattr(value, found.name))

        elem_type = _element_type(found, items)
        if elem_type is not None and not dataclasses.is_dataclass(elem_type):
            raise PresentError("the slice element should be a struct type")
        columns = [
            f for f in (dataclasses.fields(elem_type) if elem_type else ())
            if f.metadata.get("table") != "-"
        ]
        keys = [f.metadata.get("table") or f.name.lower() for f in columns]

        rows = []
        for item in items:
            if not _is_struct(item):
                raise PresentError("the slice element should be a struct type")
            rows.append([_sprint(getattr(item, f.name)) for f in columns])
        return render_table(keys, rows)