"""A curl-like response formatter."""

from __future__ import annotations

import json
from typing import Any, Dict, List, TextIO

from .descriptors import DynamicMessage
from .format import Metadata, Status, StatusCode

_TYPE_URL_PREFIX = "type.googleapis.com/"


def message_to_dict(message: Any, emit_defaults: bool) -> Dict[str, Any]:
    if isinstance(message, DynamicMessage):
        return message.to_dict(emit_defaults)
    if isinstance(message, dict):
        return dict(message)
    raise TypeError(f"cannot format {type(message).__name__} as a message")


def message_as_any(message: DynamicMessage, emit_defaults: bool) -> Dict[str, Any]:
    return {"@type": _TYPE_URL_PREFIX + message.descriptor.fully_qualified_name,
            **message.to_dict(emit_defaults)}


def _metadata_lines(md: Metadata) -> List[str]:
    return sorted(f"{k}: {v}" for k, values in md.items() for v in values)


class CurlResponseFormatter:
    """Writes headers, messages, trailers and status as curl-like text."""

    def __init__(self, stream: TextIO, emit_defaults: bool = False) -> None:
        self._w = stream
        self._emit_defaults = emit_defaults
        self._wrote_header = self._wrote_message = self._wrote_trailer = False

    def format_header(self, header: Metadata) -> None:
        self._w.write("\n".join(_metadata_lines(header)) + "\n")
        self._wrote_header = True

    def format_message(self, message: Any) -> None:
        if self._wrote_header:
            self._w.write("\n")
        m = message_to_dict(message, self._emit_defaults)
        self._w.write(json.dumps(m, indent="  ", sort_keys=True, ensure_ascii=False) + "\n")
        self._wrote_message = True

    def format_trailer(self, trailer: Metadata) -> None:
        if not trailer:
            return
        if self._wrote_header or self._wrote_message:
            self._w.write("\n")
        self._w.write("\n".join(_metadata_lines(trailer)) + "\n")
        self._wrote_trailer = True

    def format_status(self, status: Status) -> None:
        if self._wrote_header or self._wrote_message or self._wrote_trailer:
            self._w.write("\n")
        code = StatusCode(status.code)
        self._w.write(f"code: {code}\nnumber: {int(code)}\nmessage: "
                      f"{json.dumps(status.message, ensure_ascii=False)}\n")
        if status.details:
            details = []
            for d in status.details:
                if not isinstance(d, DynamicMessage):
                    continue
                text = json.dumps(message_as_any(d, self._emit_defaults),
                                  indent="", sort_keys=True, ensure_ascii=False)
                details.append("  " + text.replace("\n", "").replace(",", ", "))
            self._w.write("details: \n" + "\n".join(details) + "\n")
        if code != StatusCode.OK:
            self._w.write("\n")

    def done(self) -> None:
        pass