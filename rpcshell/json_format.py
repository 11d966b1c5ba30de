"""A formatter that writes the whole response as one JSON object."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, TextIO

from .curl_format import message_as_any, message_to_dict
from .descriptors import DynamicMessage
from .format import Metadata, Status, StatusCode


def _sorted(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {k: _sorted(obj[k]) for k in sorted(obj)}
    if isinstance(obj, (list, tuple)):
        return [_sorted(v) for v in obj]
    return obj


class JSONResponseFormatter:
    """Collects the response and writes it as JSON when done."""

    def __init__(self, stream: TextIO, emit_defaults: bool = False) -> None:
        self._w = stream
        self._emit_defaults = emit_defaults
        self._status: Dict[str, Any] = {"code": "", "number": 0, "message": ""}
        self._header: Optional[Metadata] = None
        self._has_header = False
        self._messages: List[Dict[str, Any]] = []
        self._trailer: Optional[Metadata] = None
        self._has_trailer = False

    def format_header(self, header: Metadata) -> None:
        self._header, self._has_header = header, True

    def format_message(self, message: Any) -> None:
        self._messages.append(message_to_dict(message, self._emit_defaults))

    def format_trailer(self, trailer: Metadata) -> None:
        self._trailer, self._has_trailer = trailer, True

    def format_status(self, status: Status) -> None:
        code = StatusCode(status.code)
        self._status = {"code": str(code), "number": int(code), "message": status.message}
        details = [message_as_any(d, self._emit_defaults)
                   for d in status.details if isinstance(d, DynamicMessage)]
        if details:
            self._status["details"] = details

    def done(self) -> None:
        out: Dict[str, Any] = {"status": self._status}
        if self._has_header:
            out["header"] = None if self._header is None else dict(self._header)
        if self._messages:
            out["messages"] = self._messages
        if self._has_trailer:
            out["trailer"] = None if self._trailer is None else dict(self._trailer)
        body = {k: _sorted(v) for k, v in out.items()}
        self._w.write(json.dumps(body, indent="  ", ensure_ascii=False) + "\n")