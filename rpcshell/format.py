"""Response formatting that dispatches to a concrete formatter."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Protocol, Sequence

Metadata = Mapping[str, Sequence[str]]


class StatusCode(enum.IntEnum):
    """gRPC status codes."""

    OK = 0
    CANCELED = 1
    UNKNOWN = 2
    INVALID_ARGUMENT = 3
    DEADLINE_EXCEEDED = 4
    NOT_FOUND = 5
    ALREADY_EXISTS = 6
    PERMISSION_DENIED = 7
    RESOURCE_EXHAUSTED = 8
    FAILED_PRECONDITION = 9
    ABORTED = 10
    OUT_OF_RANGE = 11
    UNIMPLEMENTED = 12
    INTERNAL = 13
    UNAVAILABLE = 14
    DATA_LOSS = 15
    UNAUTHENTICATED = 16

    def __str__(self) -> str:
        if self is StatusCode.OK:
            return "OK"
        return "".join(part.capitalize() for part in self.name.split("_"))


@dataclass
class Status:
    """A response status."""

    code: StatusCode = StatusCode.OK
    message: str = ""
    details: List[Any] = field(default_factory=list)


class ResponseFormatterInterface(Protocol):
    def format_header(self, header: Metadata) -> None: ...
    def format_message(self, message: Any) -> None: ...
    def format_status(self, status: Status) -> None: ...
    def format_trailer(self, trailer: Metadata) -> None: ...
    def done(self) -> None: ...


class ResponseFormatter:
    """Formats responses; without enrich only messages are formatted."""

    def __init__(self, impl: ResponseFormatterInterface, enrich: bool = False) -> None:
        self.impl = impl
        self.enrich = enrich

    def format(self, status: Status, header: Metadata, trailer: Metadata,
               message: Optional[Any]) -> None:
        self.format_header(header)
        self.format_message(message)
        self.format_trailer(status, trailer)

    def format_header(self, header: Metadata) -> None:
        if self.enrich:
            self.impl.format_header(header)

    def format_message(self, message: Optional[Any]) -> None:
        if message is None:
            return
        self.impl.format_message(message)

    def format_trailer(self, status: Status, trailer: Metadata) -> None:
        if self.enrich:
            self.impl.format_trailer(trailer)
            self.impl.format_status(status)

    def done(self) -> None:
        self.impl.done()