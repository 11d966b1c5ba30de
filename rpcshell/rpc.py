"""Descriptions of RPCs and their request and response types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable


@dataclass
class RPCType:
    """A request or response type."""

    name: str
    fully_qualified_name: str
    # Creates a fresh instance used to decode requests and responses.
    new: Callable[[], Any]


@dataclass
class RPC:
    """An RPC belonging to a service."""

    name: str
    fully_qualified_name: str
    request_type: RPCType
    response_type: RPCType
    is_server_streaming: bool = False
    is_client_streaming: bool = False


def fqrn_to_endpoint(fqrn: str) -> str:
    """Convert ``pkg.svc.rpc`` into the endpoint ``/pkg.svc/rpc``."""
    parts = fqrn.split(".")
    if len(parts) < 2:
        raise ValueError("invalid FQRN format")
    *service, method = parts
    return f"/{'.'.join(service)}/{method}"