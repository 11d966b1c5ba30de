"""Errors and naming helpers for interface definitions."""

from __future__ import annotations

from typing import Optional, Tuple


class IDLError(Exception):
    """Base error for interface definition lookups."""

    default_message = "IDL error"

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.default_message)


class PackageUnselectedError(IDLError):
    default_message = "package unselected"


class ServiceUnselectedError(IDLError):
    default_message = "service unselected"


class UnknownPackageNameError(IDLError, LookupError):
    default_message = "unknown package name"


class UnknownServiceNameError(IDLError, LookupError):
    default_message = "unknown service name"


class UnknownRPCNameError(IDLError, LookupError):
    default_message = "unknown RPC name"


class UnknownSymbolError(IDLError, LookupError):
    default_message = "unknown symbol"


def fully_qualified_method_name(fqsn: str, method_name: str) -> str:
    """Join a fully-qualified service name and a method name with '.'."""
    if not fqsn:
        raise ValueError("fqsn should not be empty")
    if not method_name:
        raise ValueError("methodName should not be empty")
    return f"{fqsn}.{method_name}"


def _qualify(pkg: str, name: str) -> str:
    return f"{pkg}.{name}" if pkg else name


def fully_qualified_service_name(pkg: str, svc: str) -> str:
    """Return the fully-qualified service name."""
    return _qualify(pkg, svc)


def fully_qualified_message_name(pkg: str, msg: str) -> str:
    """Return the fully-qualified message name."""
    return _qualify(pkg, msg)


def parse_fully_qualified_service_name(fqsn: str) -> Tuple[str, str]:
    """Split a fully-qualified service name into package and service."""
    pkg, sep, svc = fqsn.rpartition(".")
    if not sep:
        return "", fqsn
    return pkg, svc