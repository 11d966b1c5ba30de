"""Interface specification built from loaded file descriptors."""

from __future__ import annotations

from typing import Dict, Iterable, List, Protocol

from .descriptors import (
    Descriptor,
    DynamicMessage,
    FileDescriptor,
    MessageDescriptor,
    MethodDescriptor,
    ServiceDescriptor,
)
from .idl import (
    ServiceUnselectedError,
    UnknownRPCNameError,
    UnknownServiceNameError,
    UnknownSymbolError,
)
from .rpc import RPC, RPCType


class ReflectionClient(Protocol):
    def list_packages(self) -> List[FileDescriptor]: ...


def _rpc_type(desc: MessageDescriptor) -> RPCType:
    return RPCType(
        name=desc.name,
        fully_qualified_name=desc.fully_qualified_name,
        new=lambda: DynamicMessage(desc),
    )


class Spec:
    """Services, RPCs and messages from a set of file descriptors."""

    def __init__(self, file_descs: List[FileDescriptor], pkg_names: List[str],
                 svc_descs: List[ServiceDescriptor],
                 rpc_descs: Dict[str, List[MethodDescriptor]],
                 msg_descs: Dict[str, MessageDescriptor]) -> None:
        self._file_descs = file_descs
        self._pkg_names = pkg_names
        self._svc_descs = svc_descs
        self._rpc_descs = rpc_descs
        self.message_descriptors = msg_descs

    def service_names(self) -> List[str]:
        return [d.fully_qualified_name for d in self._svc_descs]

    def package_names(self) -> List[str]:
        return list(self._pkg_names)

    def _methods(self, svc_name: str) -> List[MethodDescriptor]:
        if not svc_name:
            raise ServiceUnselectedError()
        try:
            return self._rpc_descs[svc_name]
        except KeyError:
            raise UnknownServiceNameError() from None

    def rpcs(self, svc_name: str) -> List[RPC]:
        return [self.rpc(svc_name, d.name) for d in self._methods(svc_name)]

    def rpc(self, svc_name: str, rpc_name: str) -> RPC:
        for d in self._methods(svc_name):
            if d.name == rpc_name:
                return RPC(
                    name=d.name,
                    fully_qualified_name=d.fully_qualified_name,
                    request_type=_rpc_type(d.input_type),
                    response_type=_rpc_type(d.output_type),
                    is_server_streaming=d.server_streaming,
                    is_client_streaming=d.client_streaming,
                )
        raise UnknownRPCNameError()

    def resolve_symbol(self, symbol: str) -> Descriptor:
        for f in self._file_descs:
            d = f.find_symbol(symbol)
            if d is not None:
                return d
        raise UnknownSymbolError()


def new_spec(file_descriptors: Iterable[FileDescriptor]) -> Spec:
    """Build a Spec, de-duplicating packages and services."""
    fds = list(file_descriptors)
    pkg_names: List[str] = []
    svc_descs: List[ServiceDescriptor] = []
    seen_svcs = set()
    rpc_descs: Dict[str, List[MethodDescriptor]] = {}
    msg_descs: Dict[str, MessageDescriptor] = {}
    for f in fds:
        if f.package not in pkg_names:
            pkg_names.append(f.package)
        for svc in f.services:
            fqsn = svc.fully_qualified_name
            if fqsn not in seen_svcs:
                svc_descs.append(svc)
                seen_svcs.add(fqsn)
            rpc_descs.setdefault(fqsn, []).extend(svc.methods)
        for m in f.message_types:
            msg_descs[m.fully_qualified_name] = m
    pkg_names.sort()
    return Spec(fds, pkg_names, svc_descs, rpc_descs, msg_descs)


def load_by_reflection(client: ReflectionClient) -> Spec:
    """Build a Spec from the file descriptors a reflection client lists."""
    try:
        fds = client.list_packages()
    except Exception as exc:
        raise RuntimeError(f"failed to list packages by gRPC reflection: {exc}") from exc
    return new_spec(fds or [])