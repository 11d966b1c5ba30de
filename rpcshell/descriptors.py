"""In-memory descriptors of messages, enums and services, and dynamic messages."""

from __future__ import annotations

import base64
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from .convert import FieldType, convert_value

_INT_TYPES = {
    FieldType.INT64, FieldType.UINT64, FieldType.INT32, FieldType.UINT32,
    FieldType.FIXED64, FieldType.FIXED32, FieldType.SFIXED64, FieldType.SFIXED32,
    FieldType.SINT64, FieldType.SINT32,
}
_STRING_ENCODED_INTS = {
    FieldType.INT64, FieldType.UINT64, FieldType.FIXED64,
    FieldType.SFIXED64, FieldType.SINT64,
}


def _qualify(prefix: str, name: str) -> str:
    return f"{prefix}.{name}" if prefix else name


def _json_name(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


@dataclass
class EnumValueDescriptor:
    name: str
    number: int


@dataclass
class EnumDescriptor:
    name: str
    values: List[EnumValueDescriptor] = field(default_factory=list)
    package: str = ""

    @property
    def fully_qualified_name(self) -> str:
        return _qualify(self.package, self.name)

    def value_by_number(self, number: int) -> Optional[EnumValueDescriptor]:
        return next((v for v in self.values if v.number == number), None)


@dataclass
class OneofDescriptor:
    name: str
    choices: List["FieldDescriptor"] = field(default_factory=list)
    parent: Optional["MessageDescriptor"] = field(default=None, repr=False, compare=False)

    @property
    def fully_qualified_name(self) -> str:
        return _qualify(self.parent.fully_qualified_name if self.parent else "", self.name)


@dataclass
class FieldDescriptor:
    name: str
    type: FieldType
    number: int = 0
    repeated: bool = False
    message_type: Optional["MessageDescriptor"] = None
    enum_type: Optional[EnumDescriptor] = None
    oneof: Optional[OneofDescriptor] = field(default=None, repr=False, compare=False)
    parent: Optional["MessageDescriptor"] = field(default=None, repr=False, compare=False)

    @property
    def fully_qualified_name(self) -> str:
        return _qualify(self.parent.fully_qualified_name if self.parent else "", self.name)

    @property
    def json_name(self) -> str:
        return _json_name(self.name)

    def default_value(self) -> Any:
        """Return the value an unset field has."""
        if self.repeated:
            return []
        if self.type is FieldType.MESSAGE:
            return None
        if self.type is FieldType.ENUM:
            if self.enum_type and self.enum_type.values:
                return self.enum_type.values[0].number
            return 0
        return convert_value("", self.type)


@dataclass
class MessageDescriptor:
    name: str
    fields: List[FieldDescriptor] = field(default_factory=list)
    package: str = ""
    oneofs: List[OneofDescriptor] = field(default_factory=list)

    def __post_init__(self) -> None:
        for f in self.fields:
            f.parent = self
        for o in self.oneofs:
            o.parent = self
            for choice in o.choices:
                choice.oneof = o

    @property
    def fully_qualified_name(self) -> str:
        return _qualify(self.package, self.name)

    def find_field(self, name: str) -> Optional[FieldDescriptor]:
        return next((f for f in self.fields if f.name == name), None)


@dataclass
class MethodDescriptor:
    name: str
    input_type: MessageDescriptor
    output_type: MessageDescriptor
    server_streaming: bool = False
    client_streaming: bool = False
    parent: Optional["ServiceDescriptor"] = field(default=None, repr=False, compare=False)

    @property
    def fully_qualified_name(self) -> str:
        return _qualify(self.parent.fully_qualified_name if self.parent else "", self.name)


@dataclass
class ServiceDescriptor:
    name: str
    methods: List[MethodDescriptor] = field(default_factory=list)
    package: str = ""

    def __post_init__(self) -> None:
        for m in self.methods:
            m.parent = self

    @property
    def fully_qualified_name(self) -> str:
        return _qualify(self.package, self.name)


Descriptor = Union[MessageDescriptor, EnumDescriptor, ServiceDescriptor,
                   MethodDescriptor, FieldDescriptor]


@dataclass
class FileDescriptor:
    name: str
    package: str = ""
    services: List[ServiceDescriptor] = field(default_factory=list)
    message_types: List[MessageDescriptor] = field(default_factory=list)
    enum_types: List[EnumDescriptor] = field(default_factory=list)
    dependencies: List["FileDescriptor"] = field(default_factory=list)

    def _symbols(self):
        for m in self.message_types:
            yield m
            yield from m.fields
        yield from self.enum_types
        for s in self.services:
            yield s
            yield from s.methods

    def find_symbol(self, symbol: str) -> Optional[Descriptor]:
        """Return the descriptor named by the fully-qualified ``symbol``."""
        return next((d for d in self._symbols() if d.fully_qualified_name == symbol), None)


class DynamicMessage:
    """A message whose shape is given by a MessageDescriptor at run time."""

    def __init__(self, descriptor: MessageDescriptor) -> None:
        self.descriptor = descriptor
        self._values: Dict[str, Any] = {}

    def __eq__(self, other: object) -> bool:
        return (isinstance(other, DynamicMessage)
                and other.descriptor is self.descriptor
                and other._values == self._values)

    def __repr__(self) -> str:
        return f"DynamicMessage({self.descriptor.fully_qualified_name}, {self._values!r})"

    def _own_field(self, f: FieldDescriptor) -> FieldDescriptor:
        own = self.descriptor.find_field(f.name)
        if own is None or own.number != f.number or own.type != f.type:
            raise ValueError(
                f"field {f.name} is not a field of {self.descriptor.fully_qualified_name}")
        return own

    @staticmethod
    def _check(f: FieldDescriptor, value: Any) -> None:
        t = f.type
        if t is FieldType.MESSAGE:
            ok = isinstance(value, DynamicMessage) and (
                f.message_type is None
                or value.descriptor.fully_qualified_name == f.message_type.fully_qualified_name)
        elif t in _INT_TYPES or t is FieldType.ENUM:
            ok = isinstance(value, int) and not isinstance(value, bool)
        elif t in (FieldType.DOUBLE, FieldType.FLOAT):
            ok = isinstance(value, (int, float)) and not isinstance(value, bool)
        elif t is FieldType.BOOL:
            ok = isinstance(value, bool)
        elif t is FieldType.STRING:
            ok = isinstance(value, str)
        elif t is FieldType.BYTES:
            ok = isinstance(value, (bytes, bytearray))
        else:
            ok = False
        if not ok:
            raise TypeError(f"{type(value).__name__} is not valid for field {f.name} ({t})")

    def get_field(self, f: FieldDescriptor) -> Any:
        own = self._own_field(f)
        if own.name in self._values:
            return self._values[own.name]
        return own.default_value()

    def set_field(self, field: FieldDescriptor, value: Any) -> None:
        """Set a field, validating the value against its type."""
        own = self._own_field(field)
        if own.repeated:
            if not isinstance(value, list):
                raise TypeError(f"repeated field {own.name} needs a list")
            for v in value:
                self._check(own, v)
            value = list(value)
        else:
            self._check(own, value)
        if own.oneof is not None:
            for choice in own.oneof.choices:
                self._values.pop(choice.name, None)
        self._values[own.name] = value

    def add_repeated_field(self, field: FieldDescriptor, value: Any) -> None:
        """Append a value to a repeated field."""
        own = self._own_field(field)
        if not own.repeated:
            raise TypeError(f"field {own.name} is not repeated")
        self._check(own, value)
        self._values.setdefault(own.name, []).append(value)

    @staticmethod
    def _encode(f: FieldDescriptor, value: Any, emit_defaults: bool) -> Any:
        t = f.type
        if t is FieldType.MESSAGE:
            return value.to_dict(emit_defaults)
        if t in _STRING_ENCODED_INTS:
            return str(value)
        if t is FieldType.BYTES:
            return base64.b64encode(bytes(value)).decode("ascii")
        if t is FieldType.ENUM:
            ev = f.enum_type.value_by_number(value) if f.enum_type else None
            return ev.name if ev else value
        return value

    def to_dict(self, emit_defaults: bool = False) -> Dict[str, Any]:
        """Return the JSON mapping of the message, keyed by JSON field names."""
        out: Dict[str, Any] = {}
        for f in self.descriptor.fields:
            if f.name in self._values:
                value = self._values[f.name]
                is_default = f.oneof is None and value == f.default_value()
                if is_default and not emit_defaults:
                    continue
            else:
                if not emit_defaults or f.oneof is not None or (
                        f.type is FieldType.MESSAGE and not f.repeated):
                    continue
                value = f.default_value()
            if f.repeated:
                out[f.json_name] = [self._encode(f, v, emit_defaults) for v in value]
            else:
                out[f.json_name] = self._encode(f, value, emit_defaults)
        return out