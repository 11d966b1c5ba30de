"""Interactive filling of dynamic messages field by field."""

from __future__ import annotations

import dataclasses
from pathlib import Path
from typing import Any, Callable, List, Optional, Protocol, Sequence, Tuple

from .convert import FieldType, convert_value
from .descriptors import DynamicMessage, EnumDescriptor, FieldDescriptor, OneofDescriptor
from .fill import CodecMismatchError, InteractiveFillerOpts
from .prompt import COLOR_INITIAL, AbortError, Color

_DELIMITER = "::"


class _Prompt(Protocol):
    def input(self) -> str: ...
    def select(self, message: str, options: Sequence[str]) -> Tuple[int, str]: ...
    def set_prefix(self, prefix: str) -> None: ...
    def set_prefix_color(self, color: Color) -> None: ...


class InteractiveFiller:
    """Fills each field of a message from values typed into a prompt."""

    def __init__(self, prompt: _Prompt, prefix_format: str = "") -> None:
        self.prompt = prompt
        self.prefix_format = prefix_format

    def fill(self, message: Any, opts: Optional[InteractiveFillerOpts] = None) -> DynamicMessage:
        """Fill ``message`` interactively and return it.

        Raises CodecMismatchError if ``message`` is not a DynamicMessage and
        EOFError when input ends in the middle of a non-repeated field.
        """
        if not isinstance(message, DynamicMessage):
            raise CodecMismatchError()
        resolver = _Resolver(
            prompt=self.prompt,
            prefix_format=self.prefix_format,
            color=COLOR_INITIAL,
            msg=message,
            ancestors=[],
            repeated=False,
            opts=opts or InteractiveFillerOpts(),
        )
        return resolver.resolve()


@dataclasses.dataclass
class _Resolver:
    prompt: _Prompt
    prefix_format: str
    color: Color
    msg: DynamicMessage
    ancestors: List[str]
    # Whether this message is (part of) a repeated field.
    repeated: bool
    opts: InteractiveFillerOpts

    def resolve(self) -> DynamicMessage:
        selected_oneofs = set()
        for f in self.msg.descriptor.fields:
            if f.oneof is not None:
                fqn = f.oneof.fully_qualified_name
                if fqn in selected_oneofs:
                    continue
                selected_oneofs.add(fqn)
                self._resolve_oneof(f.oneof)
                continue
            try:
                self._resolve_field(f)
            except AbortError:
                return self.msg
        return self.msg

    def _resolve_oneof(self, oneof: OneofDescriptor) -> None:
        choice = self._select_choices(
            oneof.fully_qualified_name, [c.name for c in oneof.choices]
        )
        self._resolve_field(oneof.choices[choice])

    def _resolve_value(self, f: FieldDescriptor) -> Any:
        t = f.type
        if t is FieldType.MESSAGE:
            if self._skip_message(f):
                raise AbortError()
            child = _Resolver(
                prompt=self.prompt,
                prefix_format=self.prefix_format,
                color=self.color.next(),
                msg=DynamicMessage(f.message_type),
                ancestors=[*self.ancestors, f.name],
                repeated=self.repeated or f.repeated,
                opts=self.opts,
            )
            return child.resolve()
        if t is FieldType.ENUM:
            return self._resolve_enum(self._make_prefix(f), f.enum_type)
        if t is FieldType.GROUP:
            raise ValueError(f"invalid type: {t}")

        converter: Callable[[str], Any]
        if t is FieldType.BYTES:
            converter = self._convert_bytes
        else:
            converter = lambda text: convert_value(text, t)  # noqa: E731
        return self._input(self._make_prefix(f), f, converter)

    def _convert_bytes(self, text: str) -> bytes:
        if self.opts.bytes_from_file:
            try:
                return Path(text).read_bytes()
            except OSError:
                pass
        return convert_value(text, FieldType.BYTES)

    def _resolve_field(self, f: FieldDescriptor) -> None:
        if not f.repeated:
            self.msg.set_field(f, self._resolve_value(f))
            return

        color = self.color
        while self._add_repeated_field(f):
            self.prompt.set_prefix_color(color)
            color = color.next()
            try:
                value = self._resolve_value(f)
            except EOFError:
                # End of input finishes the repeated field, keeping its values.
                return
            self.msg.add_repeated_field(f, value)

    def _resolve_enum(self, prefix: str, enum: EnumDescriptor) -> int:
        choice = self._select_choices(prefix, [v.name for v in enum.values])
        return enum.values[choice].number

    def _input(self, prefix: str, f: FieldDescriptor, converter: Callable[[str], Any]) -> Any:
        self.prompt.set_prefix(prefix)
        self.prompt.set_prefix_color(self.color)
        text = self.prompt.input()
        if text == "":
            single = dataclasses.replace(f, repeated=False) if f.repeated else f
            return single.default_value()
        return converter(text)

    def _select_choices(self, message: str, choices: Sequence[str]) -> int:
        try:
            index, _ = self.prompt.select(message, list(choices))
        except AbortError:
            # Skip the choice and use the default value.
            return 0
        return index

    def _add_repeated_field(self, f: FieldDescriptor) -> bool:
        if not self.opts.add_repeated_manually:
            if f.type is not FieldType.MESSAGE or f.message_type.fields:
                return True
            # An empty repeated message would loop forever, so always ask.
        message = f"add a repeated field value? field={f.fully_qualified_name}"
        try:
            index, _ = self.prompt.select(message, ["yes", "no"])
        except Exception:
            return False
        return index != 1

    def _skip_message(self, f: FieldDescriptor) -> bool:
        if not self.opts.dig_manually:
            return False
        message = f"dig down? field={f.fully_qualified_name}"
        try:
            index, _ = self.prompt.select(message, ["dig down", "skip"])
        except Exception:
            index = 0
        return index == 1

    def _make_prefix(self, f: FieldDescriptor) -> str:
        joined = _DELIMITER.join(self.ancestors)
        if joined:
            joined += _DELIMITER
        prefix = (
            self.prefix_format.replace("{ancestor}", joined)
            .replace("{name}", f.name)
            .replace("{type}", str(f.type))
        )
        if self.repeated or f.repeated:
            return "<repeated> " + prefix
        return prefix