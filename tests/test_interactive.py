import base64

import pytest

from rpcshell.convert import ConversionError, FieldType
from rpcshell.descriptors import (
    DynamicMessage,
    EnumDescriptor,
    EnumValueDescriptor,
    FieldDescriptor,
    MessageDescriptor,
    OneofDescriptor,
)
from rpcshell.fill import CodecMismatchError, InteractiveFillerOpts
from rpcshell.interactive import InteractiveFiller
from rpcshell.prompt import COLOR_INITIAL, AbortError


class StubPrompt:
    def __init__(self, inputs=(), selections=()):
        self.inputs = list(inputs)
        self.selections = list(selections)
        self.prefix = ""
        self.color = None
        self.prefixes = []
        self.colors = []
        self.select_messages = []

    def input(self):
        self.prefixes.append(self.prefix)
        self.colors.append(self.color)
        if not self.inputs:
            raise EOFError
        value = self.inputs.pop(0)
        if isinstance(value, BaseException):
            raise value
        return value

    def select(self, message, options):
        self.select_messages.append(message)
        if not self.selections:
            raise EOFError
        value = self.selections.pop(0)
        if isinstance(value, BaseException):
            raise value
        return value, options[value]

    def set_prefix(self, prefix):
        self.prefix = prefix

    def set_prefix_color(self, color):
        self.color = color


def _field(name, ftype, number, **kwargs):
    return FieldDescriptor(name, ftype, number=number, **kwargs)


def test_fill_all_types(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    content = b"// Package proto provides a filler.\npackage proto\n"
    (tmp_path / "proto.go").write_bytes(content)

    sub = MessageDescriptor("SubMessage")
    enum = EnumDescriptor(
        "Enum", [EnumValueDescriptor("enum1", 5), EnumValueDescriptor("enum2", 7)]
    )
    scalar_types = [
        ("c", FieldType.DOUBLE), ("d", FieldType.FLOAT), ("e", FieldType.INT64),
        ("f", FieldType.SFIXED64), ("g", FieldType.SINT64), ("h", FieldType.UINT64),
        ("i", FieldType.FIXED64), ("j", FieldType.INT32), ("k", FieldType.SFIXED32),
        ("l", FieldType.SINT32), ("m", FieldType.UINT32), ("n", FieldType.FIXED32),
        ("o", FieldType.BOOL), ("p", FieldType.STRING), ("q", FieldType.BYTES),
        ("r", FieldType.BYTES), ("s", FieldType.BYTES),
    ]
    fields = [
        _field("a", FieldType.MESSAGE, 1, repeated=True, message_type=sub),
        _field("b", FieldType.ENUM, 2, enum_type=enum),
    ] + [_field(name, t, n) for n, (name, t) in enumerate(scalar_types, start=3)]
    desc = MessageDescriptor("Message", fields)
    msg = DynamicMessage(desc)

    prompt = StubPrompt(
        inputs=["1.1", "1.2", "1", "2", "3", "4", "5", "6", "7", "8", "9", "10",
                "true", "foo", "bar", "\x62\x61\x7a", "proto.go"],
        selections=[0, 1, 1],
    )
    InteractiveFiller(prompt, "").fill(msg, InteractiveFillerOpts(bytes_from_file=True))

    got = msg.to_dict(emit_defaults=True)
    assert got.pop("d") == pytest.approx(1.2, rel=1e-6)
    assert got == {
        "a": [{}], "b": "enum2", "c": 1.1, "e": "1", "f": "2", "g": "3",
        "h": "4", "i": "5", "j": 6, "k": 7, "l": 8, "m": 9, "n": 10,
        "o": True, "p": "foo", "q": "YmFy", "r": "YmF6",
        "s": base64.b64encode(content).decode("ascii"),
    }
    assert prompt.inputs == []


def test_fill_rejects_non_dynamic_message():
    with pytest.raises(CodecMismatchError):
        InteractiveFiller(StubPrompt(), "").fill({"a": 1})


def test_prefix_format_includes_ancestors_and_type():
    inner = MessageDescriptor("Inner", [_field("x", FieldType.STRING, 1)])
    outer = MessageDescriptor(
        "Outer",
        [_field("inner", FieldType.MESSAGE, 1, message_type=inner),
         _field("tags", FieldType.STRING, 2, repeated=True)],
    )
    prompt = StubPrompt(inputs=["v", "t1"])
    msg = InteractiveFiller(prompt, "{ancestor}{name} ({type})").fill(DynamicMessage(outer))
    assert prompt.prefixes[:2] == ["inner::x (TYPE_STRING)", "<repeated> tags (TYPE_STRING)"]
    assert msg.to_dict() == {"inner": {"x": "v"}, "tags": ["t1"]}


def test_nested_message_uses_next_color():
    inner = MessageDescriptor("Inner", [_field("x", FieldType.STRING, 1)])
    outer = MessageDescriptor(
        "Outer",
        [_field("y", FieldType.STRING, 1),
         _field("inner", FieldType.MESSAGE, 2, message_type=inner)],
    )
    prompt = StubPrompt(inputs=["a", "b"])
    InteractiveFiller(prompt, "").fill(DynamicMessage(outer))
    assert prompt.colors == [COLOR_INITIAL, COLOR_INITIAL.next()]


def test_oneof_fills_selected_choice_only():
    a = _field("a", FieldType.STRING, 1)
    b = _field("b", FieldType.INT32, 2)
    desc = MessageDescriptor("M", [a, b], oneofs=[OneofDescriptor("choice", [a, b])])
    prompt = StubPrompt(inputs=["5"], selections=[1])
    msg = InteractiveFiller(prompt, "").fill(DynamicMessage(desc))
    assert msg.to_dict() == {"b": 5}
    assert prompt.select_messages == ["M.choice"]


def test_repeated_scalar_ends_on_eof_and_empty_input_is_default():
    desc = MessageDescriptor("M", [_field("n", FieldType.INT32, 1, repeated=True)])
    prompt = StubPrompt(inputs=["", "3"])
    msg = InteractiveFiller(prompt, "").fill(DynamicMessage(desc))
    assert msg.to_dict() == {"n": [0, 3]}


def test_add_repeated_manually_asks_each_time():
    f = _field("s", FieldType.STRING, 1, repeated=True)
    desc = MessageDescriptor("M", [f])
    prompt = StubPrompt(inputs=["x", "unused"], selections=[0, 1])
    msg = InteractiveFiller(prompt, "").fill(
        DynamicMessage(desc), InteractiveFillerOpts(add_repeated_manually=True)
    )
    assert msg.to_dict() == {"s": ["x"]}
    assert prompt.select_messages == ["add a repeated field value? field=M.s"] * 2


def test_dig_manually_dig_down_fills_message():
    inner = MessageDescriptor("Inner", [_field("x", FieldType.STRING, 1)])
    outer = MessageDescriptor("Outer", [_field("inner", FieldType.MESSAGE, 1, message_type=inner)])
    prompt = StubPrompt(inputs=["v"], selections=[0])
    msg = InteractiveFiller(prompt, "").fill(
        DynamicMessage(outer), InteractiveFillerOpts(dig_manually=True)
    )
    assert msg.to_dict() == {"inner": {"x": "v"}}
    assert prompt.select_messages == ["dig down? field=Outer.inner"]


def test_dig_manually_skip_leaves_message_unset():
    inner = MessageDescriptor("Inner", [_field("x", FieldType.STRING, 1)])
    outer = MessageDescriptor(
        "Outer",
        [_field("y", FieldType.STRING, 1),
         _field("inner", FieldType.MESSAGE, 2, message_type=inner)],
    )
    prompt = StubPrompt(inputs=["a", "never"], selections=[1])
    msg = InteractiveFiller(prompt, "").fill(
        DynamicMessage(outer), InteractiveFillerOpts(dig_manually=True)
    )
    assert msg.to_dict() == {"y": "a"}
    assert prompt.inputs == ["never"]


def test_abort_stops_filling_remaining_fields():
    desc = MessageDescriptor(
        "M", [_field("a", FieldType.STRING, 1), _field("b", FieldType.STRING, 2)]
    )
    prompt = StubPrompt(inputs=[AbortError(), "later"])
    msg = InteractiveFiller(prompt, "").fill(DynamicMessage(desc))
    assert msg.to_dict() == {}
    assert prompt.inputs == ["later"]


def test_enum_select_abort_uses_first_value():
    enum = EnumDescriptor("E", [EnumValueDescriptor("ZERO", 0), EnumValueDescriptor("ONE", 1)])
    desc = MessageDescriptor("M", [_field("e", FieldType.ENUM, 1, enum_type=enum)])
    prompt = StubPrompt(selections=[AbortError()])
    msg = InteractiveFiller(prompt, "").fill(DynamicMessage(desc))
    assert msg.to_dict(emit_defaults=True) == {"e": "ZERO"}


def test_invalid_value_raises_conversion_error():
    desc = MessageDescriptor("M", [_field("n", FieldType.INT32, 1)])
    with pytest.raises(ConversionError):
        InteractiveFiller(StubPrompt(inputs=["100.10"]), "").fill(DynamicMessage(desc))


def test_eof_on_single_field_propagates():
    desc = MessageDescriptor("M", [_field("n", FieldType.INT32, 1)])
    with pytest.raises(EOFError):
        InteractiveFiller(StubPrompt(), "").fill(DynamicMessage(desc))


def test_bytes_escape_sequences_without_file_option():
    desc = MessageDescriptor("M", [_field("b", FieldType.BYTES, 1)])
    msg = InteractiveFiller(StubPrompt(inputs=["\\x41\\x42"]), "").fill(DynamicMessage(desc))
    assert msg.get_field(desc.fields[0]) == b"AB"