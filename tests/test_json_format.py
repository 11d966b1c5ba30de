import io
import json

from rpcshell.convert import FieldType
from rpcshell.descriptors import DynamicMessage, FieldDescriptor, MessageDescriptor
from rpcshell.format import Status, StatusCode
from rpcshell.json_format import JSONResponseFormatter


def _msg(text):
    desc = MessageDescriptor("Response", [FieldDescriptor("message", FieldType.STRING, 1)],
                             package="api")
    m = DynamicMessage(desc)
    m.set_field(desc.fields[0], text)
    return m


def test_only_status_when_nothing_else():
    out = io.StringIO()
    JSONResponseFormatter(out).done()
    assert json.loads(out.getvalue()) == {"status": {"code": "", "number": 0, "message": ""}}


def test_full_response_round_trip():
    out = io.StringIO()
    f = JSONResponseFormatter(out)
    f.format_header({"k": ["v"]})
    f.format_message(_msg("a"))
    f.format_message(_msg("b"))
    f.format_trailer({"t": ["1"]})
    f.format_status(Status(StatusCode.NOT_FOUND, "missing", [_msg("d")]))
    f.done()
    data = json.loads(out.getvalue())
    assert list(data) == ["status", "header", "messages", "trailer"]
    assert data["messages"] == [{"message": "a"}, {"message": "b"}]
    assert data["header"] == {"k": ["v"]}
    assert data["trailer"] == {"t": ["1"]}
    assert data["status"]["code"] == "NotFound"
    assert data["status"]["number"] == int(StatusCode.NOT_FOUND)
    assert data["status"]["details"][0]["message"] == "d"


def test_emit_defaults_passed_through():
    desc = MessageDescriptor("M", [FieldDescriptor("x", FieldType.INT32, 1)])
    out = io.StringIO()
    f = JSONResponseFormatter(out, emit_defaults=True)
    f.format_message(DynamicMessage(desc))
    f.done()
    assert json.loads(out.getvalue())["messages"] == [{"x": 0}]