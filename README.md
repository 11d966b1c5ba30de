# rpcshell

`rpcshell` is a library of parts for an interactive gRPC client. It turns
typed-in text or a stream of JSON into request values, describes services,
RPCs and messages through in-memory descriptors, and presents responses as
curl-like text or as a single JSON document.

It requires Python 3.10 or later and depends on `prompt-toolkit`.

## Modules

| Module | Purpose |
| --- | --- |
| `rpcshell.logger` | A logger that discards everything until `set_output` is called; `scriptln` / `scriptf` only call their function when logging is enabled. `reset` turns it off again. |
| `rpcshell.fill` | `SilentFiller` reads successive JSON values from a stream; `InteractiveFillerOpts` holds the options for interactive filling; `CodecMismatchError`. |
| `rpcshell.headers` | `Headers`, a dict from header keys to lists of distinct values, with key validation in `add` and `remove`. |
| `rpcshell.rpc` | `RPC` and `RPCType` records and `fqrn_to_endpoint`. |
| `rpcshell.idl` | `IDLError` and its subclasses, and helpers for fully-qualified names. |
| `rpcshell.convert` | `FieldType`, `convert_value` (text to a scalar field value) and `unquote` (escape-sequence literals to bytes). |
| `rpcshell.descriptors` | Message, field, oneof, enum, method, service and file descriptors, and `DynamicMessage`. |
| `rpcshell.spec` | `Spec`, built with `new_spec` or `load_by_reflection`, lists services and RPCs and resolves symbols. |
| `rpcshell.format` | `ResponseFormatter` drives a formatter through header, message, trailer and `Status` (`StatusCode`). |
| `rpcshell.curl_format` | `CurlResponseFormatter`, curl-like plain-text output. |
| `rpcshell.json_format` | `JSONResponseFormatter`, one JSON object written by `done()`. |
| `rpcshell.present` | `JSONPresenter`, `NamePresenter` and `TablePresenter` for dataclass values; `PresentError`. |
| `rpcshell.prompt` | `Prompt`, `Color`, `Suggestion`, `AbortError` and `filter_has_prefix`. |
| `rpcshell.history` | `tidy_up_history` keeps the command history unique and bounded. |
| `rpcshell.interactive` | `InteractiveFiller` asks for each field of a `DynamicMessage` in turn. |

## Examples

Endpoint path for a fully-qualified RPC name:

```python
from rpcshell.rpc import fqrn_to_endpoint

fqrn_to_endpoint("helloworld.Greeter.SayHello")  # "/helloworld.Greeter/SayHello"
```

Headers keep each value once per key:

```python
from rpcshell.headers import Headers

headers = Headers()
headers.add("touma", "kazusa")
headers.add("touma", "kazusa")
headers["touma"]  # ["kazusa"]
```

A new key may hold only letters, digits, `-`, `_` and `.`; `headers.add("aoi/", "x")`
raises `ValueError`.

Fully-qualified names:

```python
from rpcshell.idl import fully_qualified_service_name, parse_fully_qualified_service_name

fully_qualified_service_name("api", "Example")     # "api.Example"
parse_fully_qualified_service_name("api.Example")  # ("api", "Example")
parse_fully_qualified_service_name("Example")      # ("", "Example")
```

Converting input text:

```python
from rpcshell.convert import FieldType, convert_value

convert_value("100", FieldType.INT32)                # 100
convert_value("", FieldType.STRING)                  # ""
convert_value(r"\x62\x61\x7a", FieldType.BYTES)      # b"baz"
```

Building a spec from descriptors:

```python
from rpcshell.convert import FieldType
from rpcshell.descriptors import (
    FieldDescriptor, FileDescriptor, MessageDescriptor, MethodDescriptor, ServiceDescriptor,
)
from rpcshell.spec import new_spec

request = MessageDescriptor("Request", [FieldDescriptor("name", FieldType.STRING, 1)], package="api")
service = ServiceDescriptor("Example", [MethodDescriptor("RPC", request, request)], package="api")
spec = new_spec([FileDescriptor("api.proto", "api", [service], [request])])

spec.service_names()                              # ["api.Example"]
spec.rpc("api.Example", "RPC").fully_qualified_name  # "api.Example.RPC"

message = spec.rpc("api.Example", "RPC").request_type.new()
message.set_field(request.fields[0], "foo")
message.to_dict()                                 # {"name": "foo"}
```

Tidying the command history: the latest occurrence of a command wins and only
the newest entries up to the limit are kept.

```python
from rpcshell.history import tidy_up_history

tidy_up_history(["foo", "bar", "foo", "baz"], 100)  # ["bar", "foo", "baz"]
tidy_up_history(["foo", "bar", "baz"], 2)           # ["bar", "baz"]
```

Logging is silent until an output stream is given:

```python
import io
from rpcshell import logger

buf = io.StringIO()
logger.set_output(buf)
logger.scriptln(lambda: ["aoi", "miyamori"])
buf.getvalue()  # "rpcshell: aoi miyamori\n"
logger.reset()
```

## Errors

Failures are raised as exceptions:

- `rpcshell.idl`: `ServiceUnselectedError`, `UnknownServiceNameError`,
  `UnknownRPCNameError`, `UnknownSymbolError` and the others share the base
  class `IDLError`.
- `SilentFiller.fill` raises `CodecMismatchError` for input that is not JSON
  and `EOFError` at the end of input; `InteractiveFiller.fill` raises
  `CodecMismatchError` for anything that is not a `DynamicMessage`.
- `convert_value` raises `ConversionError` for text that does not fit the type
  and for unsupported types.
- `Prompt.input` and `Prompt.select` raise `AbortError` on Ctrl+C; end of input
  raises `EOFError`.
- `load_by_reflection` raises `RuntimeError` when the client fails to list
  packages.

## What it does not do

`rpcshell` does not open network connections or send RPCs: there is no gRPC or
gRPC-Web client, no TLS setup and no reflection client, only the
`list_packages()` interface that `load_by_reflection` expects. It does not
parse `.proto` files; descriptors are built in Python. It also ships no
command-line program or REPL loop; the prompt, completion filtering, history
and fillers are the pieces one would assemble into one.