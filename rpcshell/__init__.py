"""Parts for an interactive gRPC client: filling, specs, formatting and prompting."""

__version__ = "0.10.2"

__all__ = [
    "convert",
    "curl_format",
    "descriptors",
    "fill",
    "format",
    "headers",
    "history",
    "idl",
    "interactive",
    "json_format",
    "logger",
    "present",
    "prompt",
    "rpc",
    "spec",
]