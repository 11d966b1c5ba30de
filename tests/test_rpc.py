import pytest

from rpcshell.rpc import RPC, RPCType, fqrn_to_endpoint


def test_fqrn_to_endpoint():
    assert fqrn_to_endpoint("helloworld.Greeter.SayHello") == "/helloworld.Greeter/SayHello"


def test_fqrn_to_endpoint_without_package():
    assert fqrn_to_endpoint("Greeter.SayHello") == "/Greeter/SayHello"


@pytest.mark.parametrize("fqrn", ["invalid-fqrn", ""])
def test_fqrn_to_endpoint_invalid(fqrn):
    with pytest.raises(ValueError, match="invalid FQRN format"):
        fqrn_to_endpoint(fqrn)


def test_rpc_type_new_creates_fresh_instances():
    req = RPCType("Request", "api.Request", dict)
    first = req.new()
    second = req.new()
    assert first == {}
    assert first is not second


def test_rpc_defaults():
    req = RPCType("Request", "api.Request", dict)
    res = RPCType("Response", "api.Response", dict)
    rpc = RPC("RPC", "api.Example.RPC", req, res)
    assert (rpc.is_server_streaming, rpc.is_client_streaming) == (False, False)
    assert fqrn_to_endpoint(rpc.fully_qualified_name) == "/api.Example/RPC"