import pytest

from rpcshell.history import tidy_up_history


@pytest.mark.parametrize(
    "history, size, expected",
    [
        (None, 100, []),
        (["foo", "bar"], 100, ["foo", "bar"]),
        (["foo", "bar", "foo", "baz"], 100, ["bar", "foo", "baz"]),
        (["foo", "bar", "baz"], 2, ["bar", "baz"]),
        (["foo", "bar"], 0, []),
    ],
)
def test_tidy_up_history(history, size, expected):
    assert tidy_up_history(history, size) == expected