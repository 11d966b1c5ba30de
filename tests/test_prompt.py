import pytest

from rpcshell.prompt import (
    AbortError,
    Color,
    COLOR_INITIAL,
    Prompt,
    Suggestion,
    filter_has_prefix,
)


def _raiser(exc):
    def f(*args, **kwargs):
        raise exc
    return f


def test_command_history_option():
    p = Prompt(command_history=["foo", "bar"])
    assert p.command_history == ["foo", "bar"]


def test_input_normal():
    p = Prompt(input_func=lambda prefix, complete, history, color: "an input")
    assert p.input() == "an input"
    assert p.command_history == ["an input"]


def test_input_passes_prefix_and_color():
    seen = {}

    def fake(prefix, complete, history, color):
        seen.update(prefix=prefix, color=color, history=list(history))
        return "x"

    p = Prompt(command_history=["old"], input_func=fake)
    p.set_prefix("api> ")
    p.set_prefix_color(Color.BLUE)
    assert p.input() == "x"
    assert seen == {"prefix": "api> ", "color": Color.BLUE, "history": ["old"]}
    assert p.command_history == ["old", "x"]


def test_input_eof():
    p = Prompt(input_func=_raiser(EOFError()))
    with pytest.raises(EOFError):
        p.input()


def test_input_abort():
    p = Prompt(input_func=_raiser(KeyboardInterrupt()))
    with pytest.raises(AbortError):
        p.input()
    assert p.command_history == []


def test_select_normal():
    p = Prompt(select_func=lambda message, options: (0, "an selection"))
    assert p.select("", ["foo", "bar"]) == (0, "an selection")


def test_select_abort():
    p = Prompt(select_func=_raiser(KeyboardInterrupt()))
    with pytest.raises(AbortError):
        p.select("", ["foo", "bar"])


def test_select_eof():
    p = Prompt(select_func=_raiser(EOFError()))
    with pytest.raises(EOFError):
        p.select("", ["foo", "bar"])


def test_select_other_error_is_wrapped():
    original = ConnectionError("unexpected EOF")
    p = Prompt(select_func=_raiser(original))
    with pytest.raises(RuntimeError) as info:
        p.select("", ["foo", "bar"])
    assert info.value.__cause__ is original


class DummyCompleter:
    def complete(self, document):
        return [Suggestion("foo"), Suggestion("bar")]


def test_complete_uses_completer():
    p = Prompt()
    p.set_completer(DummyCompleter())
    assert [s.text for s in p.complete("")] == ["foo", "bar"]


def test_complete_without_completer():
    assert Prompt().complete("show ") == []


def test_initial_color():
    assert Prompt().prefix_color == COLOR_INITIAL == Color.DARK_GREEN


@pytest.mark.parametrize(
    "color, expected",
    [
        (Color.BLUE, Color.FUCHSIA),
        (Color.TURQUOISE, Color.DEFAULT),
        (Color.WHITE, Color.BLACK),
    ],
)
def test_color_next(color, expected):
    assert color.next() == expected


def test_filter_has_prefix():
    s = [Suggestion("package"), Suggestion("Proto"), Suggestion("service")]
    assert [x.text for x in filter_has_prefix(s, "p", True)] == ["package", "Proto"]
    assert [x.text for x in filter_has_prefix(s, "p", False)] == ["package"]
    assert [x.text for x in filter_has_prefix(s, "", False)] == ["package", "Proto", "service"]