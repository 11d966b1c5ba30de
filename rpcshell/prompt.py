"""Interactive prompt with colored prefixes, completion and selection."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Protocol, Sequence, Tuple

from prompt_toolkit import print_formatted_text
from prompt_toolkit import prompt as _pt_prompt
from prompt_toolkit.completion import Completer as _PTCompleter
from prompt_toolkit.completion import Completion
from prompt_toolkit.document import Document
from prompt_toolkit.formatted_text import FormattedText
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.styles import Style


class Color(enum.IntEnum):
    """Colors for a prompt prefix."""

    DEFAULT = 0
    BLACK = 1
    DARK_RED = 2
    DARK_GREEN = 3
    BROWN = 4
    DARK_BLUE = 5
    PURPLE = 6
    CYAN = 7
    LIGHT_GRAY = 8
    DARK_GRAY = 9
    RED = 10
    GREEN = 11
    YELLOW = 12
    BLUE = 13
    FUCHSIA = 14
    TURQUOISE = 15
    WHITE = 16

    def next(self) -> "Color":
        """Return the following color, wrapping around after 16 colors."""
        return Color((int(self) + 1) % 16)


COLOR_INITIAL = Color.DARK_GREEN
COLOR_BLUE = Color.BLUE

_ANSI = {
    Color.DEFAULT: "",
    Color.BLACK: "ansiblack",
    Color.DARK_RED: "ansired",
    Color.DARK_GREEN: "ansigreen",
    Color.BROWN: "ansiyellow",
    Color.DARK_BLUE: "ansiblue",
    Color.PURPLE: "ansimagenta",
    Color.CYAN: "ansicyan",
    Color.LIGHT_GRAY: "ansigray",
    Color.DARK_GRAY: "ansibrightblack",
    Color.RED: "ansibrightred",
    Color.GREEN: "ansibrightgreen",
    Color.YELLOW: "ansibrightyellow",
    Color.BLUE: "ansibrightblue",
    Color.FUCHSIA: "ansibrightmagenta",
    Color.TURQUOISE: "ansibrightcyan",
    Color.WHITE: "ansiwhite",
}

_STYLE = Style.from_dict(
    {
        "completion-menu.completion": "bg:ansigray fg:ansiblack",
        "completion-menu.completion.current": "bg:ansiblue fg:ansiblack",
        "completion-menu.meta.completion": "bg:ansiwhite fg:ansiblack",
        "completion-menu.meta.completion.current": "bg:ansibrightblue fg:ansiblack",
    }
)


class AbortError(Exception):
    """Input was aborted with ctrl+c."""

    def __init__(self, message: str = "abort") -> None:
        super().__init__(message)


@dataclass
class Suggestion:
    """A completion candidate."""

    text: str
    description: str = ""


class Completer(Protocol):
    def complete(self, document: Document) -> List[Suggestion]: ...


def filter_has_prefix(
    suggestions: Iterable[Suggestion], sub: str, ignore_case: bool
) -> List[Suggestion]:
    """Keep the suggestions whose text starts with ``sub``."""
    suggestions = list(suggestions)
    if not sub:
        return suggestions
    if ignore_case:
        sub = sub.upper()
    return [
        s for s in suggestions
        if (s.text.upper() if ignore_case else s.text).startswith(sub)
    ]


CompleteFunc = Callable[[str], List[Suggestion]]
InputFunc = Callable[[str, CompleteFunc, List[str], Color], str]
SelectFunc = Callable[[str, Sequence[str]], Tuple[int, str]]


class _CompleterAdapter(_PTCompleter):
    def __init__(self, complete: CompleteFunc) -> None:
        self._complete = complete

    def get_completions(self, document, complete_event):
        word = document.get_word_before_cursor()
        for s in self._complete(document.text_before_cursor):
            yield Completion(s.text, start_position=-len(word), display_meta=s.description)


def _terminal_input(prefix: str, complete: CompleteFunc, history: List[str], color: Color) -> str:
    pt_history = InMemoryHistory()
    for entry in history:
        pt_history.append_string(entry)
    style = _ANSI.get(color, "")
    message = FormattedText([(f"fg:{style}" if style else "", prefix)])
    return _pt_prompt(
        message,
        completer=_CompleterAdapter(complete),
        history=pt_history,
        style=_STYLE,
    )


def _terminal_select(message: str, options: Sequence[str]) -> Tuple[int, str]:
    print_formatted_text(f"? {message}")
    for number, option in enumerate(options, 1):
        print_formatted_text(f"  {number}) {option}")
    while True:
        answer = _pt_prompt("> ").strip()
        if answer.isdigit() and 1 <= int(answer) <= len(options):
            index = int(answer) - 1
            return index, options[index]
        if answer in options:
            return list(options).index(answer), answer


class Prompt:
    """Reads lines and selections from the terminal.

    ``input`` raises EOFError on ctrl+d and AbortError on ctrl+c.
    """

    def __init__(
        self,
        command_history: Optional[Iterable[str]] = None,
        input_func: Optional[InputFunc] = None,
        select_func: Optional[SelectFunc] = None,
    ) -> None:
        self.prefix = ""
        self.prefix_color = COLOR_INITIAL
        self.completer: Optional[Completer] = None
        self.command_history: List[str] = list(command_history or [])
        self._input_func = input_func or _terminal_input
        self._select_func = select_func or _terminal_select

    def set_prefix(self, prefix: str) -> None:
        self.prefix = prefix

    def set_prefix_color(self, color: Color) -> None:
        self.prefix_color = color

    def set_completer(self, completer: Optional[Completer]) -> None:
        self.completer = completer

    def complete(self, text: str) -> List[Suggestion]:
        """Return the completer's suggestions for ``text`` before the cursor."""
        if self.completer is None:
            return []
        return list(self.completer.complete(Document(text)) or [])

    def input(self) -> str:
        try:
            line = self._input_func(
                self.prefix, self.complete, list(self.command_history), self.prefix_color
            )
        except KeyboardInterrupt:
            raise AbortError() from None
        self.command_history.append(line)
        return line

    def select(self, message: str, options: Sequence[str]) -> Tuple[int, str]:
        try:
            return self._select_func(message, options)
        except KeyboardInterrupt:
            raise AbortError() from None
        except (EOFError, AbortError):
            raise
        except Exception as exc:
            raise RuntimeError(f"failed to select an item: {exc}") from exc