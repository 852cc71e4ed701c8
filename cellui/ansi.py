"""Translation of ANSI escape sequences into style tags."""

from __future__ import annotations

import io
import re
from enum import Enum, auto
from typing import TextIO, Union

_COLOR_NAMES = (
    "black",
    "maroon",
    "green",
    "olive",
    "navy",
    "purple",
    "teal",
    "silver",
    "gray",
    "red",
    "lime",
    "yellow",
    "blue",
    "fuchsia",
    "aqua",
    "white",
)

_ATTRIBUTE_ON = {"1": "b", "01": "b", "2": "d", "02": "d", "4": "u", "04": "u", "5": "l", "05": "l"}
_ATTRIBUTE_OFF = {"22": "bd", "24": "u", "25": "l"}

_FOREGROUND = {str(n): n - 30 for n in range(30, 38)}
_FOREGROUND.update({str(n): n - 82 for n in range(90, 98)})
_BACKGROUND = {str(n): n - 40 for n in range(40, 48)}
_BACKGROUND.update({str(n): n - 92 for n in range(100, 108)})

_INTEGER = re.compile(r"[+-]?[0-9]+")


class _State(Enum):
    TEXT = auto()
    ESCAPE = auto()
    SUBSTRING = auto()
    CONTROL_SEQUENCE = auto()


def _lookup_color(number: int) -> str:
    if 0 <= number <= 15:
        return _COLOR_NAMES[number]
    return "black"


def _atoi(text: str) -> int:
    return int(text) if _INTEGER.fullmatch(text) else 0


def _hex(red: int, green: int, blue: int) -> str:
    return f"#{red:02x}{green:02x}{blue:02x}"


def _extended_color(rest: list[str]) -> str:
    """Decode the fields following a 38 or 48 code."""
    if not rest:
        return ""
    if rest[0] == "5" and len(rest) >= 2:
        number = _atoi(rest[1])
        if number <= 15:
            return _lookup_color(number)
        if number <= 231:
            red = (number - 16) // 36
            green = ((number - 16) // 6) % 6
            blue = (number - 16) % 6
            return _hex(255 * red // 5, 255 * green // 5, 255 * blue // 5)
        if number <= 255:
            grey = 255 * (number - 232) // 23
            return _hex(grey, grey, grey)
        return ""
    if rest[0] == "2" and len(rest) >= 4:
        return _hex(_atoi(rest[1]), _atoi(rest[2]), _atoi(rest[3]))
    return ""


class AnsiWriter:
    """A text writer that turns ANSI escape codes into style tags.

    Colors and text attributes become tags; all other escape sequences are
    dropped. The translated text is written to the target. Parser state and
    active attributes carry over between writes.
    """

    def __init__(self, target: TextIO) -> None:
        self._target = target
        self._state = _State.TEXT
        self._parameter = ""
        self._intermediate = ""
        self._attributes = ""

    def write(self, text: Union[str, bytes]) -> int:
        """Translate and forward text; return the length of the input."""
        if isinstance(text, (bytes, bytearray)):
            decoded = bytes(text).decode("utf-8", errors="replace")
        else:
            decoded = text
        output = []
        for char in decoded:
            if self._state is _State.ESCAPE:
                self._escape(char, output)
            elif self._state is _State.CONTROL_SEQUENCE:
                self._control_sequence(char, output)
            elif self._state is _State.SUBSTRING:
                if char == "\x1b":
                    self._state = _State.ESCAPE
            elif char == "\x1b":
                self._state = _State.ESCAPE
            else:
                output.append(char)
        self._target.write("".join(output))
        return len(text)

    def _escape(self, char: str, output: list[str]) -> None:
        if char == "[":
            self._parameter = ""
            self._intermediate = ""
            self._state = _State.CONTROL_SEQUENCE
        elif char == "c":
            output.append("[-:-:-]")
            self._state = _State.TEXT
        elif char in "P]X^_":
            self._state = _State.SUBSTRING
        else:
            self._state = _State.TEXT

    def _control_sequence(self, char: str, output: list[str]) -> None:
        code = ord(char)
        if 0x30 <= code <= 0x3F:
            self._parameter += char
        elif 0x20 <= code <= 0x2F:
            self._intermediate += char
        elif 0x40 <= code <= 0x7E:
            if char == "E":
                output.append("\n" * (_atoi(self._parameter) or 1))
            elif char == "m":
                output.append(self._select_graphic_rendition())
            self._state = _State.TEXT
        else:
            self._state = _State.TEXT

    def _select_graphic_rendition(self) -> str:
        params = self._parameter
        fields = params.split(";")
        if not params or fields == ["0"]:
            self._attributes = ""
            return "[-:-:-]"

        foreground = background = ""
        for index, field in enumerate(fields):
            if field in _ATTRIBUTE_ON:
                flag = _ATTRIBUTE_ON[field]
                if flag not in self._attributes:
                    self._attributes += flag
            elif field in _ATTRIBUTE_OFF:
                for flag in _ATTRIBUTE_OFF[field]:
                    self._attributes = self._attributes.replace(flag, "", 1)
            elif field in _FOREGROUND:
                foreground = _lookup_color(_FOREGROUND[field])
            elif field == "39":
                foreground = "-"
            elif field in _BACKGROUND:
                background = _lookup_color(_BACKGROUND[field])
            elif field == "49":
                background = "-"
            elif field in ("38", "48"):
                color = _extended_color(fields[index + 1 :])
                if color:
                    if field == "38":
                        foreground = color
                    else:
                        background = color
                break

        if not (foreground or background or self._attributes):
            return ""
        colon = ":" if self._attributes else ""
        return f"[{foreground}:{background}{colon}{self._attributes}]"


def translate_ansi(text: str) -> str:
    """Return text with ANSI escape sequences replaced by style tags."""
    buffer = io.StringIO()
    AnsiWriter(buffer).write(text)
    return buffer.getvalue()