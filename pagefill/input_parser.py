"""Parse source text with backslash directives into controller calls.

Source text is a sequence of words separated by blanks. A single newline
ends an input line; one or more blank lines end a paragraph. Directives
have the form ``\\name`` or ``\\name{argument}``; ``\\\\``, ``\\{`` and
``\\}`` stand for the literal characters.
"""

import logging
import re
from typing import TextIO, Union

from .errors import FormatError

logger = logging.getLogger(__name__)

# Directives taking an integer argument, mapped to controller methods
INT_DIRECTIVES = {
    'indent': 'set_indentation',
    'parindent': 'set_par_indentation',
    'textwidth': 'set_text_width',
    'textheight': 'set_text_height',
    'parskip': 'set_par_skip',
}

# Directives without an argument: (controller method, value)
FLAG_DIRECTIVES = {
    'fill': ('set_fill', True),
    'nofill': ('set_fill', False),
    'justify': ('set_justify', True),
    'nojustify': ('set_justify', False),
}

ESCAPED_CHARS = '\\{}'

_NAME_RE = re.compile(r'[a-zA-Z]+')
_INT_RE = re.compile(r'\{\s*(-?\d+)\s*\}')
_TEXT_RE = re.compile(r'[^\s\\{}]+')
_SPACE_RE = re.compile(r'\s+')


class InputParser:
    """Reads source text and drives a controller.

    The controller must provide add_text, end_word, add_newline,
    end_paragraph, format_endnote, close and the setters named in
    INT_DIRECTIVES and FLAG_DIRECTIVES.
    """

    def __init__(self, source: Union[str, TextIO], controller):
        if not isinstance(source, str):
            source = source.read()
        self._source = source
        self._controller = controller
        self._pos = 0

    def process(self) -> None:
        """Parse the whole source, then close the controller."""
        self.parse()
        self._controller.close()

    def parse(self) -> None:
        """Parse the whole source without closing the controller."""
        text = self._source
        while self._pos < len(text):
            ch = text[self._pos]
            if ch == '\\':
                self._directive()
            elif ch.isspace():
                self._whitespace()
            elif ch in '{}':
                raise FormatError(f"Unescaped '{ch}' at offset {self._pos}", ch)
            else:
                m = _TEXT_RE.match(text, self._pos)
                self._controller.add_text(m.group())
                self._pos = m.end()
        self._controller.end_word()

    def _whitespace(self) -> None:
        m = _SPACE_RE.match(self._source, self._pos)
        newlines = m.group().count('\n')
        self._pos = m.end()
        self._controller.end_word()
        if newlines >= 2:
            self._controller.end_paragraph()
        elif newlines == 1:
            self._controller.add_newline()

    def _directive(self) -> None:
        text = self._source
        start = self._pos
        self._pos += 1
        if self._pos >= len(text):
            raise FormatError("Input ends with a lone backslash")
        if text[self._pos] in ESCAPED_CHARS:
            self._controller.add_text(text[self._pos])
            self._pos += 1
            return
        m = _NAME_RE.match(text, self._pos)
        if not m:
            raise FormatError(f"Bad command at offset {start}", text[start:start + 2])
        name = m.group()
        self._pos = m.end()
        if name == 'endnote':
            self._controller.format_endnote(self._braced_text(name))
        elif name in INT_DIRECTIVES:
            self._controller.end_word()
            getattr(self._controller, INT_DIRECTIVES[name])(self._int_argument(name))
        elif name in FLAG_DIRECTIVES:
            self._controller.end_word()
            method, value = FLAG_DIRECTIVES[name]
            getattr(self._controller, method)(value)
        else:
            raise FormatError(f"Unknown command \\{name}", name)
        logger.debug(f"Processed \\{name}")

    def _int_argument(self, name: str) -> int:
        m = _INT_RE.match(self._source, self._pos)
        if not m:
            raise FormatError(f"\\{name} needs an integer argument", name)
        self._pos = m.end()
        return int(m.group(1))

    def _braced_text(self, name: str) -> str:
        """Return the text between balanced braces, escapes left intact."""
        text = self._source
        if self._pos >= len(text) or text[self._pos] != '{':
            raise FormatError(f"\\{name} needs an argument in braces", name)
        depth = 0
        i = self._pos
        while i < len(text):
            ch = text[i]
            if ch == '\\':
                i += 2
                continue
            if ch == '{':
                depth += 1
            elif ch == '}':
                depth -= 1
                if depth == 0:
                    body = text[self._pos + 1:i]
                    self._pos = i + 1
                    return body
            i += 1
        raise FormatError(f"Unbalanced braces in \\{name}", name)


def parse_string(source: str, controller, close: bool = True) -> None:
    """Parse SOURCE into CONTROLLER, closing it afterwards if CLOSE."""
    parser = InputParser(source, controller)
    if close:
        parser.process()
    else:
        parser.parse()
