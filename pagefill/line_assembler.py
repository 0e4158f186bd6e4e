"""Assemble words into filled, justified and paginated lines.

A LineAssembler receives words (or the characters of words) and layout
changes from a driver, decides where lines break, and pushes each
finished line to a LineSink. Which break rule applies depends on the
fill mode and on whether the line being built is the first line of a
paragraph:

- fill, first line: the paragraph indent counts against the text width
- fill, later lines: only the plain indentation counts
- no fill: lines break only on an explicit new_line()
"""

import logging
from typing import List, Optional

from .pages import LineSink
from .settings import FormatSettings

logger = logging.getLogger(__name__)

# Gap used when a line would otherwise be stretched too far
MAX_JUSTIFY_GAP = 3


def distribute_blanks(blanks: int, gaps: int) -> List[int]:
    """Return how many blanks go into each of GAPS inter-word gaps.

    When there is room for MAX_JUSTIFY_GAP blanks everywhere, every gap
    gets exactly that. Otherwise gap i receives round(blanks * i / gaps)
    minus what the earlier gaps already hold, rounding halves up, so the
    result always sums to BLANKS.
    """
    if gaps <= 0:
        return []
    if blanks >= MAX_JUSTIFY_GAP * gaps:
        return [MAX_JUSTIFY_GAP] * gaps
    result = []
    placed = 0
    for i in range(1, gaps + 1):
        # floor(blanks * i / gaps + 1/2), exact in integers
        target = (2 * blanks * i + gaps) // (2 * gaps)
        result.append(target - placed)
        placed = target
    return result


def justify_words(words: List[str], blanks: int) -> str:
    """Join WORDS, spreading BLANKS spaces over the gaps between them.

    With fewer BLANKS than gaps (the width shrank under buffered words)
    the words are joined by single spaces.
    """
    if not words:
        return ""
    if blanks < len(words) - 1:
        return " ".join(words)
    parts = [words[0]]
    for word, gap in zip(words[1:], distribute_blanks(blanks, len(words) - 1)):
        parts.append(" " * gap)
        parts.append(word)
    return "".join(parts)


class LineAssembler:
    """Formats a sequence of words into lines sent to a LineSink."""

    def __init__(self, pages: LineSink, settings: Optional[FormatSettings] = None):
        """Create an empty assembler.

        Args:
            pages: Destination for finished lines.
            settings: Starting parameters; defaults to FormatSettings().
        """
        if settings is None:
            settings = FormatSettings()
        settings.validate()
        self._pages = pages
        self._settings = settings
        self._current_word = ""
        self._words: List[str] = []
        self._line_length = 0
        self._sentence = ""
        self._at_bop = True
        self._at_eop = False

    @property
    def settings(self) -> FormatSettings:
        return self._settings

    @property
    def pages(self) -> LineSink:
        return self._pages

    @property
    def fill(self) -> bool:
        """True if fill mode is on."""
        return self._settings.fill

    @property
    def justify(self) -> bool:
        return self._settings.justify

    @property
    def text_height(self) -> int:
        return self._settings.text_height

    @property
    def line_length(self) -> int:
        """Sum of len(word) + 1 over the words waiting in the current line."""
        return self._line_length

    @property
    def words(self) -> List[str]:
        return list(self._words)

    @property
    def pending_word(self) -> str:
        return self._current_word

    @property
    def at_beginning_of_paragraph(self) -> bool:
        return self._at_bop

    @property
    def at_end_of_paragraph(self) -> bool:
        return self._at_eop

    # Words

    def add_text(self, text: str) -> None:
        """Add TEXT to the word currently being built."""
        self._current_word += text

    def finish_word(self) -> None:
        """Finish the current word, if any, and add it to the current line."""
        if self._current_word:
            self.add_word(self._current_word)
        self._current_word = ""

    def add_word(self, word: str) -> None:
        """Add WORD to the current line, breaking the line first if needed."""
        if self.fill and self._words and self._overflows(word):
            logger.debug(f"Breaking line before {word!r} at length {self._line_length}")
            self.new_line()
        self._words.append(word)
        self._line_length += len(word) + 1

    def _overflows(self, word: str) -> bool:
        """Return True if WORD no longer fits on the current line."""
        settings = self._settings
        if self._at_bop:
            indent = settings.first_line_indent
            return self._line_length + len(word) - 1 + indent >= settings.text_width
        return self._line_length + settings.indentation + len(word) - 1 >= settings.text_width

    # Lines

    def add_line(self, line: str) -> None:
        """Send LINE to the sink, preceded by the paragraph skip if due.

        The skip is only emitted for the first line of a paragraph that
        does not already start a page, and it stops at the page boundary.
        """
        height = self._settings.text_height
        if self._at_bop and self._pages.line_count() % height != 0:
            for _ in range(self._settings.paragraph_skip):
                self._pages.push_line("")
                if self._pages.line_count() % height == 0:
                    logger.debug("Paragraph skip stopped at page boundary")
                    break
        self._pages.push_line(line)

    def new_line(self) -> None:
        """Process the end of the current input line.

        No effect if the current line is empty. In fill mode the line is
        flushed the same way set_fill(True) flushes it. Otherwise the
        words are emitted as they are, one space apart.
        """
        if not self._words:
            return
        if self.fill:
            self.set_fill(self.fill)
        else:
            self.finish_word()
            prefix = ""
            if self._at_bop:
                prefix = " " * self._settings.paragraph_indentation
            self.add_line(prefix + " ".join(self._words))
        self._clear_line()
        self._at_bop = False

    def end_paragraph(self) -> None:
        """Close out the current paragraph, if any, and start a new one."""
        self.finish_word()
        self._at_eop = True
        self.new_line()
        self._at_eop = False
        self._at_bop = True

    def _clear_line(self) -> None:
        self._words.clear()
        self._line_length = 0
        self._sentence = ""

    def _flush_filled(self) -> None:
        """Emit the current line as a filled (and maybe justified) line."""
        settings = self._settings
        indent = settings.first_line_indent if self._at_bop else settings.indentation
        prefix = " " * indent
        if settings.justify and not self._at_eop and len(self._words) > 1:
            self.set_justify(settings.justify)
            self.add_line(prefix + self._sentence)
            self._sentence = ""
        else:
            self.add_line(prefix + " ".join(self._words))
        self._clear_line()
        self._at_bop = False

    def _justified_sentence(self) -> str:
        settings = self._settings
        indent = settings.first_line_indent if self._at_bop else settings.indentation
        text_length = self._line_length - len(self._words)
        return justify_words(self._words, settings.text_width - text_length - indent)

    # Parameters

    def set_indentation(self, val: int) -> None:
        """Set the current indentation to VAL >= 0."""
        self._settings = self._settings.updated(indentation=val)

    def set_par_indentation(self, val: int) -> None:
        """Set the paragraph indentation to VAL; indentation + VAL >= 0."""
        self._settings = self._settings.updated(paragraph_indentation=val)

    def set_text_width(self, val: int) -> None:
        """Set the text width to VAL, at least the total indentation."""
        self._settings = self._settings.updated(text_width=val)

    def set_par_skip(self, val: int) -> None:
        """Set paragraph skip to VAL >= 0."""
        self._settings = self._settings.updated(paragraph_skip=val)

    def set_text_height(self, val: int) -> None:
        """Set page height to VAL > 0."""
        self._settings = self._settings.updated(text_height=val)

    def set_fill(self, on: bool) -> None:
        """Iff ON, set fill mode, flushing the current line."""
        self.turn_fill(on)
        if on and self._words:
            self._flush_filled()

    def set_justify(self, on: bool) -> None:
        """Iff ON, set justify mode (which is active only when filling is
        also on) and justify the words of the current line."""
        self.turn_justify(on)
        if on and self.fill and len(self._words) > 1 and not self._at_eop:
            self._sentence = self._justified_sentence()

    def turn_fill(self, on: bool) -> None:
        """Set fill mode without touching the current line."""
        self._settings = self._settings.updated(fill=bool(on))

    def turn_justify(self, on: bool) -> None:
        """Set justify mode without touching the current line."""
        self._settings = self._settings.updated(justify=bool(on))
