"""Route parsed input to the main text and endnote assemblers."""

import logging
from typing import Optional, TextIO

from .errors import FormatError
from .input_parser import parse_string
from .line_assembler import LineAssembler
from .pages import PageCollector, PagePrinter
from .settings import FormatSettings

logger = logging.getLogger(__name__)


class Controller:
    """Receives calls from an InputParser and formats the text.

    Main text and endnotes are collected separately. Nothing reaches the
    output stream until close(), which writes the main text followed by
    the endnotes.
    """

    def __init__(self, out: TextIO, settings: Optional[FormatSettings] = None,
                 preview: bool = False):
        """Initialize a controller writing to OUT.

        Args:
            out: Text stream receiving the formatted lines on close().
            settings: Starting parameters for the main text.
            preview: Whether to mark page breaks in the output.
        """
        self._out = out
        self._preview = preview
        self._main_pages = PageCollector()
        self._endnote_pages = PageCollector()
        self._main = LineAssembler(self._main_pages, settings)
        self._endnotes = LineAssembler(self._endnote_pages, FormatSettings.for_endnotes())
        self._lines = self._main
        self._endnote_count = 0
        self._closed = False

    @property
    def main_lines(self) -> LineAssembler:
        return self._main

    @property
    def endnote_lines(self) -> LineAssembler:
        return self._endnotes

    @property
    def endnote_count(self) -> int:
        return self._endnote_count

    @property
    def in_endnote(self) -> bool:
        return self._lines is self._endnotes

    def add_text(self, text: str) -> None:
        self._lines.add_text(text)

    def end_word(self) -> None:
        self._lines.finish_word()

    def add_newline(self) -> None:
        """Handle the end of an input line.

        In fill mode a newline only separates words.
        """
        if not self._lines.fill:
            self._lines.new_line()

    def end_paragraph(self) -> None:
        self._lines.end_paragraph()

    def set_indentation(self, val: int) -> None:
        self._lines.set_indentation(val)

    def set_par_indentation(self, val: int) -> None:
        self._lines.set_par_indentation(val)

    def set_text_width(self, val: int) -> None:
        self._lines.set_text_width(val)

    def set_text_height(self, val: int) -> None:
        self._lines.set_text_height(val)

    def set_par_skip(self, val: int) -> None:
        self._lines.set_par_skip(val)

    def set_fill(self, on: bool) -> None:
        self._lines.set_fill(on)

    def set_justify(self, on: bool) -> None:
        self._lines.set_justify(on)

    def format_endnote(self, text: str) -> None:
        """Add a reference to the next endnote and format TEXT as its body.

        The reference "[n]" is appended to the word being built in the main
        text; the body becomes its own paragraph in the endnote section.
        """
        if self.in_endnote:
            raise FormatError("Endnotes cannot be nested", text)
        self._endnote_count += 1
        reference = f"[{self._endnote_count}]"
        self._main.add_text(reference)
        logger.debug(f"Formatting endnote {reference}")
        self._lines = self._endnotes
        try:
            parse_string(f"{reference} {text}", self, close=False)
            self._endnotes.end_paragraph()
        finally:
            self._lines = self._main

    def close(self) -> None:
        """Finish the text and write everything to the output stream."""
        if self._closed:
            return
        self._closed = True
        self._main.end_paragraph()
        printer = PagePrinter(self._out)
        if self._preview:
            self._main_pages.write_pages_to(printer, self._main.text_height)
        else:
            self._main_pages.write_to(printer)
        if self._endnote_count > 0:
            for _ in range(self._endnotes.settings.paragraph_skip):
                printer.push_line("")
            self._endnote_pages.write_to(printer)
        logger.debug(f"Wrote {printer.line_count()} lines")
