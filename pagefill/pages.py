"""Destinations for finished lines of text.

A LineSink receives lines that are already fully formatted and knows how
many it has received, which is all a LineAssembler needs to work out
where a page boundary falls.
"""

from abc import ABC, abstractmethod
from typing import List, TextIO

from .constants import PAGE_BREAK_WIDTH


class LineSink(ABC):
    """Receives one finished line at a time."""

    @abstractmethod
    def push_line(self, text: str) -> None:
        """Append TEXT as the next line of output."""

    @abstractmethod
    def line_count(self) -> int:
        """Return the number of lines pushed so far."""


class PagePrinter(LineSink):
    """Writes each line immediately to a text stream, newline terminated."""

    def __init__(self, out: TextIO):
        self._out = out
        self._count = 0

    def push_line(self, text: str) -> None:
        self._out.write(text + "\n")
        self._count += 1

    def line_count(self) -> int:
        return self._count


class PageCollector(LineSink):
    """Stores lines for later retrieval."""

    def __init__(self):
        self._lines: List[str] = []

    def push_line(self, text: str) -> None:
        self._lines.append(text)

    def line_count(self) -> int:
        return len(self._lines)

    @property
    def lines(self) -> List[str]:
        """A copy of the collected lines."""
        return list(self._lines)

    def pages(self, text_height: int) -> List[List[str]]:
        """Split the collected lines into pages of TEXT_HEIGHT lines.

        The last page may be short. No lines means no pages.
        """
        return [self._lines[i:i + text_height]
                for i in range(0, len(self._lines), text_height)]

    def write_to(self, sink: LineSink) -> None:
        """Replay every collected line into SINK."""
        for line in self._lines:
            sink.push_line(line)

    def write_pages_to(self, sink: LineSink, text_height: int) -> None:
        """Replay the lines into SINK with a marker line between pages."""
        for page_num, page in enumerate(self.pages(text_height), start=1):
            if page_num > 1:
                sink.push_line(page_break_line(page_num))
            for line in page:
                sink.push_line(line)


def page_break_line(page_num: int, width: int = PAGE_BREAK_WIDTH) -> str:
    """Create a centered page break line with page number."""
    page_text = f" Page {page_num} "
    padding = (width - len(page_text)) // 2
    return "─" * padding + page_text + "─" * (width - padding - len(page_text))
