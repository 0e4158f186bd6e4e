"""Default formatting parameters for pagefill."""

import sys


class FormatDefaults:
    """Starting parameters for main text."""

    # Layout
    TEXT_WIDTH = 72  # Characters per line
    TEXT_HEIGHT = sys.maxsize  # Lines per page (unbounded unless set)
    INDENTATION = 0  # Left indent for every line
    PARAGRAPH_INDENTATION = 4  # Extra indent for the first line of a paragraph
    PARAGRAPH_SKIP = 0  # Blank lines before a paragraph

    # Modes
    FILL = True
    JUSTIFY = True


class EndnoteDefaults:
    """Starting parameters for endnote text."""

    TEXT_WIDTH = 72
    INDENTATION = 4
    PARAGRAPH_INDENTATION = -4  # Hanging indent for the "[n]" reference
    PARAGRAPH_SKIP = 1


# Preview output
PAGE_BREAK_WIDTH = 72  # Width of the page break marker in preview mode
