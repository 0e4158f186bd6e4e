"""Pagefill - fill, justify and paginate text into fixed-width lines."""

from .controller import Controller
from .errors import (
    FormatError,
    InvalidIndentation,
    InvalidParSkip,
    InvalidTextHeight,
    InvalidTextWidth,
)
from .input_parser import InputParser
from .line_assembler import LineAssembler, distribute_blanks, justify_words
from .pages import LineSink, PageCollector, PagePrinter
from .settings import FormatSettings

__all__ = [
    'Controller',
    'FormatError',
    'FormatSettings',
    'InputParser',
    'InvalidIndentation',
    'InvalidParSkip',
    'InvalidTextHeight',
    'InvalidTextWidth',
    'LineAssembler',
    'LineSink',
    'PageCollector',
    'PagePrinter',
    'distribute_blanks',
    'justify_words',
]
