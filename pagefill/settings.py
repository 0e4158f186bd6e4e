"""Formatting parameters owned by a line assembler.

A FormatSettings value is immutable. Setters on the assembler build a
new value with dataclasses.replace(), validate it, and only then swap it
in, so a rejected value never takes effect.
"""

from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict

from .constants import EndnoteDefaults, FormatDefaults
from .errors import (
    FormatError,
    InvalidIndentation,
    InvalidParSkip,
    InvalidTextHeight,
    InvalidTextWidth,
)


@dataclass(frozen=True)
class FormatSettings:
    """Layout parameters for one stream of text.

    Attributes:
        text_width: Characters per line, indentation included
        text_height: Lines per page
        indentation: Left indent applied to every filled line
        paragraph_indentation: Extra indent for a paragraph's first line (may be negative)
        paragraph_skip: Blank lines emitted before a paragraph
        fill: Whether words are wrapped to the text width
        justify: Whether filled lines are stretched to the text width
    """
    text_width: int = FormatDefaults.TEXT_WIDTH
    text_height: int = FormatDefaults.TEXT_HEIGHT
    indentation: int = FormatDefaults.INDENTATION
    paragraph_indentation: int = FormatDefaults.PARAGRAPH_INDENTATION
    paragraph_skip: int = FormatDefaults.PARAGRAPH_SKIP
    fill: bool = FormatDefaults.FILL
    justify: bool = FormatDefaults.JUSTIFY

    @property
    def first_line_indent(self) -> int:
        """Indent of the first line of a paragraph."""
        return self.indentation + self.paragraph_indentation

    @classmethod
    def for_endnotes(cls) -> 'FormatSettings':
        """Settings used for the endnote section."""
        return cls(
            text_width=EndnoteDefaults.TEXT_WIDTH,
            indentation=EndnoteDefaults.INDENTATION,
            paragraph_indentation=EndnoteDefaults.PARAGRAPH_INDENTATION,
            paragraph_skip=EndnoteDefaults.PARAGRAPH_SKIP,
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'FormatSettings':
        """Build settings from a mapping, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        settings = cls(**{k: v for k, v in data.items() if k in known})
        settings.validate()
        return settings

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def updated(self, **changes: Any) -> 'FormatSettings':
        """Return a validated copy with CHANGES applied.

        Raises a FormatError subclass if the result breaks an invariant;
        self is left untouched either way.
        """
        settings = replace(self, **changes)
        try:
            settings.validate()
        except FormatError as e:
            e.value = _offending(changes, e.value)
            raise
        return settings

    def validate(self) -> None:
        """Raise a FormatError subclass if any invariant is broken."""
        if self.indentation < 0:
            raise InvalidIndentation(
                f"Indentation must not be negative: {self.indentation}",
                self.indentation)
        if self.first_line_indent < 0:
            raise InvalidIndentation(
                f"Total indentation must not be negative: "
                f"{self.indentation} + {self.paragraph_indentation}",
                self.paragraph_indentation)
        if self.text_width < self.first_line_indent:
            raise InvalidTextWidth(
                f"Text width {self.text_width} is smaller than the "
                f"indentation {self.first_line_indent}",
                self.text_width)
        if self.text_height <= 0:
            raise InvalidTextHeight(
                f"Text height must be positive: {self.text_height}",
                self.text_height)
        if self.paragraph_skip < 0:
            raise InvalidParSkip(
                f"Paragraph skip must not be negative: {self.paragraph_skip}",
                self.paragraph_skip)


def _offending(changes: Dict[str, Any], default: Any = None) -> Any:
    """Return the single changed value, or DEFAULT when several changed."""
    if len(changes) == 1:
        return next(iter(changes.values()))
    return default
