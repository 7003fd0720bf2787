"""Rendered text plus its highlight spans."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator


@dataclass(frozen=True)
class RgbColor:
    red: int
    green: int
    blue: int

    def __post_init__(self) -> None:
        for channel in (self.red, self.green, self.blue):
            if not 0 <= channel <= 255:
                raise ValueError(f"Color channel out of range: {channel}")

    @classmethod
    def from_hex(cls, value: str) -> "RgbColor":
        """Parse ``#rrggbb`` (leading ``#`` optional)."""
        digits = value.lstrip("#")
        if len(digits) != 6:
            raise ValueError(f"Expected #rrggbb color, got {value!r}")
        return cls(int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))

    @property
    def hex(self) -> str:
        return f"#{self.red:02x}{self.green:02x}{self.blue:02x}"


@dataclass(frozen=True)
class HighlightSpan:
    """Half-open ``[start, end)`` range colored by rule ``rule_index``."""

    start: int
    end: int
    color: RgbColor
    rule_index: int = 0

    @property
    def length(self) -> int:
        return self.end - self.start


@dataclass(frozen=True)
class RenderedDocument:
    """Output of one render cycle; never updated in place."""

    text: str = ""
    spans: tuple[HighlightSpan, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.text and not self.spans

    def draw_order(self) -> Iterator[HighlightSpan]:
        """Spans in the order a display should paint them.

        Later rules are painted last so they win where spans overlap.
        """
        return iter(sorted(self.spans, key=lambda span: span.rule_index))

    def color_at(self, offset: int) -> RgbColor | None:
        """Effective color at ``offset`` after draw-order resolution."""
        color = None
        for span in self.draw_order():
            if span.start <= offset < span.end:
                color = span.color
        return color


EMPTY_DOCUMENT = RenderedDocument()
