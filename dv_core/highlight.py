"""Regex highlight rules and the engine that applies them to rendered text."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable

from dv_core.document import HighlightSpan, RgbColor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HighlightRule:
    """A pattern whose first capture group is painted with ``color``."""

    pattern: re.Pattern[str]
    color: RgbColor

    @classmethod
    def compile(
        cls, pattern: str, color: RgbColor | str, flags: int = 0
    ) -> "HighlightRule":
        if isinstance(color, str):
            color = RgbColor.from_hex(color)
        return cls(re.compile(pattern, flags), color)


def apply_highlights(text: str, rules: Iterable[HighlightRule]) -> list[HighlightSpan]:
    """Compute colored ranges for ``text``.

    Every rule scans the original text independently, in declaration order.
    Only the first capture group of a match is colored; rules without groups
    and matches where the group did not participate contribute nothing.
    The result is sorted by start offset; overlaps are kept as separate
    spans and ``rule_index`` tells the display which one to paint last.
    """
    spans: list[HighlightSpan] = []
    for index, rule in enumerate(rules):
        if rule.pattern.groups < 1:
            logger.debug("Highlight rule %r has no capture group", rule.pattern.pattern)
            continue
        for match in rule.pattern.finditer(text):
            start, end = match.span(1)
            if start < 0 or start == end:
                continue
            spans.append(HighlightSpan(start, end, rule.color, index))
    # list.sort is stable: equal starts keep declaration order.
    spans.sort(key=lambda span: span.start)
    return spans
