"""
Column layout for three-columns groups.

Columns start at the same y and keep their natural height; nothing is
moved between columns to even them out. The group is as tall as its
tallest column.
"""

import math
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .blocks import BlockKind, Column
from .style_builder import StyleResolver
from .templates.base import BlockStyle
from .text_measure import LineWrapper


KIND = BlockKind.THREE_COLUMNS


@dataclass(frozen=True)
class ColumnEntry:
    """A drawable line inside a column, relative to the group top"""
    text: str
    x: float
    dy: float
    height: float
    style: BlockStyle
    role: str


@dataclass(frozen=True)
class PositionedColumn:
    index: int
    x: float
    width: float
    entries: Tuple[ColumnEntry, ...]
    height: float


def column_width(printable_width: float, gap: float, count: int = 3) -> float:
    """(printable width - gaps) / count, rounded down to whole points."""
    return float(math.floor((printable_width - (count - 1) * gap) / count))


class ColumnBalancer:
    """Lays out each column of a group independently, top-down."""

    def __init__(self, resolver: StyleResolver, wrapper: LineWrapper):
        self.resolver = resolver
        self.wrapper = wrapper

    def _layout_column(self, index: int, column: Column, x: float, width: float) -> PositionedColumn:
        title_style = self.resolver.resolve(KIND, "title")
        item_style = self.resolver.resolve(KIND, "item")
        glyph_style = self.resolver.resolve(KIND, "glyph")

        entries: List[ColumnEntry] = []
        dy = 0.0

        title_lines = self.wrapper.wrap(column.title, width, title_style.font)
        for line in title_lines:
            entries.append(ColumnEntry(line, x, dy, title_style.leading, title_style, "title"))
            dy += title_style.leading
        if title_lines:
            dy += title_style.space_after

        text_x = x + item_style.left_indent
        text_width = width - item_style.left_indent
        for item in column.items:
            lines = self.wrapper.wrap(item, text_width, item_style.font)
            if not lines:
                continue
            if item_style.bullet_glyph:
                entries.append(ColumnEntry(
                    item_style.bullet_glyph, x + glyph_style.left_indent, dy,
                    item_style.leading, glyph_style, "glyph",
                ))
            for line in lines:
                entries.append(ColumnEntry(line, text_x, dy, item_style.leading, item_style, "item"))
                dy += item_style.leading
            dy += item_style.space_after

        return PositionedColumn(index, x, width, tuple(entries), dy)

    def balance(
        self,
        columns: Sequence[Column],
        width: float,
        left: float = 0.0,
        gap: float = None,
    ) -> List[PositionedColumn]:
        """
        Position every column of a group.

        Args:
            columns: Column payloads, in visual order
            width: Width of one column
            left: x of the first column
            gap: Space between columns (template gap by default)
        """
        if gap is None:
            gap = self.resolver.template.get_column_gap()
        return [
            self._layout_column(i, column, left + i * (width + gap), width)
            for i, column in enumerate(columns)
        ]

    @staticmethod
    def group_height(positioned: Sequence[PositionedColumn]) -> float:
        return max((c.height for c in positioned), default=0.0)
