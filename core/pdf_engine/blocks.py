"""
Block model - the closed vocabulary of composable document content.

A document is an ordered sequence of blocks. Visual order is input
order; the engine never reorders, merges or drops blocks (empty text
blocks simply lay out to zero height).

Usage:
    from core.pdf_engine.blocks import title, heading, paragraph, bullet

    blocks = [
        title("MARIA SOUZA"),
        heading("SUMÁRIO"),
        paragraph("Analista com 8 anos de experiência..."),
    ]
"""

from dataclasses import dataclass
from typing import Iterable, Sequence, Tuple, Union
from enum import Enum


class BlockKind(Enum):
    """Block kinds (the `type` tag of a PdfTextBlock)"""
    TITLE = "title"
    SUBTITLE = "subtitle"
    HEADING = "heading"
    SUBHEADING = "subheading"
    PARAGRAPH = "paragraph"
    BULLET = "bullet"
    CONTACT_LINE = "contact-line"
    RIGHT_ALIGN = "right-align"
    THREE_COLUMNS = "three-columns"
    SPACER = "spacer"


TEXT_KINDS = frozenset({
    BlockKind.TITLE,
    BlockKind.SUBTITLE,
    BlockKind.HEADING,
    BlockKind.SUBHEADING,
    BlockKind.PARAGRAPH,
    BlockKind.BULLET,
    BlockKind.CONTACT_LINE,
})

COLUMN_COUNT = 3


@dataclass(frozen=True)
class TextBlock:
    """title / subtitle / heading / subheading / paragraph / bullet / contact-line"""
    kind: BlockKind
    text: str

    def __post_init__(self):
        if self.kind not in TEXT_KINDS:
            raise ValueError(f"{self.kind.value} is not a text block kind")
        if not isinstance(self.text, str):
            raise ValueError(f"{self.kind.value} text must be a string")

    @property
    def is_empty(self) -> bool:
        return not self.text.strip()


@dataclass(frozen=True)
class RightAlignBlock:
    """Lines anchored to the right margin, each hugging it independently"""
    lines: Tuple[str, ...]
    kind: BlockKind = BlockKind.RIGHT_ALIGN

    def __post_init__(self):
        if not all(isinstance(line, str) for line in self.lines):
            raise ValueError("right-align lines must be strings")

    @property
    def is_empty(self) -> bool:
        return not any(line.strip() for line in self.lines)


@dataclass(frozen=True)
class Column:
    """One column of a three-columns group"""
    title: str
    items: Tuple[str, ...] = ()

    def __post_init__(self):
        if not isinstance(self.title, str):
            raise ValueError(f"column title must be a string, got {self.title!r}")
        if not all(isinstance(item, str) for item in self.items):
            raise ValueError(f"column items must be strings: {self.items!r}")


@dataclass(frozen=True)
class ThreeColumnsBlock:
    """Parallel column group; each column is laid out independently"""
    columns: Tuple[Column, ...]
    kind: BlockKind = BlockKind.THREE_COLUMNS

    def __post_init__(self):
        if len(self.columns) != COLUMN_COUNT:
            raise ValueError(
                f"three-columns needs exactly {COLUMN_COUNT} columns, got {len(self.columns)}"
            )

    @property
    def is_empty(self) -> bool:
        return all(not c.title.strip() and not c.items for c in self.columns)


@dataclass(frozen=True)
class SpacerBlock:
    """Vertical gap in points"""
    size: float
    kind: BlockKind = BlockKind.SPACER

    def __post_init__(self):
        if self.size < 0:
            raise ValueError(f"spacer size must be >= 0, got {self.size}")

    @property
    def is_empty(self) -> bool:
        return self.size == 0


Block = Union[TextBlock, RightAlignBlock, ThreeColumnsBlock, SpacerBlock]


# ---------------------------------------------------------------------------
# Constructors
# ---------------------------------------------------------------------------

def title(text: str) -> TextBlock:
    return TextBlock(BlockKind.TITLE, text)


def subtitle(text: str) -> TextBlock:
    return TextBlock(BlockKind.SUBTITLE, text)


def heading(text: str) -> TextBlock:
    return TextBlock(BlockKind.HEADING, text)


def subheading(text: str) -> TextBlock:
    return TextBlock(BlockKind.SUBHEADING, text)


def paragraph(text: str) -> TextBlock:
    return TextBlock(BlockKind.PARAGRAPH, text)


def bullet(text: str) -> TextBlock:
    return TextBlock(BlockKind.BULLET, text)


def contact_line(*segments: str) -> TextBlock:
    """Contact strip; segments are pipe-joined ("Email: a@b.c | Tel: 11 9...")."""
    return TextBlock(BlockKind.CONTACT_LINE, " | ".join(segments))


def right_align(lines: Iterable[str]) -> RightAlignBlock:
    return RightAlignBlock(tuple(lines))


def three_columns(columns: Iterable[Union[Column, Tuple[str, Sequence[str]]]]) -> ThreeColumnsBlock:
    """Column group from Column objects or (title, items) pairs."""
    parsed = []
    for col in columns:
        if isinstance(col, Column):
            parsed.append(col)
        else:
            col_title, items = col
            parsed.append(Column(col_title, tuple(items)))
    return ThreeColumnsBlock(tuple(parsed))


def spacer(size: float) -> SpacerBlock:
    return SpacerBlock(float(size))

