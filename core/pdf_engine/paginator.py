"""
Paginator - turns an ordered block sequence into positioned lines.

Walks the blocks in input order with a vertical cursor (points from the
top edge of the page) and decides page breaks:

- A block that does not fit below the cursor moves to a new page.
- Headings and subheadings keep with what follows: the header chain
  plus the first line of the next content block must fit, otherwise
  the chain moves to a new page. A block that follows a header on the
  same page is split at line level rather than moved, so a header is
  never the last thing on a page.
- A block taller than the printable height starts on a fresh page and
  flows across pages between lines, never inside one.
- A spacer at the top of a page is dropped; a spacer running past the
  bottom margin is clamped to it. Under a header it stops short enough
  for the first line of the following content.

Layout of a block is a pure function of (block, page geometry, style),
so two runs over the same input produce identical coordinates.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from reportlab.lib.enums import TA_JUSTIFY

from .blocks import (
    Block, BlockKind, TextBlock, RightAlignBlock, ThreeColumnsBlock, SpacerBlock,
)
from .columns import ColumnBalancer, column_width
from .style_builder import StyleResolver
from .templates.base import BlockStyle, PageSpec
from .text_measure import LineWrapper, TextMeasurer, normalize_text


logger = logging.getLogger(__name__)

# Float tolerance when comparing against the bottom margin
EPSILON = 1e-6

CONTACT_SEPARATOR = " | "


@dataclass(frozen=True)
class PositionedLine:
    """Atomic drawable unit: one run of text in one style at one spot."""
    text: str
    x: float
    y: float            # top of the line box, points from the page's top edge
    page: int           # 1-based
    style: BlockStyle
    width: float = 0.0  # natural (unjustified) measured width
    word_space: float = 0.0  # extra space added to every inter-word gap
    kind: str = ""
    role: Optional[str] = None

    @property
    def baseline(self) -> float:
        """Baseline position, points from the top edge."""
        return self.y + self.style.font_size


@dataclass
class Page:
    """Ordered positioned lines plus page geometry"""
    number: int
    spec: PageSpec
    lines: List[PositionedLine] = field(default_factory=list)

    @property
    def margins(self) -> Tuple[float, float, float, float]:
        return self.spec.margins


@dataclass(frozen=True)
class _Span:
    text: str
    x: float
    style: BlockStyle
    width: float
    word_space: float = 0.0
    role: Optional[str] = None


@dataclass(frozen=True)
class _Box:
    """One line row of a block, offset from the block's top"""
    dy: float
    height: float
    spans: Tuple[_Span, ...]


@dataclass(frozen=True)
class _BlockLayout:
    kind: BlockKind
    boxes: Tuple[_Box, ...]
    content_height: float
    space_before: float = 0.0
    space_after: float = 0.0
    keep_with_next: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.boxes

    @property
    def first_line_extent(self) -> float:
        if not self.boxes:
            return 0.0
        first = self.boxes[0]
        return first.dy + first.height

    @property
    def height(self) -> float:
        return self.space_before + self.content_height + self.space_after


_EMPTY = _BlockLayout(BlockKind.SPACER, (), 0.0)


class Paginator:
    """
    Assigns blocks to pages.

    Holds a mutable cursor while paginating; one instance must not run
    two paginations at the same time.
    """

    def __init__(
        self,
        resolver: StyleResolver,
        page_spec: Optional[PageSpec] = None,
        measurer: Optional[TextMeasurer] = None,
    ):
        self.resolver = resolver
        self.spec = page_spec or resolver.template.get_page_spec()
        self.measurer = measurer or TextMeasurer()
        self.wrapper = LineWrapper(self.measurer)
        self.balancer = ColumnBalancer(resolver, self.wrapper)

        self._pages: List[Page] = []
        self._cursor = 0.0

    # ------------------------------------------------------------------
    # Block measurement
    # ------------------------------------------------------------------

    def layout_block(self, block: Block) -> _BlockLayout:
        """Measure a block into line boxes without placing it."""
        if isinstance(block, SpacerBlock):
            return _EMPTY
        if block.is_empty:
            return _EMPTY
        if isinstance(block, RightAlignBlock):
            return self._layout_right_align(block)
        if isinstance(block, ThreeColumnsBlock):
            return self._layout_columns(block)
        if block.kind is BlockKind.CONTACT_LINE:
            return self._layout_contact_line(block)
        if block.kind is BlockKind.BULLET:
            return self._layout_bullet(block)
        return self._layout_text(block)

    def _finish(self, kind: BlockKind, style: BlockStyle, boxes: List[_Box], content_height: float) -> _BlockLayout:
        return _BlockLayout(
            kind=kind,
            boxes=tuple(boxes),
            content_height=content_height,
            space_before=style.space_before,
            space_after=style.space_after,
            keep_with_next=style.keep_with_next,
        )

    def _wrapped_boxes(self, text: str, style: BlockStyle, x: float, width: float, role=None) -> List[_Box]:
        boxes = []
        justify = style.alignment == TA_JUSTIFY
        for i, line in enumerate(self.wrapper.wrap_lines(text, width, style.font)):
            natural = self.measurer.width(line.text, style.font)
            word_space = 0.0
            gaps = line.text.count(" ")
            if justify and gaps and not line.ends_source_line and natural < width:
                word_space = (width - natural) / gaps
            spans = (_Span(line.text, x, style, natural, word_space, role),) if line.text else ()
            boxes.append(_Box(i * style.leading, style.leading, spans))
        return boxes

    def _layout_text(self, block: TextBlock) -> _BlockLayout:
        style = self.resolver.resolve(block.kind)
        x = self.spec.left_margin + style.left_indent
        width = self.spec.printable_width - style.left_indent
        boxes = self._wrapped_boxes(block.text, style, x, width)
        return self._finish(block.kind, style, boxes, len(boxes) * style.leading)

    def _layout_bullet(self, block: TextBlock) -> _BlockLayout:
        style = self.resolver.resolve(BlockKind.BULLET)
        glyph_style = self.resolver.resolve(BlockKind.BULLET, "glyph")
        x = self.spec.left_margin + style.left_indent
        width = self.spec.printable_width - style.left_indent
        boxes = self._wrapped_boxes(block.text, style, x, width)

        if boxes and style.bullet_glyph:
            glyph = _Span(
                style.bullet_glyph,
                self.spec.left_margin + glyph_style.left_indent,
                glyph_style,
                self.measurer.width(style.bullet_glyph, glyph_style.font),
                role="glyph",
            )
            first = boxes[0]
            boxes[0] = _Box(first.dy, first.height, (glyph,) + first.spans)
        return self._finish(block.kind, style, boxes, len(boxes) * style.leading)

    def _contact_segments(self, text: str) -> List[List[Tuple[str, str]]]:
        """Split 'Label: value | value' into [(role, text), ...] per segment."""
        segments = []
        for raw in normalize_text(text).replace("\n", " ").split("|"):
            segment = " ".join(raw.split())
            if not segment:
                continue
            label, sep, value = segment.partition(":")
            if sep and label.strip() and value.strip():
                segments.append([("label", f"{label.strip()}:"), ("value", f" {value.strip()}")])
            else:
                segments.append([("value", segment)])
        return segments

    def _layout_contact_line(self, block: TextBlock) -> _BlockLayout:
        base = self.resolver.resolve(BlockKind.CONTACT_LINE)
        separator_style = self.resolver.resolve(BlockKind.CONTACT_LINE, "separator")
        separator_width = self.measurer.width(CONTACT_SEPARATOR, separator_style.font)
        left = self.spec.left_margin
        right = left + self.spec.printable_width

        segments = self._contact_segments(block.text)
        if not segments:
            return _EMPTY

        rows: List[List[_Span]] = [[]]
        x = left
        for segment in segments:
            styled = [(role, text, self.resolver.resolve(BlockKind.CONTACT_LINE, role)) for role, text in segment]
            widths = [self.measurer.width(text, style.font) for _, text, style in styled]
            if rows[-1]:
                # Wrap at segment boundaries only
                if x + separator_width + sum(widths) > right + EPSILON:
                    rows.append([])
                    x = left
                else:
                    rows[-1].append(_Span(CONTACT_SEPARATOR, x, separator_style, separator_width, role="separator"))
                    x += separator_width
            for (role, text, style), width in zip(styled, widths):
                rows[-1].append(_Span(text, x, style, width, role=role))
                x += width

        boxes = [_Box(i * base.leading, base.leading, tuple(spans)) for i, spans in enumerate(rows)]
        return self._finish(block.kind, base, boxes, len(boxes) * base.leading)

    def right_aligned_x(self, width: float) -> float:
        """x that puts a run of `width` flush against the right margin."""
        return self.spec.width - self.spec.right_margin - width

    def _layout_right_align(self, block: RightAlignBlock) -> _BlockLayout:
        style = self.resolver.resolve(BlockKind.RIGHT_ALIGN)
        lines = [" ".join(normalize_text(line).split()) for line in block.lines]
        while lines and not lines[-1]:
            lines.pop()
        while lines and not lines[0]:
            lines.pop(0)

        boxes = []
        for i, text in enumerate(lines):
            spans = ()
            if text:
                width = self.measurer.width(text, style.font)
                spans = (_Span(text, self.right_aligned_x(width), style, width),)
            boxes.append(_Box(i * style.leading, style.leading, spans))
        return self._finish(block.kind, style, boxes, len(boxes) * style.leading)

    def _layout_columns(self, block: ThreeColumnsBlock) -> _BlockLayout:
        style = self.resolver.resolve(BlockKind.THREE_COLUMNS)
        gap = self.resolver.template.get_column_gap()
        width = column_width(self.spec.printable_width, gap, len(block.columns))
        positioned = self.balancer.balance(block.columns, width, self.spec.left_margin, gap)

        entries = [entry for column in positioned for entry in column.entries]
        # Stable sort keeps column order for entries on the same row
        entries.sort(key=lambda e: e.dy)
        boxes = [
            _Box(e.dy, e.height, (_Span(
                e.text, e.x, e.style, self.measurer.width(e.text, e.style.font), role=e.role,
            ),))
            for e in entries
        ]
        return self._finish(block.kind, style, boxes, ColumnBalancer.group_height(positioned))

    # ------------------------------------------------------------------
    # Placement
    # ------------------------------------------------------------------

    @property
    def _top(self) -> float:
        return self.spec.top_margin

    @property
    def _bottom(self) -> float:
        return self.spec.printable_bottom

    def _at_top(self) -> bool:
        return self._cursor <= self._top + EPSILON

    def _start_page(self):
        self._pages.append(Page(number=len(self._pages) + 1, spec=self.spec))
        self._cursor = self._top

    def _emit(self, box: _Box, y: float, kind: BlockKind):
        page = self._pages[-1]
        for span in box.spans:
            page.lines.append(PositionedLine(
                text=span.text,
                x=span.x,
                y=y,
                page=page.number,
                style=span.style,
                width=span.width,
                word_space=span.word_space,
                kind=kind.value,
                role=span.role,
            ))

    def _place(self, layout: _BlockLayout, space_before: float):
        """Place a block at the cursor, breaking between boxes on overflow."""
        base = self._cursor + space_before
        shift = 0.0
        for box in layout.boxes:
            y = base + box.dy - shift
            if y + box.height > self._bottom + EPSILON and y > self._top + EPSILON:
                self._start_page()
                base = self._top
                shift = box.dy
                y = self._top
            self._emit(box, y, layout.kind)
        self._cursor = base + layout.content_height - shift + layout.space_after

    def _chain_requirement(self, index: int, layouts: Sequence[_BlockLayout], blocks: Sequence[Block]) -> Optional[float]:
        """
        Space a header chain starting at `index` needs: the headers and
        spacers in the chain plus the first line of the content after it.
        None when no content follows.
        """
        first = layouts[index]
        total = first.space_before + first.content_height + first.space_after
        for j in range(index + 1, len(blocks)):
            if isinstance(blocks[j], SpacerBlock):
                total += blocks[j].size
                continue
            layout = layouts[j]
            if layout.is_empty:
                continue
            if layout.keep_with_next:
                total += layout.height
                continue
            return total + layout.space_before + layout.first_line_extent
        return None

    def _reserve_after(self, index: int, layouts: Sequence[_BlockLayout], blocks: Sequence[Block]) -> float:
        """Room the first content after `index` needs to share the page with a header."""
        for j in range(index + 1, len(blocks)):
            if isinstance(blocks[j], SpacerBlock) or layouts[j].is_empty:
                continue
            layout = layouts[j]
            if layout.keep_with_next:
                return self._chain_requirement(j, layouts, blocks) or 0.0
            return layout.space_before + layout.first_line_extent
        return 0.0

    def _place_spacer(self, block: SpacerBlock, reserve: float = 0.0):
        """Advance the cursor, stopping `reserve` points above the bottom margin."""
        if self._at_top():
            return
        limit = max(self._cursor, self._bottom - reserve)
        self._cursor = min(self._cursor + block.size, limit)

    def paginate(self, blocks: Sequence[Block]) -> List[Page]:
        """
        Lay out `blocks` in order.

        Returns:
            Pages in order; always at least one (possibly blank) page
        """
        self._pages = []
        self._start_page()

        layouts = [self.layout_block(block) for block in blocks]
        after_header = False

        for index, (block, layout) in enumerate(zip(blocks, layouts)):
            if isinstance(block, SpacerBlock):
                reserve = self._reserve_after(index, layouts, blocks) if after_header else 0.0
                self._place_spacer(block, reserve)
                continue
            if layout.is_empty:
                continue

            at_top = self._at_top()
            space_before = 0.0 if at_top else layout.space_before

            if layout.keep_with_next and not at_top and not after_header:
                required = self._chain_requirement(index, layouts, blocks)
                if required is not None and self._cursor + required > self._bottom + EPSILON:
                    self._start_page()
                    at_top, space_before = True, 0.0

            fits = self._cursor + space_before + layout.content_height <= self._bottom + EPSILON
            if not fits and not at_top and not after_header:
                self._start_page()
                space_before = 0.0

            self._place(layout, space_before)
            after_header = layout.keep_with_next

        logger.debug(f"Paginated {len(blocks)} blocks onto {len(self._pages)} page(s)")
        return self._pages