"""
PDF Engine - Block-composed, paginated PDF documents using ReportLab.

This module provides:
- A closed block vocabulary (title, heading, paragraph, bullet, ...)
- Text measurement and greedy wrapping with Portuguese diacritics
- Pagination with header orphan control
- Templates for CV, ATS resume and cover letter
- An export orchestrator with a single in-flight export

Usage:
    from core.pdf_engine import PdfExporter, blocks as b

    exporter = PdfExporter(template="ats")
    await exporter.export(
        [b.title("MARIA SOUZA"), b.heading("SUMÁRIO"), b.paragraph("...")],
        "cv-ats-maria-souza.pdf",
    )

Key components:
- PdfExporter: Public entry point
- Paginator: Page-break decisions, PositionedLine output
- PdfRenderer: Draws pages onto a ReportLab canvas
- StyleResolver / FontManager: Styles and fonts
- TextMeasurer / LineWrapper: Widths and wrapping
- ColumnBalancer: three-columns groups
"""

from . import blocks
from .blocks import (
    Block, BlockKind, Column, TextBlock, RightAlignBlock, ThreeColumnsBlock, SpacerBlock,
)
from .columns import ColumnBalancer, PositionedColumn
from .exceptions import (
    PdfEngineError, ExportBusy, ExportFailed, MeasurementError, StyleNotFoundError,
)
from .exporter import PdfExporter, DownloadSink, DirectorySink, MemorySink
from .paginator import Paginator, Page, PositionedLine
from .renderer import PdfRenderer
from .schemas import PdfTextBlock, block_from_dict, blocks_from_dicts
from .style_builder import FontManager, StyleResolver
from .templates import (
    CompositionTemplate, TemplateType, PageSpec, FontSpec, BlockStyle,
    create_template, available_templates,
)
from .text_measure import TextMeasurer, LineWrapper


__all__ = [
    # Entry point
    'PdfExporter',
    'DownloadSink',
    'DirectorySink',
    'MemorySink',

    # Blocks
    'blocks',
    'Block',
    'BlockKind',
    'Column',
    'TextBlock',
    'RightAlignBlock',
    'ThreeColumnsBlock',
    'SpacerBlock',
    'PdfTextBlock',
    'block_from_dict',
    'blocks_from_dicts',

    # Layout
    'Paginator',
    'Page',
    'PositionedLine',
    'ColumnBalancer',
    'PositionedColumn',
    'TextMeasurer',
    'LineWrapper',
    'PdfRenderer',

    # Styles
    'FontManager',
    'StyleResolver',
    'CompositionTemplate',
    'TemplateType',
    'PageSpec',
    'FontSpec',
    'BlockStyle',
    'create_template',
    'available_templates',

    # Errors
    'PdfEngineError',
    'ExportBusy',
    'ExportFailed',
    'MeasurementError',
    'StyleNotFoundError',
]


__version__ = '1.0.0'
