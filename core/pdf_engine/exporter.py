"""
Export orchestration - the public entry point of the PDF engine.

Layout and drawing run in a worker thread; the finished bytes are then
handed to a download sink. One export per exporter at a time: a
second call while one is in flight fails fast with ExportBusy.

Usage:
    exporter = PdfExporter(template="ats", sink=DirectorySink("out/"))
    await exporter.export(blocks, "cv-ats-maria-souza.pdf")
"""

import asyncio
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Protocol, Union

from config.settings import Settings, get_settings

from .blocks import Block, BlockKind, TextBlock
from .exceptions import ExportBusy, ExportFailed
from .paginator import Page, Paginator
from .renderer import PdfRenderer
from .schemas import block_from_dict
from .style_builder import FontManager, StyleResolver
from .templates import CompositionTemplate, PageSpec, create_template


logger = logging.getLogger(__name__)


class DownloadSink(Protocol):
    """Receives the finished document; the terminal effect of an export."""

    async def save(self, filename: str, data: bytes) -> Any:
        ...


class MemorySink:
    """Keeps exported documents in memory, keyed by filename."""

    def __init__(self):
        self.files: Dict[str, bytes] = {}

    async def save(self, filename: str, data: bytes) -> str:
        self.files[filename] = data
        return filename


class DirectorySink:
    """
    Writes exported documents into a directory.

    The file appears atomically (temp file + rename), so a reader never
    sees a partial PDF.
    """

    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory)

    def _target(self, filename: str) -> Path:
        if not filename or filename in (".", "..") or Path(filename).name != filename:
            raise ValueError(f"Invalid download filename: {filename!r}")
        return self.directory / filename

    def _write(self, target: Path, data: bytes) -> Path:
        self.directory.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.directory, suffix=".part")
        try:
            with os.fdopen(fd, "wb") as tmp:
                tmp.write(data)
            os.replace(tmp_name, target)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        return target

    async def save(self, filename: str, data: bytes) -> Path:
        target = self._target(filename)
        return await asyncio.to_thread(self._write, target, data)


BlockInput = Union[Block, Dict[str, Any]]


class PdfExporter:
    """
    Drives pagination and rendering of a block sequence and hands the
    result to a download sink.

    Exposes `is_exporting`; exports on one instance never interleave.
    """

    def __init__(
        self,
        template: Union[str, CompositionTemplate, None] = None,
        sink: Optional[DownloadSink] = None,
        settings: Optional[Settings] = None,
        font_manager: Optional[FontManager] = None,
        filename: Optional[str] = None,
    ):
        """
        Args:
            template: Template name or instance (settings default if None)
            sink: Where finished documents go (output directory if None)
            settings: Settings instance (global settings if None)
            font_manager: Font registry (system + configured font dirs if None)
            filename: Default download name for this exporter
        """
        self.settings = settings or get_settings()

        template = template or self.settings.default_template
        self.template = create_template(template) if isinstance(template, str) else template

        if font_manager is None:
            font_manager = FontManager(FontManager.DEFAULT_SEARCH_PATHS + list(self.settings.font_dirs))
        self.font_manager = font_manager

        self.sink = sink or DirectorySink(self.settings.output_dir)
        self.filename = filename

        self._resolver: Optional[StyleResolver] = None
        self._is_exporting = False

    @property
    def is_exporting(self) -> bool:
        return self._is_exporting

    @property
    def resolver(self) -> StyleResolver:
        if self._resolver is None:
            self.font_manager.register_template_fonts(self.template)
            self._resolver = StyleResolver(self.template, self.font_manager)
            self._resolver.build_all_styles()
        return self._resolver

    def page_spec(self) -> PageSpec:
        """Template geometry with configured page size / margin overrides."""
        spec = self.template.get_page_spec()
        if self.settings.page_size == "LETTER":
            spec = PageSpec.us_letter(spec.margins)
        overrides = self.settings.margin_overrides
        if any(overrides):
            spec = spec.with_margins(tuple(
                override or current for override, current in zip(overrides, spec.margins)
            ))
        return spec

    @staticmethod
    def coerce_blocks(blocks: Iterable[BlockInput]) -> List[Block]:
        """
        Snapshot the caller's sequence; tagged dicts are validated as
        PdfTextBlock and become blocks.

        Raises:
            pydantic.ValidationError: Malformed block dictionary
        """
        return [block_from_dict(b) if isinstance(b, dict) else b for b in blocks]

    def paginate(self, blocks: Iterable[BlockInput]) -> List[Page]:
        paginator = Paginator(self.resolver, self.page_spec())
        return paginator.paginate(self.coerce_blocks(blocks))

    def render(self, blocks: Iterable[BlockInput]) -> bytes:
        """Paginate and draw `blocks`; returns the complete PDF."""
        blocks = self.coerce_blocks(blocks)
        pages = self.paginate(blocks)
        doc_title = next(
            (b.text.strip() for b in blocks
             if isinstance(b, TextBlock) and b.kind is BlockKind.TITLE and not b.is_empty),
            None,
        )
        renderer = PdfRenderer(title=doc_title, author=self.settings.document_author or None)
        return renderer.render(pages)

    async def export(self, blocks: Iterable[BlockInput], filename: Optional[str] = None) -> Any:
        """
        Export `blocks` as a PDF named `filename`.

        Returns:
            Whatever the sink returns (path for DirectorySink)

        Raises:
            ExportBusy: Another export on this instance is in flight
            MeasurementError: Font metrics unavailable
            ExportFailed: Any other failure; `cause` holds the original error
        """
        filename = filename or self.filename or self.settings.default_filename
        if self._is_exporting:
            raise ExportBusy(filename)

        self._is_exporting = True
        try:
            logger.info(f"Exporting {filename} with template '{self.template.template_type.value}'")
            blocks = self.coerce_blocks(blocks)
            # CPU-bound: runs in a worker thread
            data = await asyncio.to_thread(self.render, blocks)
            result = await self.sink.save(filename, data)
        except ExportFailed as e:
            logger.error(f"Export of {filename} failed: {e}")
            raise
        except Exception as e:
            logger.error(f"Export of {filename} failed: {e}")
            raise ExportFailed(f"Export of '{filename}' failed", e) from e
        finally:
            self._is_exporting = False

        logger.info(f"Exported {filename} ({len(data)} bytes)")
        return result
