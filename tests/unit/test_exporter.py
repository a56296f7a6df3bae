"""
Unit tests for core/pdf_engine/exporter.py: export orchestration and sinks.
"""

import asyncio
import threading
from dataclasses import replace

import pytest
from reportlab.lib.pagesizes import A4, LETTER
from reportlab.lib.units import mm

from config.settings import Settings
from core.pdf_engine import (
    DirectorySink, ExportBusy, ExportFailed, MeasurementError, MemorySink, PdfExporter,
)
from core.pdf_engine import blocks as b
from core.pdf_engine.templates.cv_pdf import CvPdfTemplate


BLOCKS = [
    b.title("MARIA SOUZA"),
    b.heading("SUMÁRIO"),
    b.paragraph("Texto longo sobre a carreira."),
]


class BlockingSink:
    """Holds the export open until released."""

    def __init__(self):
        self.started = asyncio.Event()
        self.release = asyncio.Event()
        self.files = {}

    async def save(self, filename, data):
        self.started.set()
        await self.release.wait()
        self.files[filename] = data
        return filename


class FailingSink:
    async def save(self, filename, data):
        raise OSError("disk full")


class MissingFontTemplate(CvPdfTemplate):
    """CV styles pointing at a family no font manager knows about."""

    def get_styles(self):
        return {
            key: replace(style, font=replace(style.font, family="NoSuchFamily"))
            for key, style in super().get_styles().items()
        }


@pytest.fixture
def make_exporter(settings, font_manager):
    def _make(sink=None, template="cv", **kwargs):
        return PdfExporter(
            template=template,
            sink=sink or MemorySink(),
            settings=kwargs.pop("settings", settings),
            font_manager=font_manager,
            **kwargs,
        )
    return _make


class TestExport:
    @pytest.mark.asyncio
    async def test_export_to_memory(self, make_exporter):
        sink = MemorySink()
        exporter = make_exporter(sink)

        result = await exporter.export(BLOCKS, "cv-maria-souza.pdf")

        assert result == "cv-maria-souza.pdf"
        assert sink.files["cv-maria-souza.pdf"].startswith(b"%PDF-")
        assert not exporter.is_exporting

    @pytest.mark.asyncio
    async def test_accepts_tagged_dicts(self, make_exporter):
        sink = MemorySink()
        await make_exporter(sink).export(
            [{"type": "title", "text": "MARIA SOUZA"}, {"type": "spacer", "size": 10}],
            "a.pdf",
        )
        assert "a.pdf" in sink.files

    @pytest.mark.asyncio
    async def test_default_filename(self, make_exporter):
        sink = MemorySink()
        await make_exporter(sink).export(BLOCKS)
        assert list(sink.files) == ["documento.pdf"]

    @pytest.mark.asyncio
    async def test_exporter_filename_used_when_none_given(self, make_exporter):
        sink = MemorySink()
        await make_exporter(sink, filename="carta.pdf").export(BLOCKS, "")
        assert list(sink.files) == ["carta.pdf"]

    @pytest.mark.asyncio
    async def test_same_input_same_bytes(self, make_exporter):
        sink = MemorySink()
        exporter = make_exporter(sink)
        await exporter.export(BLOCKS, "a.pdf")
        await exporter.export(BLOCKS, "b.pdf")
        assert sink.files["a.pdf"] == sink.files["b.pdf"]

    @pytest.mark.asyncio
    async def test_empty_document_exports_blank_page(self, make_exporter):
        sink = MemorySink()
        await make_exporter(sink).export([], "vazio.pdf")
        assert sink.files["vazio.pdf"].startswith(b"%PDF-")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("template", ["cv", "ats", "letter"])
    async def test_every_template_exports(self, make_exporter, template):
        sink = MemorySink()
        await make_exporter(sink, template=template).export(BLOCKS, f"{template}.pdf")
        assert sink.files[f"{template}.pdf"].startswith(b"%PDF-")

    @pytest.mark.asyncio
    async def test_render_runs_off_the_event_loop(self, make_exporter):
        exporter = make_exporter()
        render = exporter.render
        threads = []

        def recording(blocks):
            threads.append(threading.get_ident())
            return render(blocks)

        exporter.render = recording
        await exporter.export(BLOCKS, "a.pdf")

        assert len(threads) == 1
        assert threads[0] != threading.get_ident()


class TestSingleInFlight:
    @pytest.mark.asyncio
    async def test_second_export_rejected_while_busy(self, make_exporter):
        sink = BlockingSink()
        exporter = make_exporter(sink)

        first = asyncio.create_task(exporter.export(BLOCKS, "a.pdf"))
        await sink.started.wait()
        assert exporter.is_exporting

        with pytest.raises(ExportBusy):
            await exporter.export(BLOCKS, "b.pdf")
        # The rejected call does not disturb the one in flight
        assert exporter.is_exporting

        sink.release.set()
        assert await first == "a.pdf"
        assert not exporter.is_exporting
        assert list(sink.files) == ["a.pdf"]

    @pytest.mark.asyncio
    async def test_separate_exporters_run_concurrently(self, make_exporter):
        sink = BlockingSink()
        one, two = make_exporter(sink), make_exporter(sink)

        first = asyncio.create_task(one.export(BLOCKS, "a.pdf"))
        second = asyncio.create_task(two.export(BLOCKS, "b.pdf"))
        await sink.started.wait()
        sink.release.set()

        assert await asyncio.gather(first, second) == ["a.pdf", "b.pdf"]


class TestFailures:
    @pytest.mark.asyncio
    async def test_sink_error_wrapped(self, make_exporter):
        exporter = make_exporter(FailingSink())

        with pytest.raises(ExportFailed) as exc_info:
            await exporter.export(BLOCKS, "a.pdf")

        assert isinstance(exc_info.value.cause, OSError)
        assert "disk full" in str(exc_info.value)
        assert not exporter.is_exporting

    @pytest.mark.asyncio
    async def test_exporter_usable_after_failure(self, make_exporter):
        exporter = make_exporter(FailingSink())
        with pytest.raises(ExportFailed):
            await exporter.export(BLOCKS, "a.pdf")

        exporter.sink = MemorySink()
        assert await exporter.export(BLOCKS, "a.pdf") == "a.pdf"

    @pytest.mark.asyncio
    async def test_missing_font_metrics(self, make_exporter):
        exporter = make_exporter(template=MissingFontTemplate())

        with pytest.raises(MeasurementError) as exc_info:
            await exporter.export(BLOCKS, "a.pdf")

        assert exc_info.value.font_name.startswith("NoSuchFamily")
        assert isinstance(exc_info.value, ExportFailed)
        assert not exporter.is_exporting

    @pytest.mark.asyncio
    async def test_invalid_block_dict(self, make_exporter):
        with pytest.raises(ExportFailed) as exc_info:
            await make_exporter().export([{"type": "table"}], "a.pdf")
        assert isinstance(exc_info.value.cause, ValueError)


class TestPageSpec:
    def test_template_geometry_by_default(self, make_exporter):
        spec = make_exporter().page_spec()
        assert spec.size == pytest.approx(A4)
        assert spec.top_margin == pytest.approx(15 * mm)

    def test_letter_page_size(self, make_exporter, tmp_path):
        settings = Settings(_env_file=None, page_size="letter", output_dir=tmp_path)
        spec = make_exporter(settings=settings).page_spec()
        assert spec.size == pytest.approx(LETTER)
        assert spec.margins == pytest.approx(make_exporter().page_spec().margins)

    def test_margin_override_keeps_unset_sides(self, make_exporter, tmp_path):
        settings = Settings(_env_file=None, margin_top_mm=30, output_dir=tmp_path)
        spec = make_exporter(settings=settings).page_spec()
        assert spec.top_margin == pytest.approx(30 * mm)
        assert spec.left_margin == pytest.approx(15 * mm)

    def test_render_uses_first_title(self, make_exporter):
        exporter = make_exporter()
        assert exporter.render([b.title(" "), b.title("MARIA SOUZA")]).startswith(b"%PDF-")


class TestDirectorySink:
    @pytest.mark.asyncio
    async def test_writes_file(self, tmp_path):
        sink = DirectorySink(tmp_path / "out")
        path = await sink.save("cv.pdf", b"%PDF-1.4 data")

        assert path == tmp_path / "out" / "cv.pdf"
        assert path.read_bytes() == b"%PDF-1.4 data"
        assert list((tmp_path / "out").iterdir()) == [path]

    @pytest.mark.asyncio
    async def test_replaces_existing_file(self, tmp_path):
        sink = DirectorySink(tmp_path)
        await sink.save("cv.pdf", b"old")
        path = await sink.save("cv.pdf", b"new")
        assert path.read_bytes() == b"new"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("filename", ["../x.pdf", "sub/x.pdf", "..", ""])
    async def test_rejects_paths(self, tmp_path, filename):
        with pytest.raises(ValueError):
            await DirectorySink(tmp_path).save(filename, b"data")

    @pytest.mark.asyncio
    async def test_exporter_writes_to_directory(self, make_exporter, tmp_path):
        exporter = make_exporter(DirectorySink(tmp_path))
        path = await exporter.export(BLOCKS, "cv-ats-maria-souza.pdf")
        assert path.read_bytes().startswith(b"%PDF-")
