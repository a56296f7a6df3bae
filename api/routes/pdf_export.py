"""
PDF export endpoints: compose a block sequence and download the PDF.

Thin routing layer; layout and rendering live in core/pdf_engine/.
"""

from urllib.parse import quote

from fastapi import APIRouter, HTTPException
from fastapi.responses import Response

from api.deps import font_manager
from api.schemas.pdf_export import PdfExportRequest, TemplateInfo
from config.logging_config import get_logger
from config.settings import settings
from core.pdf_engine import (
    ExportBusy, ExportFailed, MemorySink, PdfExporter,
    available_templates, create_template,
)

logger = get_logger(__name__)

router = APIRouter(tags=["PDF Export"])


def content_disposition(filename: str) -> str:
    """Attachment header; RFC 5987 form for non-ASCII names."""
    if filename.isascii() and '"' not in filename and "\\" not in filename:
        return f'attachment; filename="{filename}"'
    return f"attachment; filename*=UTF-8''{quote(filename, safe='')}"


@router.get("/api/pdf/templates", response_model=list[TemplateInfo])
async def list_templates():
    """List available document templates."""
    result = []
    for template_id in available_templates():
        template = create_template(template_id)
        spec = template.get_page_spec()
        result.append(TemplateInfo(
            id=template_id,
            name=template.name,
            page_width=spec.width,
            page_height=spec.height,
        ))
    return result


@router.post("/api/pdf/export")
async def export_pdf(request: PdfExportRequest):
    """Compose the blocks into a PDF and return it as a download."""
    template = (request.template or settings.default_template).lower()
    if template not in available_templates():
        raise HTTPException(
            status_code=400,
            detail=f"Unknown template '{template}'. Available: {', '.join(available_templates())}"
        )

    sink = MemorySink()
    exporter = PdfExporter(template=template, sink=sink, font_manager=font_manager)
    blocks = [block.to_block() for block in request.blocks]

    try:
        await exporter.export(blocks, request.filename)
    except ExportBusy as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ExportFailed as e:
        logger.error(f"PDF export failed for {request.filename}: {e}")
        raise HTTPException(status_code=500, detail=f"PDF export failed: {e}")

    return Response(
        content=sink.files[request.filename],
        media_type="application/pdf",
        headers={"Content-Disposition": content_disposition(request.filename)},
    )
