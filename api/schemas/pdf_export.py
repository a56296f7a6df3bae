"""Pydantic schemas for the PDF export endpoint."""

from typing import List, Optional

from pydantic import BaseModel, Field

from core.pdf_engine.schemas import PdfTextBlock


class PdfExportRequest(BaseModel):
    filename: str = Field(..., min_length=1, max_length=255)
    template: Optional[str] = None
    blocks: List[PdfTextBlock]


class TemplateInfo(BaseModel):
    id: str
    name: str
    page_width: float
    page_height: float
