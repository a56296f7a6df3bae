"""
CV PDF Template - The visual curriculum.

Features:
- A4 with 15 mm margins
- Sans-serif font (DejaVu Sans)
- Blue section headings and contact values
- Justified body text
"""

from typing import Dict
from reportlab.lib.colors import HexColor, black
from reportlab.lib.enums import TA_LEFT, TA_RIGHT, TA_JUSTIFY

from .base import (
    CompositionTemplate, TemplateType, PageSpec, FontSpec, BlockStyle
)


class CvPdfTemplate(CompositionTemplate):
    """
    Visual CV template.

    Typography: DejaVu Sans
    Page size: A4
    Style: Clean, blue accents
    """

    # Colors
    TITLE_COLOR = HexColor('#1E3A8A')    # Navy
    ACCENT_COLOR = HexColor('#2563EB')   # Blue
    TEXT_COLOR = HexColor('#1F2937')
    MUTED_COLOR = HexColor('#6B7280')

    BULLET = "•"

    @property
    def name(self) -> str:
        return "CV PDF"

    @property
    def template_type(self) -> TemplateType:
        return TemplateType.CV

    def get_page_spec(self) -> PageSpec:
        return PageSpec.a4()

    def _font(self, size, leading, bold=False, color=None) -> FontSpec:
        return FontSpec(
            family=self.SANS,
            size=size,
            leading=leading,
            bold=bold,
            color=color or self.TEXT_COLOR,
        )

    def get_styles(self) -> Dict[str, BlockStyle]:
        return {
            # Document header
            'title': BlockStyle(
                font=self._font(20, 26, bold=True, color=self.TITLE_COLOR),
                space_after=4,
            ),

            'subtitle': BlockStyle(
                font=self._font(12, 16, color=self.MUTED_COLOR),
                space_after=6,
            ),

            # Sections
            'heading': BlockStyle(
                font=self._font(13, 17, bold=True, color=self.ACCENT_COLOR),
                space_before=10,
                space_after=4,
                keep_with_next=True,
            ),

            'subheading': BlockStyle(
                font=self._font(11, 15, bold=True),
                space_before=4,
                space_after=2,
                keep_with_next=True,
            ),

            # Body
            'paragraph': BlockStyle(
                font=self._font(10, 14),
                alignment=TA_JUSTIFY,
                space_after=4,
            ),

            'bullet': BlockStyle(
                font=self._font(10, 14),
                left_indent=12,
                bullet_glyph=self.BULLET,
                space_after=1,
            ),

            'bullet.glyph': BlockStyle(
                font=self._font(10, 14, color=self.ACCENT_COLOR),
                left_indent=3,
            ),

            # Contact strip
            'contact-line': BlockStyle(
                font=self._font(9, 13),
                space_after=4,
            ),

            'contact-line.label': BlockStyle(
                font=self._font(9, 13, bold=True),
            ),

            'contact-line.value': BlockStyle(
                font=self._font(9, 13, color=self.ACCENT_COLOR),
            ),

            'contact-line.separator': BlockStyle(
                font=self._font(9, 13, color=self.MUTED_COLOR),
            ),

            'right-align': BlockStyle(
                font=self._font(9, 13),
                alignment=TA_RIGHT,
                space_after=6,
            ),

            # Column groups (skills, languages, tools)
            'three-columns': BlockStyle(
                font=self._font(9, 12.5),
                space_before=4,
                space_after=6,
            ),

            'three-columns.title': BlockStyle(
                font=self._font(10, 14, bold=True, color=self.ACCENT_COLOR),
                space_after=2,
            ),

            'three-columns.item': BlockStyle(
                font=self._font(9, 12.5),
                left_indent=10,
                bullet_glyph=self.BULLET,
            ),

            'three-columns.glyph': BlockStyle(
                font=self._font(9, 12.5, color=self.ACCENT_COLOR),
                alignment=TA_LEFT,
            ),
        }
