"""
Base template classes for block-composed PDF documents.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from typing import Dict, Tuple, Optional, List
from enum import Enum

from reportlab.lib.units import mm
from reportlab.lib.pagesizes import A4, LETTER
from reportlab.lib.colors import Color, black
from reportlab.lib.enums import TA_LEFT, TA_RIGHT, TA_JUSTIFY


class TemplateType(Enum):
    """Document template types"""
    CV = "cv"
    ATS = "ats"
    LETTER = "letter"


@dataclass(frozen=True)
class PageSpec:
    """Page layout specification"""
    width: float       # in points
    height: float      # in points
    top_margin: float
    right_margin: float
    bottom_margin: float
    left_margin: float

    @property
    def size(self) -> Tuple[float, float]:
        return (self.width, self.height)

    @property
    def margins(self) -> Tuple[float, float, float, float]:
        """(top, right, bottom, left)"""
        return (self.top_margin, self.right_margin, self.bottom_margin, self.left_margin)

    @property
    def printable_width(self) -> float:
        return self.width - self.left_margin - self.right_margin

    @property
    def printable_bottom(self) -> float:
        """Lowest usable y, measured from the top edge."""
        return self.height - self.bottom_margin

    def with_margins(self, margins: Tuple[float, float, float, float]) -> 'PageSpec':
        top, right, bottom, left = margins
        return replace(
            self,
            top_margin=top, right_margin=right,
            bottom_margin=bottom, left_margin=left,
        )

    @classmethod
    def a4(cls, margins: Tuple[float, float, float, float] = None) -> 'PageSpec':
        """Standard A4 (210 x 297 mm)"""
        m = margins or (15*mm, 15*mm, 15*mm, 15*mm)
        return cls(
            width=A4[0], height=A4[1],
            top_margin=m[0], right_margin=m[1],
            bottom_margin=m[2], left_margin=m[3]
        )

    @classmethod
    def us_letter(cls, margins: Tuple[float, float, float, float] = None) -> 'PageSpec':
        """US Letter (8.5 x 11 in)"""
        m = margins or (15*mm, 15*mm, 15*mm, 15*mm)
        return cls(
            width=LETTER[0], height=LETTER[1],
            top_margin=m[0], right_margin=m[1],
            bottom_margin=m[2], left_margin=m[3]
        )


@dataclass(frozen=True)
class FontSpec:
    """Font specification for PDF"""
    family: str          # Font family name (must be registered)
    size: float          # Font size in points
    leading: float       # Line height in points (usually size * 1.2-1.5)
    bold: bool = False
    italic: bool = False
    color: Color = field(default_factory=lambda: black)

    def get_font_name(self) -> str:
        """Get ReportLab font name based on style"""
        base = self.family
        if self.bold and self.italic:
            return f"{base}-BoldOblique"
        elif self.bold:
            return f"{base}-Bold"
        elif self.italic:
            return f"{base}-Oblique"
        return base


@dataclass(frozen=True)
class BlockStyle:
    """Concrete visual style of one block kind (or one role inside it)"""
    font: FontSpec
    alignment: int = TA_LEFT     # TA_LEFT, TA_RIGHT, TA_JUSTIFY
    space_before: float = 0      # points
    space_after: float = 0       # points
    left_indent: float = 0       # points
    bullet_glyph: Optional[str] = None

    # Orphan control: never leave this block last on a page
    keep_with_next: bool = False

    @property
    def font_size(self) -> float:
        return self.font.size

    @property
    def weight(self) -> str:
        return "bold" if self.font.bold else "normal"

    @property
    def color(self) -> Color:
        return self.font.color

    @property
    def leading(self) -> float:
        return self.font.leading


def style_key(kind: str, role: Optional[str] = None) -> str:
    """Key used in template style tables: 'bullet' or 'bullet.glyph'."""
    return f"{kind}.{role}" if role else kind


class CompositionTemplate(ABC):
    """
    Abstract base class for document templates.

    A template supplies page geometry, font files and the style table
    the StyleResolver reads from.
    """

    SANS = 'DejaVuSans'

    # Gap between the columns of a three-columns group
    COLUMN_GAP = 5*mm

    @property
    @abstractmethod
    def name(self) -> str:
        """Template display name"""
        pass

    @property
    @abstractmethod
    def template_type(self) -> TemplateType:
        """Template type enum"""
        pass

    @abstractmethod
    def get_page_spec(self) -> PageSpec:
        """Return page size and margins"""
        pass

    @abstractmethod
    def get_styles(self) -> Dict[str, BlockStyle]:
        """
        Return the style table keyed by style_key(kind, role).

        Required keys:
        - title, subtitle, heading, subheading, paragraph, right-align
        - bullet, bullet.glyph
        - contact-line, contact-line.label, contact-line.value,
          contact-line.separator
        - three-columns, three-columns.title, three-columns.item,
          three-columns.glyph

        Block-level spacing (space_before/space_after) is read from the
        role-less key; role keys only style the spans drawn inside.
        """
        pass

    def get_fonts(self) -> Dict[str, str]:
        """
        Return font file mapping for registration.
        Keys: 'regular', 'bold', 'italic', 'bold_italic'
        """
        return {
            'regular': 'DejaVuSans.ttf',
            'bold': 'DejaVuSans-Bold.ttf',
            'italic': 'DejaVuSans-Oblique.ttf',
            'bold_italic': 'DejaVuSans-BoldOblique.ttf',
        }

    def get_column_gap(self) -> float:
        return self.COLUMN_GAP


def create_template(template_type: str) -> CompositionTemplate:
    """
    Factory function to create a document template by name.

    Args:
        template_type: 'cv', 'ats', or 'letter'

    Returns:
        CompositionTemplate instance
    """
    from .cv_pdf import CvPdfTemplate
    from .ats_pdf import AtsPdfTemplate
    from .letter_pdf import LetterPdfTemplate

    templates = {
        'cv': CvPdfTemplate,
        'ats': AtsPdfTemplate,
        'letter': LetterPdfTemplate,
    }

    template_class = templates.get(template_type.lower())
    if not template_class:
        raise ValueError(
            f"Unknown PDF template: {template_type}. "
            f"Available: {list(templates.keys())}"
        )

    return template_class()


def available_templates() -> List[str]:
    return [t.value for t in TemplateType]
