"""
PDF Template module exports.
"""

from .base import (
    CompositionTemplate,
    TemplateType,
    PageSpec,
    FontSpec,
    BlockStyle,
    style_key,
    create_template,
    available_templates,
)

from .cv_pdf import CvPdfTemplate
from .ats_pdf import AtsPdfTemplate
from .letter_pdf import LetterPdfTemplate


__all__ = [
    # Base classes
    'CompositionTemplate',
    'TemplateType',
    'PageSpec',
    'FontSpec',
    'BlockStyle',
    'style_key',

    # Factory
    'create_template',
    'available_templates',

    # Template implementations
    'CvPdfTemplate',
    'AtsPdfTemplate',
    'LetterPdfTemplate',
]
