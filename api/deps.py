"""
Shared dependencies for API routes.
"""

from config.settings import settings
from core.pdf_engine import FontManager

# Font registration is process-wide in ReportLab; share one registry
font_manager = FontManager(FontManager.DEFAULT_SEARCH_PATHS + list(settings.font_dirs))
