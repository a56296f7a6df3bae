"""
Font management and style resolution for block-composed PDFs.

This module handles:
- Font file discovery and registration (DejaVu for Portuguese text)
- Fallback to the built-in Helvetica family when DejaVu is missing
- Resolving (block kind, role) to a concrete BlockStyle
"""

import os
import logging
from dataclasses import replace
from pathlib import Path
from typing import Dict, Iterable, Optional

from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont

from .exceptions import StyleNotFoundError
from .templates.base import CompositionTemplate, BlockStyle, style_key


logger = logging.getLogger(__name__)


class FontManager:
    """
    Manages font registration for ReportLab.

    Handles:
    - Font file discovery across multiple paths
    - TTF font registration with ReportLab
    - Family fallback (DejaVuSans -> Helvetica) when files are missing
    """

    # Default search paths for fonts
    DEFAULT_SEARCH_PATHS = [
        # System paths (Linux)
        '/usr/share/fonts/truetype/dejavu/',
        '/usr/share/fonts/dejavu/',
        '/usr/share/fonts/TTF/',
        '/usr/local/share/fonts/',

        # User paths
        os.path.expanduser('~/.fonts/'),
        os.path.expanduser('~/.local/share/fonts/'),

        # macOS paths
        '/Library/Fonts/',
        os.path.expanduser('~/Library/Fonts/'),

        # Project paths
        './fonts/',
        './assets/fonts/',
    ]

    # Variant suffixes as produced by FontSpec.get_font_name()
    VARIANT_SUFFIXES = {
        'regular': '',
        'bold': '-Bold',
        'italic': '-Oblique',
        'bold_italic': '-BoldOblique',
    }

    # Built-in PostScript fonts; always available, WinAnsi covers pt-BR
    FALLBACK_FAMILY = 'Helvetica'

    def __init__(self, search_paths: Optional[Iterable[str]] = None):
        """
        Initialize FontManager.

        Args:
            search_paths: Paths to search for fonts. Defaults to the
                system/user/project paths; pass [] to force fallback fonts.
        """
        if search_paths is None:
            self.search_paths = list(self.DEFAULT_SEARCH_PATHS)
        else:
            self.search_paths = [str(p) for p in search_paths]

        self._registered_fonts: Dict[str, str] = {}
        self._font_cache: Dict[str, str] = {}
        self._fallback_mapping: Dict[str, str] = {}

    def find_font_file(self, filename: str) -> Optional[str]:
        """
        Find a font file in search paths.

        Args:
            filename: Font filename (e.g., 'DejaVuSans.ttf')

        Returns:
            Full path to font file, or None if not found
        """
        if filename in self._font_cache:
            return self._font_cache[filename]

        for search_path in self.search_paths:
            path = Path(search_path).expanduser() / filename
            if path.exists():
                self._font_cache[filename] = str(path)
                return str(path)

        logger.debug(f"Font file not found: {filename}")
        return None

    def register_font(self, font_name: str, font_file: str) -> bool:
        """
        Register a single font with ReportLab.

        Returns:
            True if registration successful
        """
        if font_name in self._registered_fonts:
            return True

        font_path = self.find_font_file(font_file)
        if not font_path:
            return False

        try:
            pdfmetrics.registerFont(TTFont(font_name, font_path))
        except Exception as e:
            logger.error(f"Failed to register font {font_name}: {e}")
            return False

        self._registered_fonts[font_name] = font_path
        logger.debug(f"Registered font: {font_name} from {font_path}")
        return True

    def register_family(self, family: str, files: Dict[str, str]) -> bool:
        """
        Register all variants of a family, or map the whole family onto
        the fallback fonts so that measurement stays consistent.

        Args:
            family: Base font name (e.g., 'DejaVuSans')
            files: Variant -> filename ('regular', 'bold', ...)

        Returns:
            True if the real family was registered
        """
        ok = all(
            self.register_font(f"{family}{self.VARIANT_SUFFIXES[variant]}", filename)
            for variant, filename in files.items()
            if variant in self.VARIANT_SUFFIXES
        )
        if not ok:
            logger.warning(f"{family} fonts not found, using {self.FALLBACK_FAMILY}")
            for suffix in self.VARIANT_SUFFIXES.values():
                self._fallback_mapping[f"{family}{suffix}"] = f"{self.FALLBACK_FAMILY}{suffix}"
        return ok

    def register_template_fonts(self, template: CompositionTemplate) -> bool:
        return self.register_family(template.SANS, template.get_fonts())

    def get_font_name(self, requested_name: str) -> str:
        """Get actual font name (may be fallback if original not available)."""
        return self._fallback_mapping.get(requested_name, requested_name)


class StyleResolver:
    """
    Maps (block kind, role) to a concrete BlockStyle.

    A pure lookup over the template's style table; font names are
    resolved through the FontManager so fallback fonts are transparent
    to the rest of the engine.
    """

    def __init__(self, template: CompositionTemplate, font_manager: Optional[FontManager] = None):
        self.template = template
        self.font_manager = font_manager
        self._styles: Dict[str, BlockStyle] = {}

    def _resolve_family(self, style: BlockStyle) -> BlockStyle:
        if not self.font_manager:
            return style
        font = style.font
        resolved = self.font_manager.get_font_name(font.family)
        if resolved == font.family:
            return style
        return replace(style, font=replace(font, family=resolved))

    def build_all_styles(self) -> Dict[str, BlockStyle]:
        if self._styles:
            return self._styles

        for key, spec in self.template.get_styles().items():
            self._styles[key] = self._resolve_family(spec)
        return self._styles

    def resolve(self, kind, role: Optional[str] = None) -> BlockStyle:
        """
        Get the style for a block kind and optional role.

        Args:
            kind: BlockKind or its string value (e.g. 'contact-line')
            role: Span role inside the block (e.g. 'label')

        Raises:
            StyleNotFoundError: Kind/role has no style in the template
        """
        kind_name = getattr(kind, "value", kind)
        styles = self.build_all_styles()
        try:
            return styles[style_key(kind_name, role)]
        except KeyError:
            raise StyleNotFoundError(kind_name, role) from None

