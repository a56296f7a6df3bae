#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Settings - Centralized configuration management
"""

from functools import lru_cache
from pathlib import Path
from typing import List, Tuple

from pydantic import field_validator
from pydantic_settings import BaseSettings
from reportlab.lib.units import mm


# Base directory
BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Application settings (env vars prefixed with COMPOSER_)"""

    # ========== Document ==========
    default_template: str = "cv"  # cv | ats | letter
    page_size: str = "A4"  # A4 | LETTER
    default_filename: str = "documento.pdf"
    document_author: str = ""

    # ========== Page Geometry (millimetres) ==========
    # Unset margins keep the template's own geometry
    margin_top_mm: float = 0
    margin_right_mm: float = 0
    margin_bottom_mm: float = 0
    margin_left_mm: float = 0

    # ========== Fonts ==========
    # Extra directories searched for DejaVuSans*.ttf
    font_dirs: List[str] = []

    # ========== Logging ==========
    log_level: str = "INFO"

    # ========== Directories ==========
    output_dir: Path = BASE_DIR / "data" / "output"

    # ========== API ==========
    cors_origins: str = ""  # comma-separated; empty = dev defaults

    class Config:
        env_prefix = "COMPOSER_"
        env_file = str(BASE_DIR / ".env")
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"

    @field_validator("page_size")
    @classmethod
    def _check_page_size(cls, value: str) -> str:
        value = value.upper()
        if value not in ("A4", "LETTER"):
            raise ValueError(f"page_size must be A4 or LETTER, got {value}")
        return value

    @field_validator("default_template")
    @classmethod
    def _check_template(cls, value: str) -> str:
        value = value.lower()
        if value not in ("cv", "ats", "letter"):
            raise ValueError(f"Unknown template: {value}")
        return value

    @property
    def margin_overrides(self) -> Tuple[float, float, float, float]:
        """(top, right, bottom, left) in points; 0 keeps the template value."""
        return (
            self.margin_top_mm * mm,
            self.margin_right_mm * mm,
            self.margin_bottom_mm * mm,
            self.margin_left_mm * mm,
        )

    def get_cors_origins(self) -> List[str]:
        if self.cors_origins:
            return [o.strip() for o in self.cors_origins.split(",") if o.strip()]
        return ["http://localhost:5173", "http://localhost:3000", "http://127.0.0.1:5173"]


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
