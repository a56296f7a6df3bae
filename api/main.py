#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
FastAPI Web Server - PDF export API for CVs, ATS resumes and cover letters.

Thin orchestration shell: app creation, middleware, router includes.

Usage:
    uvicorn api.main:app --host 0.0.0.0 --port 8000
"""

from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Load environment variables from .env file
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

from config.logging_config import get_logger
from config.settings import settings
from core.pdf_engine import __version__ as engine_version

from api.routes.health import router as health_router
from api.routes.pdf_export import router as pdf_export_router

logger = get_logger(__name__)

# =============================================================================
# FastAPI Application
# =============================================================================

app = FastAPI(
    title="CV PDF Composer API",
    description="Composes CVs, ATS resumes and cover letters from text blocks into paginated PDFs",
    version=engine_version,
)

# CORS: origins from settings, dev defaults otherwise
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"],
)

app.include_router(health_router)
app.include_router(pdf_export_router)

logger.info(f"PDF composer API ready (default template: {settings.default_template})")
