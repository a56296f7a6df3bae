"""
Health check endpoint.
"""

import time

from fastapi import APIRouter

from core.pdf_engine import __version__ as engine_version

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check():
    """Basic health check endpoint"""
    return {
        "status": "healthy",
        "version": engine_version,
        "timestamp": time.time()
    }
