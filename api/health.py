"""Liveness and in-process metrics endpoints."""

from fastapi import APIRouter

from config.settings import get_settings
from services.metrics import get_metrics_collector

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health")
async def health():
    settings = get_settings()
    return {
        "status": "ok",
        "model": settings.anthropic_model,
        "llmConfigured": bool(settings.anthropic_api_key),
    }


@router.get("/metrics")
async def metrics():
    """Tool-call and run counters collected by this worker."""
    return get_metrics_collector().snapshot()
