from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field

from mealplan.api.v1.suggest import get_settings
from mealplan.config import Settings
from mealplan.services.metrics import MetricsLogger

router = APIRouter(tags=["metrics"])


class UILatency(BaseModel):
    name: str = Field(..., description="Metric name, e.g. 'suggestions_render' or 'grocery_list_render'")
    duration_ms: float = Field(..., ge=0)
    extra: Optional[dict] = None


@router.post("/api/v1/metrics/ui")
def log_ui_latency(payload: UILatency, request: Request, settings: Settings = Depends(get_settings)):
    MetricsLogger(settings).log_latency(
        payload.name,
        payload.duration_ms,
        origin="frontend",
        extra=payload.extra,
        user_id=request.headers.get("X-User-Id"),
    )
    return {"ok": True}
