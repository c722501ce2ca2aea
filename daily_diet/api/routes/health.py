from fastapi import APIRouter

from daily_diet.core.security import now_utc
from daily_diet.schemas.common import to_iso
from daily_diet.schemas.health import HealthResponse
from daily_diet.services.uptime import format_uptime, uptime_seconds

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse, summary="Health check endpoint")
def health():
    return HealthResponse(timestamp=to_iso(now_utc()), uptime=format_uptime(uptime_seconds()))
