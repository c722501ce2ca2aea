from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from daily_diet.api.deps import get_db
from daily_diet.api.deps_auth import current_user
from daily_diet.models.meal import Meal
from daily_diet.models.user import User
from daily_diet.schemas.common import error_responses
from daily_diet.schemas.metrics import MetricsOut, MetricsResponse
from daily_diet.services.metrics import compute_metrics

router = APIRouter(prefix="/metrics", tags=["metrics"])


@router.get(
    "",
    response_model=MetricsResponse,
    summary="Get meals metrics",
    description="Totals and the best on-diet streak, counted in the order meals were logged.",
    responses=error_responses(401, 403, 404, 500),
)
def get_metrics(user: User = Depends(current_user), db: Session = Depends(get_db)):
    rows = (
        db.query(Meal.is_on_diet)
        .filter(Meal.user_id == user.id)
        .order_by(Meal.created_at.asc())
        .all()
    )
    result = compute_metrics(is_on_diet for (is_on_diet,) in rows)
    return MetricsResponse(metrics=MetricsOut.model_validate(result))
