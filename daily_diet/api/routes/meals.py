import logging
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from daily_diet.api.deps import get_db
from daily_diet.api.deps_auth import current_user
from daily_diet.core.errors import not_found
from daily_diet.core.security import now_utc
from daily_diet.models.meal import Meal
from daily_diet.models.user import User
from daily_diet.schemas.common import error_responses
from daily_diet.schemas.meal import MealCreate, MealUpdate, MealOut, MealResponse, MealListResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/meals", tags=["meals"])

MEAL_NOT_FOUND = "Meal not found"


def _owned(db: Session, meal_id: str, user: User):
    """Query scoped to the caller: someone else's meal looks exactly like a missing one."""
    return db.query(Meal).filter(Meal.id == meal_id, Meal.user_id == user.id)


@router.get(
    "",
    response_model=MealListResponse,
    summary="List meals",
    description="All meals of the logged-in user, newest first.",
    responses=error_responses(401, 403, 500),
)
def list_meals(user: User = Depends(current_user), db: Session = Depends(get_db)):
    meals = (
        db.query(Meal)
        .filter(Meal.user_id == user.id)
        .order_by(Meal.created_at.desc())
        .all()
    )
    return MealListResponse(meals=[MealOut.model_validate(m) for m in meals])


@router.post(
    "",
    response_model=MealResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a meal",
    responses=error_responses(400, 401, 403, 500),
)
def create_meal(body: MealCreate, user: User = Depends(current_user), db: Session = Depends(get_db)):
    meal = Meal(
        name=body.name,
        description=body.description or None,
        date=body.date,
        is_on_diet=body.is_on_diet,
        user_id=user.id,
    )
    db.add(meal)
    db.commit()
    db.refresh(meal)
    return MealResponse(meal=MealOut.model_validate(meal))


@router.get(
    "/{meal_id}",
    response_model=MealResponse,
    summary="Get a meal by id",
    responses=error_responses(400, 401, 403, 404, 500),
)
def get_meal(meal_id: str, user: User = Depends(current_user), db: Session = Depends(get_db)):
    meal = _owned(db, meal_id, user).first()
    if not meal:
        raise not_found(MEAL_NOT_FOUND)
    return MealResponse(meal=MealOut.model_validate(meal))


@router.put(
    "/{meal_id}",
    response_model=MealResponse,
    summary="Update a meal by id",
    description="Partial update: only the fields sent are changed. `description: null` clears it.",
    responses=error_responses(400, 401, 403, 404, 500),
)
def update_meal(
    meal_id: str,
    body: MealUpdate,
    user: User = Depends(current_user),
    db: Session = Depends(get_db),
):
    values = body.changes()
    values["updated_at"] = now_utc()

    matched = _owned(db, meal_id, user).update(values, synchronize_session=False)
    db.commit()
    if matched == 0:
        raise not_found(MEAL_NOT_FOUND)

    meal = _owned(db, meal_id, user).first()
    if not meal:
        raise not_found(MEAL_NOT_FOUND)
    db.refresh(meal)
    return MealResponse(meal=MealOut.model_validate(meal))


@router.delete(
    "/{meal_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a meal by id",
    responses=error_responses(400, 401, 403, 404, 500),
)
def delete_meal(meal_id: str, user: User = Depends(current_user), db: Session = Depends(get_db)):
    meal = _owned(db, meal_id, user).first()
    if not meal:
        raise not_found(MEAL_NOT_FOUND)

    db.delete(meal)
    db.commit()
    logger.info("Deleted meal %s of user %s", meal_id, user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
