from datetime import timezone
from typing import Optional, List
from pydantic import AwareDatetime, Field, StrictBool, field_validator

from daily_diet.schemas.common import CamelModel, IsoDatetime


class _MealBody(CamelModel):
    @field_validator("date", check_fields=False)
    @classmethod
    def _date_to_utc(cls, v):
        # stored as UTC so naive read-backs (SQLite) stay correct
        return v.astimezone(timezone.utc) if v is not None else v


class MealCreate(_MealBody):
    name: str = Field(..., min_length=1, max_length=255, description="Meal name")
    description: Optional[str] = Field(None, description="Free text description")
    date: AwareDatetime = Field(..., description="When the meal was eaten (ISO-8601 with timezone)")
    is_on_diet: StrictBool = Field(..., description="Whether the meal is within the diet")


class MealUpdate(_MealBody):
    """Partial update: only fields present in the request body are applied."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    date: Optional[AwareDatetime] = None
    is_on_diet: Optional[StrictBool] = None

    def changes(self) -> dict:
        data = self.model_dump(exclude_unset=True)
        # only description may be cleared with an explicit null
        return {k: v for k, v in data.items() if v is not None or k == "description"}


class MealOut(CamelModel):
    id: str
    name: str
    description: Optional[str]
    date: IsoDatetime
    is_on_diet: bool
    user_id: str
    created_at: IsoDatetime
    updated_at: IsoDatetime


class MealResponse(CamelModel):
    meal: MealOut


class MealListResponse(CamelModel):
    meals: List[MealOut]
