from daily_diet.schemas.common import CamelModel


class MetricsOut(CamelModel):
    total_meals: int
    meals_on_diet: int
    meals_off_diet: int
    best_streak: int


class MetricsResponse(CamelModel):
    metrics: MetricsOut
