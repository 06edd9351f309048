import math
from typing import Optional

from pydantic import BaseModel

from .currency import parse_currency
from .models import Itinerary
from .settings import default_currency


class BudgetSummary(BaseModel):
    total_estimated: float = 0.0
    total_actual: float = 0.0
    average_daily_remaining: Optional[float] = None
    currency_code: str = "IDR"
    unknown_cost_count: int = 0


def _is_number(value) -> bool:
    return value is not None and not (isinstance(value, float) and math.isnan(value))


def calculate_summary(
    itinerary: Optional[Itinerary],
    total_budget: Optional[float],
    duration: Optional[int],
) -> BudgetSummary:
    """Recompute estimated/actual totals and the average remaining budget per day.

    Activities without an actual cost are skipped, not counted as zero spend.
    """
    total_est = 0.0
    total_act = 0.0
    unknown = 0
    currency_code = None

    for day_plan in itinerary or []:
        for activity in day_plan.activities:
            parsed = parse_currency(activity.cost)
            total_est += parsed.amount
            if not parsed.recognized:
                unknown += 1
            elif currency_code is None:
                currency_code = parsed.currency_code
            if _is_number(activity.actual_cost):
                total_act += activity.actual_cost

    average = None
    if total_budget is not None and duration is not None and duration > 0:
        average = (total_budget - total_act) / duration

    return BudgetSummary(
        total_estimated=total_est,
        total_actual=total_act,
        average_daily_remaining=average,
        currency_code=currency_code or default_currency(),
        unknown_cost_count=unknown,
    )
