from typing import List, Optional

from .budget import BudgetSummary, calculate_summary
from .currency import format_currency, parse_currency
from .models import Activity, Itinerary


class BudgetTracker:
    def __init__(self, itinerary: Optional[Itinerary], total_budget: Optional[float] = None, duration: Optional[int] = None):
        self.itinerary = itinerary
        self.total_budget = total_budget
        self.duration = duration

    def find_activity(self, day: int, index: int) -> Activity:
        for plan in self.itinerary or []:
            if plan.day == day:
                if index < 0:
                    raise IndexError(f"activity index {index} out of range for day {day}")
                return plan.activities[index]
        raise KeyError(f"day {day} is not in the itinerary")

    def record_actual_cost(self, day: int, index: int, amount: Optional[float]) -> Activity:
        activity = self.find_activity(day, index)
        activity.actual_cost = amount
        return activity

    def summary(self) -> BudgetSummary:
        return calculate_summary(self.itinerary, self.total_budget, self.duration)

    def warnings(self) -> List[str]:
        summary = self.summary()
        warning = []
        if self.total_budget is not None and summary.total_actual > self.total_budget:
            over = summary.total_actual - self.total_budget
            warning.append(f"Total pengeluaran melebihi anggaran sebesar {format_currency(over, summary.currency_code)}")
        for plan in self.itinerary or []:
            for activity in plan.activities:
                if activity.actual_cost is None:
                    continue
                est = parse_currency(activity.cost)
                if est.recognized and activity.actual_cost > est.amount:
                    over = activity.actual_cost - est.amount
                    warning.append(
                        f"Hari {plan.day}: {activity.name} melebihi estimasi sebesar {format_currency(over, est.currency_code)}"
                    )
        return warning
