VERSION = "0.1.0"

from .currency import parse_currency, format_currency
from .models import Activity, DailyPlan, parse_itinerary
from .budget import BudgetSummary, calculate_summary
from .expenses import BudgetTracker
from .llm import GeminiClient
from .planner import ItineraryPlanner, PlannerState, build_prompt
from .output import build_structured_output, export_json, export_csv, google_search_url


def plan_trip(destination: str, duration: int, interests: str = "", total_budget: str = "", client=None) -> ItineraryPlanner:
    planner = ItineraryPlanner(client or GeminiClient())
    planner.set_total_budget_input(total_budget)
    planner.generate(destination, duration, interests)
    return planner
