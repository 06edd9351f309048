import csv
import json
from typing import Dict, List, Optional
from urllib.parse import quote

from .budget import BudgetSummary
from .currency import format_currency, parse_currency
from .models import Itinerary, dump_itinerary


GOOGLE_SEARCH_URL = "https://www.google.com/search?q={query}"


def google_search_url(query: str) -> str:
    return GOOGLE_SEARCH_URL.format(query=quote(query or "", safe="!*'()"))


def build_structured_output(itinerary: Optional[Itinerary], summary: BudgetSummary, warnings: Optional[List[str]] = None) -> Dict:
    """Flatten itinerary and summary into display rows with formatted amounts."""
    detail_days = []
    for d in itinerary or []:
        items = []
        for index, activity in enumerate(d.activities):
            est = parse_currency(activity.cost)
            items.append({
                "index": index,
                "name": activity.name,
                "time": activity.time,
                "cost": activity.cost,
                "cost_display": format_currency(est.amount, est.currency_code) if est.recognized else "?",
                "currency_code": est.currency_code,
                "actual_cost": activity.actual_cost,
                "actual_display": format_currency(activity.actual_cost, est.currency_code),
                "check_price_link": activity.check_price_link,
                "search_url": google_search_url(activity.name),
            })
        detail_days.append({
            "day": d.day,
            "theme": d.theme,
            "activities": items,
        })

    code = summary.currency_code
    fee_table = {
        "total_estimated": format_currency(summary.total_estimated, code),
        "total_actual": format_currency(summary.total_actual, code),
        "average_daily_remaining": format_currency(summary.average_daily_remaining, code),
        "unknown_cost_count": summary.unknown_cost_count,
    }

    return {
        "days": detail_days,
        "summary": fee_table,
        "warnings": warnings or [],
    }


def export_json(itinerary: Optional[Itinerary], summary: BudgetSummary, path: str):
    data = {"itinerary": dump_itinerary(itinerary), "summary": summary.model_dump()}
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)


def export_csv(itinerary: Optional[Itinerary], summary: BudgetSummary, path: str):
    # One row per activity, then the totals
    with open(path, "w", newline="", encoding="utf-8") as f:
        w = csv.writer(f)
        w.writerow(["day", "theme", "activity", "time", "cost", "estimated_amount", "currency", "actual_cost", "check_price_link"])
        for d in itinerary or []:
            for activity in d.activities:
                est = parse_currency(activity.cost)
                w.writerow([
                    d.day,
                    d.theme,
                    activity.name,
                    activity.time,
                    activity.cost,
                    est.amount,
                    est.currency_code,
                    "" if activity.actual_cost is None else activity.actual_cost,
                    activity.check_price_link,
                ])
        w.writerow([])
        w.writerow(["total_estimated", summary.total_estimated])
        w.writerow(["total_actual", summary.total_actual])
        w.writerow(["average_daily_remaining", "" if summary.average_daily_remaining is None else summary.average_daily_remaining])
