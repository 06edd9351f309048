"""Typed itinerary records and the decoder for model output.

The JSON shape uses camelCase keys (``checkPriceLink``, ``actualCost``) as in
the response schema sent to the model; Python code uses snake_case.
"""
import json
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, ValidationInfo, field_validator

from .errors import ItineraryDecodeError, MalformedResponseError


class Activity(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    time: str
    cost: str
    actual_cost: Optional[float] = Field(default=None, alias="actualCost")
    check_price_link: str = Field(alias="checkPriceLink")

    @field_validator("actual_cost", mode="before")
    @classmethod
    def _drop_model_actual_cost(cls, value: Any, info: ValidationInfo):
        # Actual cost is user input only; never trust one coming from the model
        if info.context and info.context.get("from_model"):
            return None
        return value


class DailyPlan(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    day: int
    theme: str
    activities: List[Activity]


Itinerary = List[DailyPlan]

_ITINERARY_ADAPTER = TypeAdapter(Itinerary)


def _describe(errors: List[dict]) -> str:
    parts = []
    for err in errors[:5]:
        loc = ".".join(str(p) for p in err.get("loc", ())) or "<root>"
        parts.append(f"{loc}: {err.get('msg')}")
    if len(errors) > 5:
        parts.append(f"... {len(errors) - 5} more")
    return "; ".join(parts)


def load_itinerary(data: Any, from_model: bool = False) -> Itinerary:
    """Validate already-parsed JSON data into DailyPlan records."""
    try:
        itinerary = _ITINERARY_ADAPTER.validate_python(data, context={"from_model": from_model})
    except ValidationError as e:
        errors = e.errors(include_url=False)
        raise ItineraryDecodeError(_describe(errors), errors) from e

    # Actual costs are addressed by day number, so each day must appear once
    seen = set()
    for index, plan in enumerate(itinerary):
        if plan.day in seen:
            raise ItineraryDecodeError(
                f"{index}.day: duplicate day {plan.day}",
                [{"loc": (index, "day"), "msg": f"duplicate day {plan.day}", "type": "duplicate_day"}],
            )
        seen.add(plan.day)
    return itinerary


def parse_itinerary(text: str) -> Itinerary:
    """Decode the model's response text.

    Raises MalformedResponseError when the text is not JSON and
    ItineraryDecodeError when it is JSON of the wrong shape. Every activity
    comes back with ``actual_cost`` unset.
    """
    try:
        data = json.loads((text or "").strip())
    except json.JSONDecodeError as e:
        raise MalformedResponseError(str(e)) from e
    return load_itinerary(data, from_model=True)


def dump_itinerary(itinerary: Optional[Itinerary]) -> list:
    if not itinerary:
        return []
    return [plan.model_dump(by_alias=True) for plan in itinerary]
