"""Pytest configuration and shared fakes for the itinerary planner."""
import json
import sys
from pathlib import Path

import pytest

# Ensure the project root is on sys.path so that the package and web_app import under pytest.
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from itinerary_planner.llm import GenerationResponse  # noqa: E402


class FakeClient:
    """Stands in for GeminiClient; records every call."""

    def __init__(self, text="", exc=None, on_call=None):
        self.text = text
        self.exc = exc
        self.on_call = on_call
        self.calls = []

    def generate_content(self, prompt, response_schema):
        self.calls.append((prompt, response_schema))
        if self.on_call:
            self.on_call()
        if self.exc is not None:
            raise self.exc
        return GenerationResponse(text=self.text)


def make_days(n=3, with_actual_cost=False):
    days = []
    for i in range(1, n + 1):
        activities = [
            {
                "name": f"Kuil {i}",
                "time": "09:00 - 11:00",
                "cost": "500 JPY",
                "checkPriceLink": f"https://example.com/kuil-{i}",
            },
            {
                "name": f"Makan siang {i}",
                "time": "12:00 - 13:00",
                "cost": "1.500 JPY",
                "checkPriceLink": f"https://example.com/makan-{i}",
            },
        ]
        if with_actual_cost:
            for a in activities:
                a["actualCost"] = 999
        days.append({"day": i, "theme": f"Tema hari {i}", "activities": activities})
    return days


@pytest.fixture
def kyoto_payload():
    return make_days(3, with_actual_cost=True)


@pytest.fixture
def kyoto_text(kyoto_payload):
    # Models often wrap the JSON in whitespace
    return "\n  " + json.dumps(kyoto_payload) + "\n"
