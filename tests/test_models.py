"""Tests for decoding model output into typed itinerary records."""
import json

import pytest

from itinerary_planner.errors import ItineraryDecodeError, MalformedResponseError
from itinerary_planner.models import dump_itinerary, load_itinerary, parse_itinerary

from conftest import make_days


def test_parse_itinerary_trims_and_resets_actual_cost(kyoto_text):
    itinerary = parse_itinerary(kyoto_text)
    assert [d.day for d in itinerary] == [1, 2, 3]
    assert all(a.actual_cost is None for d in itinerary for a in d.activities)
    assert itinerary[0].activities[0].check_price_link == "https://example.com/kuil-1"


def test_parse_itinerary_ignores_non_numeric_actual_cost():
    payload = make_days(1)
    payload[0]["activities"][0]["actualCost"] = "lots"
    itinerary = parse_itinerary(json.dumps(payload))
    assert itinerary[0].activities[0].actual_cost is None


def test_parse_itinerary_rejects_invalid_json():
    with pytest.raises(MalformedResponseError):
        parse_itinerary("{not json")


def test_parse_itinerary_rejects_truncated_json():
    text = json.dumps(make_days(2))[:-10]
    with pytest.raises(MalformedResponseError):
        parse_itinerary(text)


def test_parse_itinerary_rejects_wrong_shape():
    payload = make_days(1)
    del payload[0]["activities"][0]["cost"]
    with pytest.raises(ItineraryDecodeError) as excinfo:
        parse_itinerary(json.dumps(payload))
    assert "cost" in str(excinfo.value)
    assert excinfo.value.errors


def test_parse_itinerary_rejects_object_top_level():
    with pytest.raises(ItineraryDecodeError):
        parse_itinerary('{"day": 1, "theme": "x", "activities": []}')


def test_load_itinerary_keeps_user_actual_cost():
    payload = make_days(1)
    payload[0]["activities"][1]["actualCost"] = 1200
    itinerary = load_itinerary(payload)
    assert itinerary[0].activities[1].actual_cost == 1200


def test_dump_itinerary_uses_json_keys():
    itinerary = load_itinerary(make_days(1))
    dumped = dump_itinerary(itinerary)
    activity = dumped[0]["activities"][0]
    assert set(activity) == {"name", "time", "cost", "actualCost", "checkPriceLink"}
    assert dump_itinerary(None) == []


def test_load_itinerary_rejects_duplicate_day_numbers():
    payload = make_days(2)
    payload[1]["day"] = 1
    with pytest.raises(ItineraryDecodeError) as excinfo:
        load_itinerary(payload)
    assert "duplicate day 1" in str(excinfo.value)
    assert excinfo.value.errors[0]["loc"] == (1, "day")
