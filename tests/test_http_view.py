import asyncio
import json
from types import SimpleNamespace

import pytest

pytest.importorskip("homeassistant")

from custom_components.toronto_zmanim.const import DATA_CALCULATOR, DOMAIN  # noqa: E402
from custom_components.toronto_zmanim.http import ZmanimView  # noqa: E402
from custom_components.toronto_zmanim.zmanim_lib import (  # noqa: E402
    ZmanimCalculator,
    ZmanimComputationError,
)


class FakeHass:
    def __init__(self, calculator=None):
        self.data = {DOMAIN: {DATA_CALCULATOR: calculator}} if calculator else {}

    async def async_add_executor_job(self, target, *args):
        return target(*args)


def _get(view, **query):
    response = asyncio.run(view.get(SimpleNamespace(query=query)))
    return response, json.loads(response.body)


def test_today_is_served_with_cache_header():
    view = ZmanimView(FakeHass(ZmanimCalculator()))
    response, body = _get(view, date="2024-12-13")

    assert response.status == 200
    assert response.headers["Cache-Control"] == "public, max-age=3600"
    assert body["isoDate"] == "2024-12-13"
    assert body["isShabbat"] is True


def test_bad_date_is_a_client_error():
    view = ZmanimView(FakeHass(ZmanimCalculator()))
    response, body = _get(view, date="yesterday")

    assert response.status == 400
    assert "Invalid date" in body["error"]


def test_bad_mode_is_a_client_error():
    view = ZmanimView(FakeHass(ZmanimCalculator()))
    response, _ = _get(view, mode="month")
    assert response.status == 400


def test_computation_failure_is_a_server_error(monkeypatch):
    calc = ZmanimCalculator()

    def boom(value):
        raise ZmanimComputationError("no sunrise")

    monkeypatch.setattr(calc, "compute_for_date", boom)
    response, body = _get(ZmanimView(FakeHass(calc)), date="2024-12-13")

    assert response.status == 500
    assert body == {"error": "Failed to calculate zmanim"}


def test_unconfigured_integration_is_unavailable():
    response, _ = _get(ZmanimView(FakeHass()))
    assert response.status == 503


def test_date_at_the_end_of_the_calendar_is_a_client_error():
    view = ZmanimView(FakeHass(ZmanimCalculator()))
    response, body = _get(view, mode="week", date="9999-12-30")

    assert response.status == 400
    assert "out of range" in body["error"]
