import json
import types

import pytest

import cwa_api
from app import create_app
from config import Config


class FakeResponse:
    def __init__(self, json_data=None, status_code=200, text=None):
        self._json = json_data
        self.status_code = status_code
        self.text = text if text is not None else json.dumps(json_data)

    def json(self):
        if self._json is None:
            raise ValueError("body is not JSON")
        return self._json


class StubUpstream:
    """Stands in for requests.get; records every call and replays a canned response."""

    def __init__(self):
        self.calls = []
        self.response = FakeResponse({"records": {"location": []}})
        self.error = None

    def get(self, url, params=None, timeout=None, proxies=None, **kwargs):
        self.calls.append({"url": url, "params": dict(params or {}), "timeout": timeout, "proxies": proxies})
        if self.error is not None:
            raise self.error
        return self.response


def forecast_location(city, slots, elements):
    """
    slots: [(startTime, endTime), ...]
    elements: {"Wx": ["晴", "雨"], ...}, one value per slot (None skips that slot).
    """
    weather_elements = []
    for code, values in elements.items():
        time = []
        for (start, end), value in zip(slots, values):
            if value is None:
                continue
            time.append({"startTime": start, "endTime": end, "parameter": {"parameterName": value}})
        weather_elements.append({"elementName": code, "time": time})
    return {"locationName": city, "weatherElement": weather_elements}


def hazard_location(city, hazards):
    return {"locationName": city, "hazardConditions": {"hazards": hazards}}


def payload_for(*locations, description="三十六小時天氣預報"):
    return {"success": "true", "records": {"datasetDescription": description, "location": list(locations)}}


@pytest.fixture()
def config():
    return Config(cwa_api_key="CWA-TEST-KEY", request_timeout=5.0)


@pytest.fixture()
def upstream(monkeypatch):
    stub = StubUpstream()
    monkeypatch.setattr(cwa_api, "requests", types.SimpleNamespace(get=stub.get))
    return stub


# Creates a Flask app wired to an explicit test configuration.
@pytest.fixture()
def app(config):
    app = create_app(config)
    app.config.update(TESTING=True)
    yield app


@pytest.fixture()
def client(app):
    return app.test_client()
