"""Shared fixtures: sample upstream payloads and a fake HTTP layer."""

from typing import Any, Callable

import httpx
import pytest


class RecordingTransport:
    """httpx.MockTransport handler that records requests and replays one response."""

    def __init__(self, response: httpx.Response | Exception) -> None:
        self.response = response
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if isinstance(self.response, Exception):
            raise self.response
        return self.response

    @property
    def last_params(self) -> list[tuple[str, str]]:
        return self.requests[-1].url.params.multi_items()


@pytest.fixture
def fake_api() -> Callable[..., tuple[httpx.AsyncClient, RecordingTransport]]:
    """Build an AsyncClient whose only "server" is a canned response."""

    def _make(
        payload: Any = None,
        *,
        status_code: int = 200,
        text: str | None = None,
        error: Exception | None = None,
    ) -> tuple[httpx.AsyncClient, RecordingTransport]:
        if error is not None:
            recorder = RecordingTransport(error)
        elif text is not None:
            recorder = RecordingTransport(httpx.Response(status_code, text=text))
        else:
            recorder = RecordingTransport(httpx.Response(status_code, json=payload))
        client = httpx.AsyncClient(transport=httpx.MockTransport(recorder))
        return client, recorder

    return _make


@pytest.fixture
def locations_payload() -> dict[str, Any]:
    return {
        "stations": [
            {
                "id": "8503000",
                "name": "Zürich HB",
                "score": None,
                "coordinate": {"type": "WGS84", "x": 47.377847, "y": 8.540502},
                "distance": None,
                "type": "station",
            },
            {
                "id": None,
                "name": "Zürich, Bahnhofstrasse",
                "score": None,
                "coordinate": None,
                "distance": 120,
                "type": "address",
            },
        ]
    }


@pytest.fixture
def connections_payload() -> dict[str, Any]:
    return {
        "connections": [
            {
                "from": {
                    "station": {"id": "8503000", "name": "Zürich HB"},
                    "departure": "2025-01-15T14:02:00+0100",
                    "departureTimestamp": 1736946120,
                    "platform": "31",
                    "prognosis": None,
                },
                "to": {
                    "station": {"id": "8507000", "name": "Bern"},
                    "arrival": "2025-01-15T15:00:00+0100",
                    "arrivalTimestamp": 1736949600,
                    "platform": "7",
                },
                "duration": "00d00:58:00",
                "transfers": 0,
                "products": ["IC 1"],
                "sections": [
                    {
                        "journey": {
                            "name": "IC 1",
                            "category": "IC",
                            "number": "1",
                            "operator": "SBB",
                            "to": "Bern",
                            "passList": [],
                        },
                        "walk": None,
                        "departure": {"station": {"name": "Zürich HB"}},
                        "arrival": {"station": {"name": "Bern"}},
                    },
                    {
                        "journey": None,
                        "walk": {"duration": 120},
                        "departure": {"station": {"name": "Bern"}},
                        "arrival": {"station": {"name": "Bern, Bahnhof"}},
                    },
                ],
            }
        ],
        "from": {"id": "8503000", "name": "Zürich HB"},
        "to": {"id": "8507000", "name": "Bern"},
    }


@pytest.fixture
def stationboard_payload() -> dict[str, Any]:
    return {
        "station": {"id": "8507000", "name": "Bern"},
        "stationboard": [
            {
                "stop": {
                    "departure": "2025-01-15T14:02:00+0100",
                    "platform": "7",
                    "prognosis": {"departure": "2025-01-15T14:05:00+0100"},
                },
                "name": "IC 1",
                "category": "IC",
                "number": "1",
                "to": "Genève-Aéroport",
            },
            {
                "stop": {"departure": "2025-01-15T14:04:00+0100", "platform": None},
                "category": "S",
                "number": "3",
                "to": "Biel/Bienne",
            },
        ],
    }
