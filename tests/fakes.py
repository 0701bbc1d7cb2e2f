"""Canned Mapbox payloads and mock-transport responders for tests."""

import json
from pathlib import Path

import httpx

FIXTURES_DIR = Path(__file__).parent / "fixtures"
BOGUS_TOKEN = "pk.bogus-token"
ATTRIBUTION = (
    "NOTICE: © 2016 Mapbox and its suppliers. All rights reserved. Use of this data is "
    "subject to the Mapbox Terms of Service (https://www.mapbox.com/about/maps/). This "
    "response and the information it contains may not be retained."
)


def load_fixture(name: str):
    with open(FIXTURES_DIR / f"{name}.json", encoding="utf-8") as f:
        return json.load(f)


def json_responder(payload, status_code: int = 200, headers: dict | None = None):
    def responder(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, json=payload, headers=headers)

    return responder
