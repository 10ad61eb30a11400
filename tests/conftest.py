import base64
import json
from datetime import date

import pytest

from turfbook.config import get_settings
from turfbook.redis_client import get_redis_client
from turfbook.services.slots import generate_daily_slots

SAMPLE_BOOKED_HOURS = {8, 9, 10, 11, 12, 18, 19, 20}


def _b64(data) -> str:
    raw = json.dumps(data).encode()
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode()


def make_token(payload) -> str:
    """Unsigned compact token: header.payload.signature."""
    header = _b64({"alg": "HS256", "typ": "JWT"})
    return f"{header}.{_b64(payload)}.signature"


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    for name in (
        "TURFBOOK_JWT_SECRET",
        "TURFBOOK_REDIS_URL",
        "TURFBOOK_ROUTE_POLICY_PATH",
        "TURFBOOK_TOKEN_COOKIE_NAME",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    get_redis_client.cache_clear()
    yield
    get_settings.cache_clear()
    get_redis_client.cache_clear()


@pytest.fixture
def token_factory():
    return make_token


@pytest.fixture
def booking_day() -> date:
    return date(2026, 10, 16)


@pytest.fixture
def sample_slots(booking_day):
    """24-slot grid at 500/hour with 08-13 and 18-21 booked."""
    return generate_daily_slots(booking_day, 500, SAMPLE_BOOKED_HOURS)


@pytest.fixture
def venues():
    return [
        {
            "id": "t1",
            "name": "Elite Sports Arena",
            "address": "12 MG Road, Bengaluru",
            "description": "Floodlit five-a-side pitch",
            "distance": 3.2,
            "price": 800,
            "rating": 4.5,
            "reviews": 120,
            "surface": "Artificial Grass",
            "amenities": ["Parking", "Floodlights", "Changing Room"],
            "weatherDependent": False,
            "timeSlots": [{"available": True}, {"available": False}],
            "established": "2015",
        },
        {
            "id": "t2",
            "name": "Champions Ground",
            "address": "Koramangala, Bengaluru",
            "description": "Full-size cricket and football ground",
            "distance": 8.0,
            "price": 1500,
            "rating": 4.8,
            "reviews": 340,
            "surface": "Natural Grass",
            "amenities": ["Parking", "Cafeteria"],
            "weatherDependent": True,
            "timeSlots": [{"available": False}, {"booked": True}],
            "established": "2010-06-01",
        },
        {
            "id": "t3",
            "name": "Rooftop Futsal Hub",
            "address": "Indiranagar, Bengaluru",
            "distance": 25.0,
            "price": 600,
            "rating": 3.9,
            "reviews": 45,
            "surface": "artificial grass",
            "amenities": ["Floodlights"],
            "weatherDependent": False,
            "timeSlots": [{}],
            "established": 2021,
        },
    ]
