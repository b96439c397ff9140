import os
import sys

import pytest
from fastapi.testclient import TestClient

from transit_gateway.main import app

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


@pytest.fixture
def route_query():
    """Query payload for a trip across lower Manhattan."""
    return {
        "origin": {"latitude": 40.7, "longitude": -74.0},
        "destination": {"latitude": 40.75, "longitude": -73.99},
        "departureSecs": 28800,
    }


@pytest.fixture
def engine_route_payload():
    """Engine answer for route_query: a walk, a 5 minute wait, then a bus."""
    return {
        "steps": [
            {
                "from": {"id": "origin", "latitude": 40.7, "longitude": -74.0},
                "to": {
                    "id": "stop-101",
                    "latitude": 40.705,
                    "longitude": -73.998,
                    "stopName": "Broadway & Wall St",
                    "feed": "mta-bus",
                },
                "mode": "WALK",
                "departTimeSecs": 28800,
                "arriveTimeSecs": 29100,
                "distanceKm": 0.4,
            },
            {
                "from": {
                    "id": "stop-101",
                    "latitude": 40.705,
                    "longitude": -73.998,
                    "stopName": "Broadway & Wall St",
                    "feed": "mta-bus",
                },
                "to": {"id": "destination", "latitude": 40.75, "longitude": -73.99},
                "mode": "BUS",
                "departTimeSecs": 29400,
                "arriveTimeSecs": 30600,
                "numStops": 8,
                "tripId": "M55-trip-17",
                "routeId": "M55",
            },
        ],
        "geojson": {"type": "FeatureCollection", "features": []},
    }


@pytest.fixture(scope="function")
def client():
    """Provides a FastAPI test client."""
    with TestClient(app) as c:
        yield c
