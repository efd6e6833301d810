"""
Pytest fixtures: фабрики мест и отзывов без базы данных.
"""

from datetime import datetime, timedelta, timezone

import pytest

from expathub_shared.models import Place, Review

BASE_TIME = datetime(2024, 12, 1, tzinfo=timezone.utc)


@pytest.fixture
def make_place():
    def _make(place_id="p1", **fields):
        fields.setdefault("type", "job")
        fields.setdefault("name", f"Place {place_id}")
        fields.setdefault("category", "cafe")
        fields.setdefault("address", "Seoul")
        fields.setdefault("tags", [])
        fields.setdefault("is_active", True)
        return Place(id=place_id, **fields)
    return _make


@pytest.fixture
def make_review():
    counter = {"n": 0}

    def _make(place_id="p1", rating=5, content="", days=0, **fields):
        counter["n"] += 1
        fields.setdefault("id", f"r{counter['n']}")
        fields.setdefault("user_id", "u1")
        fields.setdefault("helpful_count", 0)
        fields.setdefault("created_at", BASE_TIME + timedelta(days=days))
        return Review(place_id=place_id, rating=rating, content=content, **fields)
    return _make
