from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from expathub_api.dependencies import (
    get_listing_service,
    get_review_service,
    get_translation_service,
)
from expathub_api.main import app


@pytest.fixture
def listing_service():
    return AsyncMock()


@pytest.fixture
def review_service():
    return AsyncMock()


@pytest.fixture
def translation_service():
    return AsyncMock()


@pytest.fixture
def client(listing_service, review_service, translation_service):
    app.dependency_overrides[get_listing_service] = lambda: listing_service
    app.dependency_overrides[get_review_service] = lambda: review_service
    app.dependency_overrides[get_translation_service] = lambda: translation_service
    yield TestClient(app)
    app.dependency_overrides.clear()
