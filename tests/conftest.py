"""
Shared fixtures.

Every test gets a fresh in-memory MongoDB collection from ``mongomock``;
the application under test is built with ``create_app`` around it, so no
MongoDB server is needed.
"""

import mongomock
import pytest
from fastapi.testclient import TestClient
from pymongo.errors import ServerSelectionTimeoutError

from budget_tracker_api.app.core.db import TransactionStore
from budget_tracker_api.app.main import create_app


class UnavailableCollection:
    """Collection whose server went away after startup.

    Index creation succeeds so the application starts; every other
    operation fails the way pymongo does when no server is reachable.
    """

    def create_index(self, *args, **kwargs):
        return "ok"

    def __getattr__(self, name):
        def fail(*args, **kwargs):
            raise ServerSelectionTimeoutError("localhost:27017: connection refused")

        return fail


@pytest.fixture
def collection():
    return mongomock.MongoClient(tz_aware=True)["budgetTrackerDB"]["transactions"]


@pytest.fixture
def store(collection):
    return TransactionStore(collection)


@pytest.fixture
def client(collection):
    """Test client for an application backed by the in-memory collection."""
    with TestClient(create_app(collection=collection)) as test_client:
        yield test_client


@pytest.fixture
def failing_client():
    """Test client for an application whose storage fails on every request."""
    with TestClient(create_app(collection=UnavailableCollection())) as test_client:
        yield test_client
