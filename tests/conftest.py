import asyncio

import pytest
from fastapi.testclient import TestClient

from wastewise_api.app.core.config import Settings
from wastewise_api.app.main import create_app
from wastewise_api.app.services.storage import Storage


@pytest.fixture
def run():
    return asyncio.run


@pytest.fixture
def storage():
    return Storage()


@pytest.fixture
def settings():
    return Settings(secret_key="test-secret", seed_sample_data=False, default_radius_km=5.0)


@pytest.fixture
def app(settings, storage):
    return create_app(settings=settings, storage=storage)


@pytest.fixture
def client_factory(app):
    clients = []

    def make():
        client = TestClient(app)
        client.__enter__()
        clients.append(client)
        return client

    yield make
    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture
def client(client_factory):
    return client_factory()
