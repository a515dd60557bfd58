import pytest

from app.config import Settings
from app.main import create_app
from app.telegram import StateStore, UpdateDispatcher
from tests.factories import FakeTelegramClient


@pytest.fixture
def fake_client() -> FakeTelegramClient:
    return FakeTelegramClient()


@pytest.fixture
def store() -> StateStore:
    return StateStore()


@pytest.fixture
def dispatcher(store: StateStore, fake_client: FakeTelegramClient) -> UpdateDispatcher:
    return UpdateDispatcher(store, fake_client)


@pytest.fixture
def app(fake_client: FakeTelegramClient):
    return create_app(Settings(telegram_bot_token="123:test"), client=fake_client)


@pytest.fixture
def http(app):
    return app.test_client()
