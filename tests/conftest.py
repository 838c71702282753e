# tests/conftest.py

from __future__ import annotations

from datetime import date

import pytest

from config import Settings
from database import TaskGateway
from handlers.tasks import TaskIntentDispatcher

from .fakes import FakeTaskGateway

TODAY = date(2025, 11, 21)


@pytest.fixture()
def settings() -> Settings:
    return Settings(database_url="sqlite://", user_id="demo")


@pytest.fixture()
def gateway(settings: Settings):
    """Real gateway on a private in-memory SQLite database."""
    gw = TaskGateway.from_settings(settings)
    gw.init_schema()
    yield gw
    gw.close()


@pytest.fixture()
def fake_gateway() -> FakeTaskGateway:
    return FakeTaskGateway()


@pytest.fixture()
def dispatcher(gateway: TaskGateway) -> TaskIntentDispatcher:
    return TaskIntentDispatcher(gateway, user_id="demo", today=lambda: TODAY)


@pytest.fixture()
def fake_dispatcher(fake_gateway: FakeTaskGateway) -> TaskIntentDispatcher:
    return TaskIntentDispatcher(fake_gateway, user_id="demo", today=lambda: TODAY)
