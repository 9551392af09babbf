"""Shared fixtures: a file-backed SQLite store, the service container and an app."""

from __future__ import annotations

import itertools
import os
from pathlib import Path
import sys

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))

SECRET_KEY = "test-secret-key"
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ["SECRET_KEY"] = SECRET_KEY

from social_notifications.bootstrap import build_container
from social_notifications.config import Settings, reset_settings_cache
from social_notifications.domain.entities import Account
from social_notifications.infrastructure.background import BackgroundTaskRunner
from social_notifications.infrastructure.database import Store
from social_notifications.infrastructure.repositories import (
    AccountRepository,
    FollowRepository,
    NotificationRepository,
    PostRepository,
)
from social_notifications.infrastructure.security import create_access_token
from social_notifications.utils.datetime import get_app_timezone


class RecordingSink:
    """Event sink that keeps every published event in memory."""

    def __init__(self) -> None:
        self.events = []

    def publish(self, event) -> None:
        self.events.append(event)


@pytest.fixture(autouse=True)
def _fresh_settings():
    reset_settings_cache()
    get_app_timezone.cache_clear()
    yield
    reset_settings_cache()
    get_app_timezone.cache_clear()


@pytest.fixture()
def settings(tmp_path) -> Settings:
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'social.db'}",
        secret_key=SECRET_KEY,
        cors_origins=["http://testserver"],
        log_level="DEBUG",
    )


@pytest.fixture()
def store(settings):
    store = Store(settings.database_url)
    store.initialize()
    yield store
    store.dispose()


@pytest.fixture()
def runner():
    runner = BackgroundTaskRunner(max_workers=2)
    yield runner
    runner.shutdown(wait=True)


@pytest.fixture()
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture()
def container(settings, store, runner, sink):
    return build_container(settings, store=store, runner=runner, sink=sink)


@pytest.fixture()
def client(container):
    """Return a test client bound to an application serving both surfaces."""

    from fastapi.testclient import TestClient

    from social_notifications.main import create_app

    app = create_app(container=container)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def make_account(store):
    """Create accounts with unique e-mail addresses and return their ids."""

    counter = itertools.count(1)

    def _make(first_name: str = "user") -> int:
        index = next(counter)
        with store.operation(5) as session:
            account = AccountRepository(session).create(
                Account(
                    id=None,
                    email=f"{first_name}{index}@example.com",
                    first_name=first_name,
                    last_name="Tester",
                )
            )
        return account.id

    return _make


@pytest.fixture()
def follow(store):
    def _follow(follower_id: int, followed_id: int) -> None:
        with store.operation(5) as session:
            FollowRepository(session).follow(follower_id, followed_id)

    return _follow


@pytest.fixture()
def make_post(store):
    def _make(author_id: int, title: str = "Hello", content: str = "First post"):
        with store.operation(5) as session:
            return PostRepository(session).create(
                author_id=author_id, title=title, content=content
            )

    return _make


@pytest.fixture()
def notifications_for(store):
    """Return the stored notifications of a recipient, newest first."""

    def _list(recipient_id: int):
        with store.operation(5) as session:
            return NotificationRepository(session).list_for_user(recipient_id)

    return _list


@pytest.fixture()
def auth_headers():
    def _headers(account_id: int) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(account_id)}"}

    return _headers
