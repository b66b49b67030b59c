"""Shared fixtures: a small users/chats dataset and a client over it."""
from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("AUTH_TOKEN", "someAuthToken")

from config import Settings  # noqa: E402
from models import Dataset  # noqa: E402
from stores import ChatStore  # noqa: E402

AUTH = {"authorization": "someAuthToken"}


def raw_dataset() -> dict:
    return {
        "users": [
            {"userId": "u1", "username": "alice", "email": "alice@example.com"},
            {"userId": "u2", "username": "bob"},
            {"userId": "u3", "username": "carol"},
            {"userId": "u4", "username": "dave"},
        ],
        "chats": [
            {"chatId": "chat1", "participants": ["alice", "bob"]},
            {"chatId": "chat2", "participants": ["alice", "carol"]},
            {"chatId": "chat3", "participants": ["bob", "carol"], "messages": ["hey"]},
        ],
    }


@pytest.fixture
def store() -> ChatStore:
    return ChatStore(Dataset.model_validate(raw_dataset()))


@pytest.fixture
def make_client(store):
    import app as app_module

    def _make(**overrides) -> TestClient:
        cfg = Settings(auth_token="someAuthToken", **overrides)
        return TestClient(app_module.create_app(store=store, cfg=cfg))

    return _make


@pytest.fixture
def client(make_client) -> TestClient:
    return make_client()
