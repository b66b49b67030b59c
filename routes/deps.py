from fastapi import Request

from config import Settings
from stores import ChatStore


def get_store(request: Request) -> ChatStore:
    return request.app.state.store


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
