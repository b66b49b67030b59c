# routes/chats.py
# HTTP dispatch for the chat dataset queries. Handlers only unpack parameters;
# NotFound raised by the query engine is turned into the JSON error body by the
# app-level exception handler.

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends

import queries
from config import Settings
from models import Acknowledged, AddChatMessageRequest
from routes.deps import get_settings, get_store
from stores import ChatStore

router = APIRouter(tags=["chats"])


@router.get("/getUser/{user_id}")
def get_user(user_id: str, store: ChatStore = Depends(get_store)):
    return queries.get_user(store, user_id)


@router.get("/getMutualUsers/{user_id}/{another_user_id}")
def get_mutual_users(
    user_id: str,
    another_user_id: str,
    store: ChatStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    return queries.get_mutual_users(
        store, user_id, another_user_id, legacy_quirks=settings.legacy_quirks
    )


@router.post("/addChatMessage/{chat_id}", response_model=Acknowledged)
def add_chat_message(
    chat_id: str,
    body: Any = Body(default=None),
    store: ChatStore = Depends(get_store),
):
    # Anything but a JSON object (string, array, form data) carries no message.
    message = None
    if isinstance(body, dict):
        message = AddChatMessageRequest.model_validate(body).message
    return queries.add_chat_message(store, chat_id, message)


@router.get("/removeUserFromChatOrChats/{user_id}", response_model=Acknowledged)
@router.get("/removeUserFromChatOrChats/{user_id}/", response_model=Acknowledged)
@router.get("/removeUserFromChatOrChats/{user_id}/{chat_id}", response_model=Acknowledged)
def remove_user_from_chat_or_chats(
    user_id: str,
    chat_id: Optional[str] = None,
    store: ChatStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    """Remove the user from one chat when ``chat_id`` is given, otherwise from all chats."""
    return queries.remove_user_from_chats(
        store, user_id, chat_id, legacy_quirks=settings.legacy_quirks
    )
