# queries.py
# Query engine: lookups, mutual-users intersection and in-place mutation over
# the shared ChatStore.
#
# Two legacy behaviors are kept when ``legacy_quirks`` is on (the default):
# - mutual users: the second user's chatted-with scan excludes the FIRST
#   user's username instead of the second user's own;
# - single-chat removal: the position check is truthy rather than "found",
#   so a username at index 0 is never removed and an absent username removes
#   the last participant.
# With ``legacy_quirks`` off both are corrected.

from typing import Any, Dict, Optional

import structlog

from errors import NotFound
from models import Acknowledged, Chat, User, dump_wire
from stores import ChatStore
from utils import others_in_chats

logger = structlog.get_logger("queries")


def _require_user(store: ChatStore, user_id: str) -> User:
    user = store.find_user(user_id)
    if user is None:
        raise NotFound(f"no user with the user id ({user_id}) found")
    return user


def _require_chat(store: ChatStore, chat_id: str) -> Chat:
    chat = store.find_chat(chat_id)
    if chat is None:
        raise NotFound(f"no chat with the chat id ({chat_id}) found")
    return chat


def get_user(store: ChatStore, user_id: str) -> Dict[str, Any]:
    """Return the user and every chat listing their username, in dataset order."""
    with store.lock:
        user = _require_user(store, user_id)
        chats = store.chats_with(user.username)
        return {
            "user": dump_wire(user),
            "chats": [dump_wire(c) for c in chats],
        }


def get_mutual_users(
    store: ChatStore,
    user_id: str,
    another_user_id: str,
    *,
    legacy_quirks: bool = True,
) -> Dict[str, Any]:
    """Usernames both users have shared a chat with.

    Ordered by first appearance in the first user's chatted-with list.
    """
    with store.lock:
        user = store.find_user(user_id)
        another = store.find_user(another_user_id)
        if user is None or another is None:
            raise NotFound(
                f"there was not a user found for both user id ({user_id}) "
                f"and user id ({another_user_id})"
            )

        chatted_with = others_in_chats(store.chats_with(user.username), exclude=user.username)
        another_exclude = user.username if legacy_quirks else another.username
        another_chatted_with = set(
            others_in_chats(store.chats_with(another.username), exclude=another_exclude)
        )

        mutual = [name for name in chatted_with if name in another_chatted_with]
        return {"mutualUsers": mutual}


def add_chat_message(store: ChatStore, chat_id: str, message: Any) -> Dict[str, Any]:
    with store.lock:
        chat = _require_chat(store, chat_id)
        if chat.messages is not None:
            chat.messages.append(message)
        else:
            chat.messages = [message]
        logger.info("chat.message_added", chat_id=chat_id, messages=len(chat.messages))
        return Acknowledged().model_dump()


def _remove_from_chat(chat: Chat, username: str, legacy_quirks: bool) -> bool:
    participants = chat.participants
    index = participants.index(username) if username in participants else -1
    if legacy_quirks:
        # Truthy check on the index: 0 is skipped, -1 drops the last entry.
        if index and participants:
            del participants[index]
            return True
        return False
    if index != -1:
        del participants[index]
        return True
    return False


def remove_user_from_chats(
    store: ChatStore,
    user_id: str,
    chat_id: Optional[str] = None,
    *,
    legacy_quirks: bool = True,
) -> Dict[str, Any]:
    """Remove the user's username from one chat, or from every chat when no chat id is given."""
    with store.lock:
        user = _require_user(store, user_id)

        if chat_id:
            chat = _require_chat(store, chat_id)
            removed = _remove_from_chat(chat, user.username, legacy_quirks)
            logger.info(
                "chat.participant_removed",
                user_id=user_id,
                chat_id=chat_id,
                removed=removed,
            )
            return Acknowledged().model_dump()

        touched = 0
        for chat in store.chats:
            if user.username in chat.participants:
                chat.participants.remove(user.username)
                touched += 1
        logger.info("chat.participant_removed_everywhere", user_id=user_id, chats=touched)
        return Acknowledged().model_dump()
