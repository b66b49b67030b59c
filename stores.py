# stores.py
# The in-memory dataset, owned by a single store object and shared by all requests.

import threading
from typing import Dict, List, Optional

from models import Chat, Dataset, User


class ChatStore:
    """Owns the loaded Dataset for the process lifetime.

    Sync FastAPI endpoints run in a thread pool, so every read or mutation of
    the dataset must happen while holding ``lock``. Users and chats are never
    added or removed; only ``participants`` and ``messages`` change in place.
    """

    def __init__(self, dataset: Dataset):
        self.dataset = dataset
        self.lock = threading.RLock()

    @property
    def chats(self) -> List[Chat]:
        return self.dataset.chats

    def find_user(self, user_id: str) -> Optional[User]:
        # First match wins; ids are assumed unique upstream.
        return next((u for u in self.dataset.users if u.user_id == user_id), None)

    def find_chat(self, chat_id: str) -> Optional[Chat]:
        return next((c for c in self.dataset.chats if c.chat_id == chat_id), None)

    def chats_with(self, username: str) -> List[Chat]:
        return [c for c in self.dataset.chats if username in c.participants]

    def counts(self) -> Dict[str, int]:
        with self.lock:
            return {"users": len(self.dataset.users), "chats": len(self.dataset.chats)}
