from typing import Hashable, Iterable, List, TypeVar

T = TypeVar("T", bound=Hashable)


def unique(items: Iterable[T]) -> List[T]:
    """De-duplicate while keeping the first occurrence of each item."""
    return list(dict.fromkeys(items))


def others_in_chats(chats, exclude: str) -> List[str]:
    """Flatten the participants of ``chats``, skipping ``exclude``, de-duplicated."""
    return unique(p for chat in chats for p in chat.participants if p != exclude)
