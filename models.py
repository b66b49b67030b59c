# /models.py
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


# ----------------------------
# Data models
# ----------------------------

class User(BaseModel):
    # Upstream users may carry any extra fields; they are kept and echoed back.
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    user_id: str = Field(alias="userId")
    username: str


class Chat(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    chat_id: str = Field(alias="chatId")
    participants: List[str] = Field(default_factory=list)  # usernames, not user ids
    messages: Optional[List[Any]] = None  # absent until the first append


class Dataset(BaseModel):
    users: List[User]
    chats: List[Chat]


def dump_wire(model: BaseModel) -> Dict[str, Any]:
    """Serialize with upstream field names, omitting fields upstream never sent."""
    return model.model_dump(by_alias=True, exclude_unset=True)


# ----------------------------
# Request / response bodies
# ----------------------------

class AddChatMessageRequest(BaseModel):
    # No validation on message shape; a missing key appends null.
    model_config = ConfigDict(extra="allow")

    message: Any = None


class Acknowledged(BaseModel):
    acknowledged: bool = True
