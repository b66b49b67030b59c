# config.py
# Environment-driven settings, read once at import.

import os

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


class Settings(BaseModel):
    # Upstream data source (fetched once at startup)
    source_url: str = os.getenv("CHATS_SOURCE_URL", "http://localhost:4001/chats")
    source_timeout_s: float = float(os.getenv("CHATS_SOURCE_TIMEOUT", "10"))

    # Static shared secret expected in the `authorization` header
    auth_token: str = os.getenv("AUTH_TOKEN", "someAuthToken")

    # Keep the index-0 removal no-op and the mutual-users exclusion quirk
    legacy_quirks: bool = _env_flag("LEGACY_QUIRKS", "true")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO")


settings = Settings()
