# loader.py
# One-shot fetch of the upstream dataset. Any failure is fatal to startup;
# there is no retry.

import requests
import structlog
from pydantic import ValidationError

from errors import LoadError
from models import Dataset

logger = structlog.get_logger("loader")


def fetch_dataset(url: str, timeout_s: float = 10.0) -> Dataset:
    """GET the full `{users, chats}` payload and validate its shape.

    The HTTP status is not inspected: a body that parses into the expected
    shape is accepted whatever the status line says.
    """
    try:
        r = requests.get(url, timeout=timeout_s)
    except requests.RequestException as e:
        logger.error("dataset.load_failed", url=url, reason="transport", exception=str(e))
        raise LoadError("failed to retrieve response", detail=str(e)) from e

    try:
        payload = r.json()
    except ValueError as e:
        logger.error("dataset.load_failed", url=url, reason="parse", status=r.status_code, body=r.text[:500])
        raise LoadError("failed to parse response", detail=str(e)) from e

    try:
        dataset = Dataset.model_validate(payload)
    except ValidationError as e:
        logger.error("dataset.load_failed", url=url, reason="shape", errors=e.errors(include_url=False))
        raise LoadError("failed to parse response", detail=e.errors(include_url=False)) from e

    logger.info("dataset.loaded", url=url, users=len(dataset.users), chats=len(dataset.chats))
    return dataset
