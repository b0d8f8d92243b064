"""Dataset retrieval: one read of one JSON document."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Union

import requests

log = logging.getLogger(__name__)

_DEFAULT_TIMEOUT = 20  # seconds


def is_url(location: str) -> bool:
    return location.startswith(("http://", "https://"))


def fetch_document(location: Union[str, Path], *, timeout: float = _DEFAULT_TIMEOUT) -> Any:
    """Read the JSON document at *location* (URL or filesystem path).

    Single attempt, no retry: HTTP errors, connection errors, missing files
    and invalid JSON all propagate to the caller.
    """
    location = str(location)
    if is_url(location):
        resp = requests.get(location, timeout=timeout)
        resp.raise_for_status()
        log.info("Fetched %s (%d bytes)", location[:80], len(resp.content))
        return resp.json()

    path = Path(location)
    with path.open("r", encoding="utf-8") as f:
        payload = json.load(f)
    log.info("Read %s", path)
    return payload
