from __future__ import annotations

from typing import Mapping


def verify_get_request(params: Mapping[str, str], expected_token: str) -> str | None:
    """Challenge to echo back when the subscription request carries the expected token, else None."""
    mode = params.get("hub.mode")
    token = params.get("hub.verify_token")
    challenge = params.get("hub.challenge")
    if mode == "subscribe" and token and token == expected_token:
        return challenge or ""
    return None
