#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
import time
from typing import Any

import httpx
from httpx import ConnectError


def build_payload(wa_id: str, text: str | None, button_id: str | None) -> dict[str, Any]:
    now = int(time.time())
    message: dict[str, Any] = {
        "id": f"local_{now * 1000}",
        "from_me": False,
        "chat_id": f"{wa_id}@s.whatsapp.net",
        "from": wa_id,
        "timestamp": now,
    }
    if button_id:
        message["type"] = "reply"
        message["reply"] = {"type": "buttons_reply", "buttons_reply": {"id": f"ButtonsV3:{button_id}"}}
    else:
        message["type"] = "text"
        message["text"] = {"body": text or ""}
    return {"messages": [message]}


def main() -> None:
    parser = argparse.ArgumentParser(description="Send a test Whapi.Cloud webhook POST")
    parser.add_argument("--url", default="http://127.0.0.1:8000/webhooks/whatsapp")
    parser.add_argument("--wa-id", default="923001234567")
    parser.add_argument("--text", default="hi")
    parser.add_argument("--button", default=None, help="Send a button tap with this id instead of text")
    args = parser.parse_args()

    payload = build_payload(args.wa_id, args.text, args.button)
    body = json.dumps(payload).encode("utf-8")

    try:
        resp = httpx.post(args.url, content=body, headers={"Content-Type": "application/json"}, timeout=10.0)
    except ConnectError:
        print("Connection refused. Is the FastAPI server running?")
        print("Try: uvicorn app.main:app --reload --port 8000")
        return

    print(resp.status_code)
    if resp.text:
        print(resp.text)


if __name__ == "__main__":
    main()
