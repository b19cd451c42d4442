#!/usr/bin/env python3
"""
Interactive local chat harness (no HTTP, no WhatsApp).

Usage:
  python3 scripts/chat_local.py

What it does:
- Keeps a stable wa_id for the session
- Sends your input through the same HandleIncomingMessageUseCase as the webhook
- Prints every outbound message the bot would have sent

Plain lines are sent as text. Commands simulate the other modalities:
  /button <id>     tap a button (lang_en, lang_ur, buy, next, agent, payment_easypaisa, payment_cod)
  /list <id>       pick a list row (qty_1 .. qty_10)
  /image <ref>     send a photo
  /voice <words>   send a voice note; the mock transcriber "hears" the words
"""
from __future__ import annotations

import os
import sys
import time
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from dotenv import load_dotenv

load_dotenv()

from app.core.config import settings
from app.domain.entities.inbound_event import InboundEvent, Modality
from app.infrastructure.catalog.product_catalog_store import ProductCatalogStore
from app.infrastructure.llm.mock_language_service import MockLanguageService
from app.infrastructure.media.local_media_store import LocalMediaStore
from app.infrastructure.store.memory_store import MemoryConversationStore, MemoryOrderStore
from app.infrastructure.whatsapp.mock_platform import MockWhatsAppPlatform
from app.wiring.dependencies import build_handle_incoming_message_use_case, get_business_profile


def _print_header(wa_id: str) -> None:
    print("\nLocal Chat Harness")
    print("-" * 60)
    print(f"wa_id: {wa_id}")
    print("Type a message and press Enter. Try 'hi' to start.")
    print("Commands: /button, /list, /image, /voice, /orders, /state, /new, /quit, /help")
    print("-" * 60)


def _print_sent(entries: list[dict]) -> None:
    if not entries:
        print("(no outbound message)")
        return
    for entry in entries:
        kind = entry["kind"]
        if kind == "text":
            print(f"[text]\n{entry['text']}")
        elif kind == "buttons":
            ids = ", ".join(f"{b.id} ({b.title})" for b in entry["buttons"])
            print(f"[buttons]\n{entry['text']}\n  -> {ids}")
        elif kind == "list":
            ids = ", ".join(row.id for row in entry["rows"])
            print(f"[list: {entry['button_label']}]\n{entry['text']}\n  -> {ids}")
        elif kind == "image":
            print(f"[image] {entry['image_ref']}")
            if entry.get("text"):
                print(entry["text"])
        elif kind == "audio":
            print(f"[audio] {entry['audio_ref']}")
        print()


def _event(wa_id: str, user_input: str) -> InboundEvent | None:
    message_id = f"local_{int(time.time() * 1000)}"
    base = {"identity": wa_id, "message_id": message_id, "timestamp": int(time.time())}
    if not user_input.startswith("/"):
        return InboundEvent(modality=Modality.TEXT, text=user_input, **base)

    command, _, arg = user_input.partition(" ")
    arg = arg.strip()
    if command == "/button" and arg:
        return InboundEvent(modality=Modality.BUTTON, button_id=arg, **base)
    if command == "/list" and arg:
        return InboundEvent(modality=Modality.LIST, list_id=arg, **base)
    if command == "/image":
        return InboundEvent(modality=Modality.IMAGE, media_ref=arg or "local-proof.jpg", **base)
    if command == "/voice" and arg:
        return InboundEvent(modality=Modality.VOICE, media_ref=arg, **base)
    return None


def main() -> None:
    wa_id = os.getenv("CHAT_WA_ID", "923001234567")
    store = MemoryConversationStore()
    orders = MemoryOrderStore()
    platform = MockWhatsAppPlatform()
    use_case = build_handle_incoming_message_use_case(
        store=store,
        orders=orders,
        catalog=ProductCatalogStore.from_json(settings.CATALOG_PATH),
        platform=platform,
        language_service=MockLanguageService(),
        media=LocalMediaStore(root=settings.STORAGE_PATH),
        profile=get_business_profile(),
        audio_prompts_enabled=False,
    )
    _print_header(wa_id)

    while True:
        try:
            user_input = input("\n> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nBye!")
            return

        if not user_input:
            continue

        cmd = user_input.lower()
        if cmd in ("/quit", "/exit"):
            print("Bye!")
            return
        if cmd == "/help":
            print(__doc__)
            continue
        if cmd == "/new":
            wa_id = f"92300{int(time.time()) % 10_000_000:07d}"
            print(f"New wa_id: {wa_id}")
            continue
        if cmd == "/state":
            conversation = store.get(wa_id)
            print(conversation if conversation else "(no conversation yet)")
            continue
        if cmd == "/orders":
            for order in orders.list_for_identity(wa_id):
                print(f"{order.order_id} {order.status.value} {order.qty} x {order.product_name} = {order.total_amount}")
            continue

        event = _event(wa_id, user_input)
        if event is None:
            print("Unknown command. Type /help.")
            continue

        before = len(platform.sent)
        use_case.handle(event)
        print("\n--- Bot ---")
        _print_sent(platform.sent[before:])
        print("-" * 60)


if __name__ == "__main__":
    main()
