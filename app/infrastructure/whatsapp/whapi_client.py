from __future__ import annotations

import logging
from typing import Any

import httpx

from app.application.exceptions import ChannelError


BUTTON_TITLE_LIMIT = 20
LIST_LABEL_LIMIT = 20
ROW_TITLE_LIMIT = 24
ROW_DESCRIPTION_LIMIT = 72


class WhapiClient:
    """Thin HTTP client for the Whapi.Cloud WhatsApp gateway."""

    def __init__(
        self,
        api_token: str,
        base_url: str = "https://gate.whapi.cloud",
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._base_host = httpx.URL(self._base_url).host
        # Sent per request so media links on other hosts never see the token
        self._auth_headers = {"Authorization": f"Bearer {api_token}"}
        self._client = httpx.Client(timeout=timeout, transport=transport)
        self._logger = logging.getLogger(__name__)

    def send_text(self, to: str, body: str) -> None:
        self._post("/messages/text", {"to": to, "body": body}, to)

    def send_buttons(self, to: str, body: str, buttons: list[dict[str, str]]) -> None:
        payload = {
            "to": to,
            "type": "button",
            "body": {"text": body},
            "action": {
                "buttons": [
                    {"type": "quick_reply", "id": b["id"], "title": b["title"][:BUTTON_TITLE_LIMIT]}
                    for b in buttons
                ],
            },
        }
        self._post("/messages/interactive", payload, to)

    def send_list(
        self,
        to: str,
        body: str,
        label: str,
        rows: list[dict[str, str | None]],
        section_title: str,
    ) -> None:
        wire_rows = []
        for row in rows:
            wire_row: dict[str, Any] = {"id": row["id"], "title": (row["title"] or "")[:ROW_TITLE_LIMIT]}
            if row.get("description"):
                wire_row["description"] = row["description"][:ROW_DESCRIPTION_LIMIT]
            wire_rows.append(wire_row)

        payload = {
            "to": to,
            "type": "list",
            "body": {"text": body},
            "action": {
                "list": {
                    "label": label[:LIST_LABEL_LIMIT],
                    "sections": [{"title": section_title, "rows": wire_rows}],
                },
            },
        }
        self._post("/messages/interactive", payload, to)

    def send_image(self, to: str, media: str, caption: str | None = None) -> None:
        payload: dict[str, Any] = {"to": to, "media": media}
        if caption:
            payload["caption"] = caption
        self._post("/messages/image", payload, to)

    def send_audio(self, to: str, media: str) -> None:
        self._post("/messages/audio", {"to": to, "media": media}, to)

    def download_media(self, url: str) -> bytes:
        try:
            headers = self._auth_headers if httpx.URL(url).host == self._base_host else None
            if headers is None:
                self._logger.info("Downloading media without credentials", extra={"endpoint": url[:200]})
            resp = self._client.get(url, headers=headers, follow_redirects=True)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            self._logger.error("Whapi media download failed", extra={"reason": str(e)})
            raise ChannelError(f"Media download failed: {e}") from e
        if resp.status_code >= 400:
            self._logger.error(
                "Whapi media download failed",
                extra={"status": resp.status_code, "reason": resp.text[:500]},
            )
            raise ChannelError(f"Media download failed with status {resp.status_code}")
        return resp.content

    def _post(self, path: str, payload: dict[str, Any], recipient_id: str) -> dict[str, Any]:
        try:
            resp = self._client.post(f"{self._base_url}{path}", json=payload, headers=self._auth_headers)
        except httpx.HTTPError as e:
            self._logger.error("Whapi send failed", extra={"wa_id": recipient_id, "endpoint": path, "reason": str(e)})
            raise ChannelError(f"Send to {path} failed: {e}") from e

        if resp.status_code >= 400:
            try:
                error_json = resp.json()
                error = error_json.get("error") if isinstance(error_json, dict) else None
                error_message = error.get("message") if isinstance(error, dict) else resp.text
            except Exception:
                error_message = resp.text

            self._logger.error(
                "Whapi send failed",
                extra={
                    "status": resp.status_code,
                    "endpoint": path,
                    "wa_id": recipient_id,
                    "reason": error_message,
                },
            )
            raise ChannelError(f"Send to {path} failed with status {resp.status_code}")

        self._logger.debug("Whapi send ok", extra={"wa_id": recipient_id, "endpoint": path})
        try:
            return resp.json()
        except ValueError:
            return {}
