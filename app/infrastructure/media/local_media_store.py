from __future__ import annotations

import logging
import re
import time
from pathlib import Path

from app.application.ports.media_storage import MediaStoragePort


_UNSAFE = re.compile(r"[^A-Za-z0-9_.+\-]")


class LocalMediaStore(MediaStoragePort):
    """Media files under <root>/<identity>/, e.g. payment_<ms>.jpg."""

    def __init__(self, root: str = "./storage", retention_days: int = 7) -> None:
        self._root = Path(root)
        self._root.mkdir(parents=True, exist_ok=True)
        self._retention_seconds = retention_days * 24 * 60 * 60
        self._logger = logging.getLogger(__name__)

    def save_payment_proof(self, identity: str, content: bytes) -> str:
        user_dir = self._root / _UNSAFE.sub("_", identity)
        user_dir.mkdir(parents=True, exist_ok=True)
        file_path = user_dir / f"payment_{int(time.time() * 1000)}.jpg"
        file_path.write_bytes(content)
        self._logger.info("Payment proof stored", extra={"wa_id": identity, "reason": str(file_path)})
        return str(file_path)

    def cleanup_expired(self, now: float | None = None) -> int:
        """Delete per-identity media files older than the retention window. Returns the count removed."""
        now = time.time() if now is None else now
        removed = 0
        for user_dir in self._root.iterdir():
            if not user_dir.is_dir() or user_dir.name == "audio":
                continue
            for file_path in user_dir.iterdir():
                if not file_path.is_file():
                    continue
                if now - file_path.stat().st_mtime > self._retention_seconds:
                    file_path.unlink()
                    removed += 1
        if removed:
            self._logger.info("Expired media removed", extra={"reason": str(removed)})
        return removed
