#!/usr/bin/env python3
"""Delete stored payment-proof media older than MEDIA_RETENTION_DAYS. Meant for cron."""
from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from dotenv import load_dotenv

load_dotenv()

from app.wiring.dependencies import get_media_store


def main() -> None:
    removed = get_media_store().cleanup_expired()
    print(f"Removed {removed} expired media file(s)")


if __name__ == "__main__":
    main()
