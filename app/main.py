import logging
from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from app.api.webhooks import router as webhooks_router
from app.core.config import settings

class ContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        extras = []
        for key in (
            "wa_id",
            "message_id",
            "state",
            "field",
            "modality",
            "order_id",
            "status",
            "total",
            "value",
            "endpoint",
            "text",
            "reason",
        ):
            value = getattr(record, key, None)
            if value not in (None, ""):
                extras.append(f"{key}={value}")
        base = super().format(record)
        if extras:
            return f"{base} | " + " ".join(extras)
        return base


handler = logging.StreamHandler()
handler.setFormatter(ContextFormatter("%(levelname)s:%(name)s:%(message)s"))

root = logging.getLogger()
root.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
root.handlers.clear()
root.addHandler(handler)

app = FastAPI(title="WhatsApp Commerce Bot", version="1.0.0")

app.include_router(webhooks_router, tags=["webhooks"])

# Pre-recorded prompt audio is fetched by WhatsApp from BASE_URL/audio/<file>
if Path(settings.AUDIO_DIR).is_dir():
    app.mount("/audio", StaticFiles(directory=settings.AUDIO_DIR), name="audio")


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
