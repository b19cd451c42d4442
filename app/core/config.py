from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    WHAPI_API_TOKEN: str | None = None
    WHAPI_BASE_URL: str = "https://gate.whapi.cloud"
    WHAPI_TIMEOUT_SECONDS: float = 10.0
    WHATSAPP_VERIFY_TOKEN: str = ""
    AUTO_REPLY_ENABLED: bool = True

    GROQ_API_KEY: str | None = None
    GROQ_BASE_URL: str = "https://api.groq.com/openai/v1"
    GROQ_MODEL: str = "llama-3.3-70b-versatile"
    GROQ_WHISPER_MODEL: str = "whisper-large-v3-turbo"
    GROQ_TEMPERATURE: float = 0.0
    GROQ_TIMEOUT_SECONDS: float = 30.0

    BUSINESS_NAME: str = ""
    EASYPAISA_ACCOUNT_NAME: str = ""
    EASYPAISA_ACCOUNT_NUMBER: str = ""
    EASYPAISA_QR_CODE_URL: str = ""
    PLACEHOLDER_URL_MARKERS: list[str] = ["your-domain.com"]
    CONFIRMATION_WAIT_HOURS: str = "1-3"

    # JSON list in env, e.g. GREETING_PHRASES='["hi", "salam"]'
    GREETING_PHRASES: list[str] = [
        "hi",
        "hello",
        "hey",
        "salam",
        "assalam o alaikum",
        "assalamualaikum",
        "aoa",
        "start",
        "menu",
        "السلام علیکم",
        "سلام",
    ]
    AUDIO_PROMPTS_ENABLED: bool = True
    BASE_URL: str = "http://localhost:8000"
    AUDIO_DIR: str = "./storage/audio"

    ENV: str = "dev"
    STORE_PROVIDER: str = "json"
    DATA_DIR: str = "./data"
    CATALOG_PATH: str = "./data/products.json"
    STORAGE_PATH: str = "./storage"
    MEDIA_RETENTION_DAYS: int = 7

    LOG_LEVEL: str = "INFO"


settings = Settings()
