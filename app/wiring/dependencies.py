from functools import lru_cache
import logging
from pathlib import Path

from app.core.config import settings
from app.application.ports.conversation_store import ConversationStorePort
from app.application.ports.language_service import LanguageServicePort
from app.application.ports.message_platform import MessagePlatformPort
from app.application.ports.order_store import OrderStorePort
from app.application.ports.product_catalog import ProductCatalogPort
from app.application.use_cases.create_order import CreateOrderUseCase
from app.application.use_cases.field_resolver import FieldResolver
from app.application.use_cases.handle_incoming_message import HandleIncomingMessageUseCase
from app.application.use_cases.router import ConversationRouter
from app.application.use_cases.send_reply import SendReplyUseCase
from app.application.use_cases.state_handlers import StateHandlers
from app.application.use_cases.transcript_reconciler import TranscriptReconciler
from app.domain.entities.business_profile import BusinessProfile
from app.infrastructure.catalog.product_catalog_store import ProductCatalogStore
from app.infrastructure.llm.groq_language_service import GroqLanguageService
from app.infrastructure.llm.mock_language_service import MockLanguageService
from app.infrastructure.media.local_media_store import LocalMediaStore
from app.infrastructure.store.json_store import JsonConversationStore, JsonOrderStore
from app.infrastructure.store.memory_store import MemoryConversationStore, MemoryOrderStore
from app.infrastructure.whatsapp.mock_platform import MockWhatsAppPlatform
from app.infrastructure.whatsapp.whapi_client import WhapiClient
from app.infrastructure.whatsapp.whapi_platform import WhapiPlatform


logger = logging.getLogger(__name__)


def _is_dev() -> bool:
    return settings.ENV.lower() in {"dev", "local"}


@lru_cache
def get_language_service() -> LanguageServicePort:
    if settings.GROQ_API_KEY and settings.GROQ_API_KEY.strip():
        return GroqLanguageService(
            api_key=settings.GROQ_API_KEY,
            base_url=settings.GROQ_BASE_URL,
            model=settings.GROQ_MODEL,
            whisper_model=settings.GROQ_WHISPER_MODEL,
            temperature=settings.GROQ_TEMPERATURE,
            timeout=settings.GROQ_TIMEOUT_SECONDS,
        )
    logger.info("Using MockLanguageService (GROQ_API_KEY missing)")
    return MockLanguageService()


@lru_cache
def get_conversation_store() -> ConversationStorePort:
    if settings.STORE_PROVIDER.lower() == "memory":
        return MemoryConversationStore()
    return JsonConversationStore(data_dir=str(Path(settings.DATA_DIR) / "conversations"))


@lru_cache
def get_order_store() -> OrderStorePort:
    if settings.STORE_PROVIDER.lower() == "memory":
        return MemoryOrderStore()
    return JsonOrderStore(data_dir=str(Path(settings.DATA_DIR) / "orders"))


@lru_cache
def get_product_catalog() -> ProductCatalogPort:
    return ProductCatalogStore.from_json(settings.CATALOG_PATH)


@lru_cache
def get_media_store() -> LocalMediaStore:
    return LocalMediaStore(root=settings.STORAGE_PATH, retention_days=settings.MEDIA_RETENTION_DAYS)


@lru_cache
def get_whatsapp_platform() -> MessagePlatformPort:
    if not settings.WHAPI_API_TOKEN:
        if _is_dev():
            logger.info("Using MockWhatsAppPlatform (token missing, ENV=dev/local)")
            return MockWhatsAppPlatform()
        raise ValueError("WHAPI_API_TOKEN is required to send WhatsApp replies.")

    logger.info("Using real WhapiPlatform")
    client = WhapiClient(
        api_token=settings.WHAPI_API_TOKEN,
        base_url=settings.WHAPI_BASE_URL,
        timeout=settings.WHAPI_TIMEOUT_SECONDS,
    )
    return WhapiPlatform(client=client)


def get_business_profile() -> BusinessProfile:
    return BusinessProfile(
        name=settings.BUSINESS_NAME,
        easypaisa_account_name=settings.EASYPAISA_ACCOUNT_NAME,
        easypaisa_account_number=settings.EASYPAISA_ACCOUNT_NUMBER,
        easypaisa_qr_code_url=settings.EASYPAISA_QR_CODE_URL,
        placeholder_url_markers=tuple(settings.PLACEHOLDER_URL_MARKERS),
        confirmation_wait_hours=settings.CONFIRMATION_WAIT_HOURS,
    )


def build_handle_incoming_message_use_case(
    store: ConversationStorePort,
    orders: OrderStorePort,
    catalog: ProductCatalogPort,
    platform: MessagePlatformPort,
    language_service: LanguageServicePort,
    media: LocalMediaStore,
    profile: BusinessProfile,
    auto_reply_enabled: bool = True,
    audio_prompts_enabled: bool = True,
    base_url: str = "http://localhost:8000",
    greeting_phrases: list[str] | None = None,
) -> HandleIncomingMessageUseCase:
    send_reply = SendReplyUseCase(
        platform=platform,
        enabled=auto_reply_enabled,
        audio_enabled=audio_prompts_enabled,
        audio_base_url=base_url,
    )
    handlers = StateHandlers(
        store=store,
        catalog=catalog,
        resolver=FieldResolver(language_service),
        create_order=CreateOrderUseCase(catalog=catalog, orders=orders),
        sender=send_reply,
        platform=platform,
        media=media,
        profile=profile,
    )
    return HandleIncomingMessageUseCase(
        store=store,
        router=ConversationRouter(handlers),
        handlers=handlers,
        reconciler=TranscriptReconciler(language_service),
        platform=platform,
        send_reply=send_reply,
        greeting_phrases=greeting_phrases if greeting_phrases is not None else settings.GREETING_PHRASES,
    )


@lru_cache
def get_handle_incoming_message_use_case() -> HandleIncomingMessageUseCase:
    return build_handle_incoming_message_use_case(
        store=get_conversation_store(),
        orders=get_order_store(),
        catalog=get_product_catalog(),
        platform=get_whatsapp_platform(),
        language_service=get_language_service(),
        media=get_media_store(),
        profile=get_business_profile(),
        auto_reply_enabled=settings.AUTO_REPLY_ENABLED,
        audio_prompts_enabled=settings.AUDIO_PROMPTS_ENABLED,
        base_url=settings.BASE_URL,
    )
