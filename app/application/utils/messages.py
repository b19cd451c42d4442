"""
Bilingual (English / Urdu) message catalogue.

Texts are `str.format` templates; each language may use its own placeholders
(e.g. the Urdu product card prefers `name_ur`). Unused keyword arguments are
ignored, so callers can pass one parameter set for both languages.
"""
from __future__ import annotations

import logging

from app.application.ports.message_platform import Button, ListRow
from app.domain.entities.conversation import Language
from app.domain.entities.order import PaymentMethod
from app.domain.entities.product import Product


logger = logging.getLogger(__name__)

DIVIDER = "\n\n─────────────────\n\n"
DEFAULT_LANGUAGE = Language.EN

MESSAGES: dict[str, dict[Language, str]] = {
    "WELCOME": {
        Language.EN: (
            "Welcome to {business_name}! 🛍️\n\n"
            "We offer the best quality products at amazing prices. Browse our collection "
            "below and order directly through WhatsApp. It's quick and easy!\n\n"
            "👇 Here's what we have for you:"
        ),
        Language.UR: (
            "{business_name_ur} میں خوش آمدید! 🛍️\n\n"
            "ہم بہترین کوالٹی کی مصنوعات حیرت انگیز قیمتوں پر پیش کرتے ہیں۔ نیچے ہماری مصنوعات دیکھیں "
            "اور واٹس ایپ پر آسانی سے آرڈر کریں!\n\n"
            "👇 آئیے آپ کو دکھاتے ہیں:"
        ),
    },
    "PRODUCT_CARD": {
        Language.EN: (
            "📦 *{name}*\n\n{description}\n\n"
            "💰 Price: Rs {price}\n📋 SKU: {sku}\n📊 Stock: {stock} units"
        ),
        Language.UR: (
            "📦 *{name_ur}*\n\n{description_ur}\n\n"
            "💰 قیمت: Rs {price}\n📋 SKU: {sku}\n📊 اسٹاک: {stock} یونٹس"
        ),
    },
    "PRODUCT_ACTIONS": {
        Language.EN: "What would you like to do?",
        Language.UR: "آپ کیا کرنا چاہیں گے؟",
    },
    "ASK_QUANTITY": {
        Language.EN: "How many units would you like to order?\n\nPlease select from the list or send a number:",
        Language.UR: "آپ کتنے یونٹس آرڈر کرنا چاہیں گے؟\n\nبراہِ کرم فہرست سے منتخب کریں یا نمبر بھیجیں:",
    },
    "ASK_NAME": {
        Language.EN: "Please provide your full name:",
        Language.UR: "براہِ کرم اپنا پورا نام فراہم کریں:",
    },
    "ASK_PHONE": {
        Language.EN: "Please provide your mobile number:\n\n(Format: 03XXXXXXXXX or +92 3XXXXXXXXX)",
        Language.UR: "براہِ کرم اپنا موبائل نمبر فراہم کریں:\n\n(فارمیٹ: 03XXXXXXXXX یا ‎+92 3XXXXXXXXX)",
    },
    "ASK_ADDRESS": {
        Language.EN: "Please provide your complete delivery address:\n\n(Include street, area, and city)",
        Language.UR: "براہِ کرم اپنا مکمل ڈیلیوری پتہ فراہم کریں:\n\n(گلی، علاقہ اور شہر شامل کریں)",
    },
    "ASK_PAYMENT_METHOD": {
        Language.EN: "Please select your payment method:",
        Language.UR: "براہِ کرم ادائیگی کا طریقہ منتخب کریں:",
    },
    "EASYPAISA_INSTRUCTIONS": {
        Language.EN: (
            "💳 *EasyPaisa Payment Details*\n\n"
            "Account Name: {account_name}\n"
            "Account Number: {account_number}\n\n"
            "Please send:\n"
            "1️⃣ Payment screenshot, OR\n"
            "2️⃣ Transaction ID\n\n"
            "After payment confirmation, our team will contact you."
        ),
        Language.UR: (
            "💳 *ایزی پیسہ ادائیگی کی تفصیلات*\n\n"
            "اکاؤنٹ کا نام: {account_name}\n"
            "اکاؤنٹ نمبر: {account_number}\n\n"
            "براہِ کرم بھیجیں:\n"
            "1️⃣ ادائیگی کا اسکرین شاٹ، یا\n"
            "2️⃣ ٹرانزیکشن ID\n\n"
            "ادائیگی کی تصدیق کے بعد، ہماری ٹیم آپ سے رابطہ کرے گی۔"
        ),
    },
    "PAYMENT_RECEIVED": {
        Language.EN: (
            "✅ Thank you! Your payment information has been received.\n\n"
            "You will receive a confirmation call within {hours} hours.\n\n"
            "Order ID will be shared during the call."
        ),
        Language.UR: (
            "✅ شکریہ! آپ کی ادائیگی کی معلومات موصول ہو گئی ہیں۔\n\n"
            "آپ کو {hours} گھنٹوں کے اندر تصدیقی کال موصول ہوگی۔\n\n"
            "آرڈر ID کال کے دوران شیئر کی جائے گی۔"
        ),
    },
    "COD_CONFIRMATION": {
        Language.EN: (
            "✅ Thank you! Your Cash on Delivery order has been received.\n\n"
            "You will receive a confirmation call within {hours} hours."
        ),
        Language.UR: (
            "✅ شکریہ! آپ کا کیش آن ڈیلیوری آرڈر موصول ہو گیا ہے۔\n\n"
            "آپ کو {hours} گھنٹوں کے اندر تصدیقی کال موصول ہوگی۔"
        ),
    },
    "ORDER_SUMMARY": {
        Language.EN: (
            "📋 *Order Summary*\n\n"
            "Product: {name}\n"
            "Quantity: {qty}\n"
            "Price: Rs {price} × {qty} = Rs {total}\n\n"
            "Customer: {customer}\n"
            "Phone: {phone}\n"
            "Address: {address}"
        ),
        Language.UR: (
            "📋 *آرڈر کا خلاصہ*\n\n"
            "پروڈکٹ: {name_ur}\n"
            "تعداد: {qty}\n"
            "قیمت: Rs {price} × {qty} = Rs {total}\n\n"
            "کسٹمر: {customer}\n"
            "فون: {phone}\n"
            "پتہ: {address}"
        ),
    },
    "INVALID_INPUT": {
        Language.EN: "Invalid input. Please try again.",
        Language.UR: "غلط ان پٹ۔ براہِ کرم دوبارہ کوشش کریں۔",
    },
    "ERROR_GENERIC": {
        Language.EN: "Sorry, something went wrong. Please try again later.",
        Language.UR: "معذرت، کچھ غلط ہو گیا۔ براہِ کرم بعد میں دوبارہ کوشش کریں۔",
    },
    "NO_PRODUCTS": {
        Language.EN: "Sorry, no products are currently available. Please check back later.",
        Language.UR: "معذرت، فی الوقت کوئی پروڈکٹ دستیاب نہیں ہے۔ براہِ کرم بعد میں چیک کریں۔",
    },
    "TALK_TO_AGENT": {
        Language.EN: "Please share your phone number so our agent can contact you shortly.",
        Language.UR: "براہِ کرم اپنا فون نمبر بھیجیں تاکہ ہمارا ایجنٹ آپ سے جلد رابطہ کر سکے۔",
    },
    "THANK_YOU_AGENT": {
        Language.EN: "Thank you! Our agent will contact you shortly. Please wait for the call.",
        Language.UR: "شکریہ! ہمارا ایجنٹ آپ سے جلد رابطہ کرے گا۔ براہِ کرم کال کا انتظار کریں۔",
    },
}

AUDIO_FILES: dict[str, str] = {
    "WELCOME": "welcome.mp3",
    "PRODUCT_CARD": "product_card.mp3",
    "ASK_QUANTITY": "ask_quantity.mp3",
    "ASK_NAME": "ask_name.mp3",
    "ASK_PHONE": "ask_phone.mp3",
    "ASK_ADDRESS": "ask_address.mp3",
    "ASK_PAYMENT_METHOD": "ask_payment_method.mp3",
    "EASYPAISA_INSTRUCTIONS": "easypaisa_instructions.mp3",
    "PAYMENT_RECEIVED": "payment_received.mp3",
    "COD_CONFIRMATION": "cod_confirmation.mp3",
    "ORDER_SUMMARY": "order_summary.mp3",
    "INVALID_INPUT": "invalid_input.mp3",
    "ERROR_GENERIC": "error_generic.mp3",
    "NO_PRODUCTS": "no_products.mp3",
    "TALK_TO_AGENT": "talk_to_agent.mp3",
    "THANK_YOU_AGENT": "thank_you_agent.mp3",
}

# Button ids are part of the conversation protocol: handlers and the webhook
# normalizer match on them.
BUTTON_LANG_EN = "lang_en"
BUTTON_LANG_UR = "lang_ur"
BUTTON_BUY = "buy"
BUTTON_NEXT = "next"
BUTTON_AGENT = "agent"
BUTTON_PAYMENT_EASYPAISA = "payment_easypaisa"
BUTTON_PAYMENT_COD = "payment_cod"

BUTTON_TITLES: dict[str, dict[Language, str]] = {
    BUTTON_LANG_EN: {Language.EN: "English", Language.UR: "English"},
    BUTTON_LANG_UR: {Language.EN: "اردو", Language.UR: "اردو"},
    BUTTON_BUY: {Language.EN: "Buy 🛒", Language.UR: "خریدیں 🛒"},
    BUTTON_NEXT: {Language.EN: "Next Product ➡️", Language.UR: "اگلا پروڈکٹ ➡️"},
    BUTTON_AGENT: {Language.EN: "Talk to Agent 👤", Language.UR: "ایجنٹ سے بات کریں 👤"},
    BUTTON_PAYMENT_EASYPAISA: {Language.EN: "EasyPaisa 💳", Language.UR: "ایزی پیسہ 💳"},
    BUTTON_PAYMENT_COD: {Language.EN: "Cash on Delivery 💵", Language.UR: "کیش آن ڈیلیوری 💵"},
}

LANGUAGE_BUTTONS = {
    BUTTON_LANG_EN: Language.EN,
    BUTTON_LANG_UR: Language.UR,
}

PAYMENT_BUTTONS = {
    BUTTON_PAYMENT_EASYPAISA: PaymentMethod.EASYPAISA,
    BUTTON_PAYMENT_COD: PaymentMethod.COD,
}

QUANTITY_ROW_PREFIX = "qty_"
QUANTITY_ROW_COUNT = 10
QUANTITY_LIST_LABEL = {Language.EN: "Select Quantity", Language.UR: "تعداد منتخب کریں"}
QUANTITY_SECTION_TITLE = {Language.EN: "Quantity", Language.UR: "تعداد"}


def _language(language: Language | str | None) -> Language:
    if language is None:
        return DEFAULT_LANGUAGE
    try:
        return Language(language)
    except ValueError:
        return DEFAULT_LANGUAGE


def get_message(key: str, language: Language | str | None = None, **params) -> str:
    templates = MESSAGES.get(key)
    if templates is None:
        logger.error("Message key not found", extra={"reason": key})
        return ""
    lang = _language(language)
    template = templates.get(lang) or templates[DEFAULT_LANGUAGE]
    return template.format(**params)


def bilingual(key: str, **params) -> str:
    """English block, divider, Urdu block."""
    return get_message(key, Language.EN, **params) + DIVIDER + get_message(key, Language.UR, **params)


def get_button(button_id: str, language: Language | str | None = None) -> Button:
    titles = BUTTON_TITLES[button_id]
    lang = _language(language)
    return Button(id=button_id, title=titles.get(lang) or titles[DEFAULT_LANGUAGE])


def audio_url(key: str, base_url: str) -> str | None:
    filename = AUDIO_FILES.get(key)
    if not filename:
        return None
    return f"{base_url.rstrip('/')}/audio/{filename}"


def format_price(value: float) -> str:
    if float(value).is_integer():
        return f"{value:,.0f}"
    return f"{value:,.2f}"


def quantity_rows(language: Language | str | None = None) -> list[ListRow]:
    lang = _language(language)
    rows = []
    for n in range(1, QUANTITY_ROW_COUNT + 1):
        if lang == Language.UR:
            description = f"{n} یونٹ"
        else:
            description = f"{n} unit" if n == 1 else f"{n} units"
        rows.append(ListRow(id=f"{QUANTITY_ROW_PREFIX}{n}", title=str(n), description=description))
    return rows


def welcome_params(business_name: str | None) -> dict[str, str]:
    return {
        "business_name": business_name or "Our Store",
        "business_name_ur": business_name or "ہماری دکان",
    }


def product_params(product: Product) -> dict[str, object]:
    return {
        "name": product.name,
        "name_ur": product.name_ur or product.name,
        "description": product.description,
        "description_ur": product.description_ur or product.description,
        "price": format_price(product.price),
        "sku": product.sku,
        "stock": product.stock,
    }


def order_summary_params(product: Product, qty: int, name: str, phone: str, address: str) -> dict[str, object]:
    params = product_params(product)
    params.update(
        {
            "qty": qty,
            "total": format_price(product.price * qty),
            "customer": name,
            "phone": phone,
            "address": address,
        }
    )
    return params
