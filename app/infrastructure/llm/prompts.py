from __future__ import annotations

from app.domain.entities.field_kind import FieldKind


URDU_DIGITS = "صفر=0, ایک=1, دو=2, تین/تن=3, چار=4, پانچ=5, چھ/چھے=6, سات=7, آٹھ=8, نو=9"
ENGLISH_DIGITS = "zero=0, one=1, two=2, three=3, four=4, five=5, six=6, seven=7, eight=8, nine=9"

COMMON_NAMES = (
    "Muhammad, Ali, Ahmed, Hassan, Hussain, Umar, Usman, Bilal, Tariq, Imran, Fatima, Ayesha, "
    "Zainab, Maryam, Khan, Raza, Iqbal, Shah, Malik, Chaudhry, Butt, Rajput, Sheikh, Syed, Qureshi"
)

CITIES = "Lahore, Karachi, Islamabad, Rawalpindi, Faisalabad, Multan, Peshawar, Gujranwala, Sialkot, Hyderabad"

ADDRESS_TERMS = (
    "مکان/house, گلی/street/gali, محلہ/mohalla, بلاک/block, فیز/phase, سیکٹر/sector, "
    "کالونی/colony, سوسائٹی/society, ٹاؤن/town, روڈ/road"
)

NAME_FIXES = (
    '"Wasee"→"Wasi", "Muhammed"→"Muhammad", "Aly"→"Ali", "Abzar"→"Abuzar", '
    '"Naim"→"Naeem", "Rasul"→"Rasool", "Aysha"→"Ayesha"'
)


def build_extract_prompt(field: FieldKind, language: str) -> str:
    key = field.value
    if field == FieldKind.NAME:
        body = (
            "Extract the person's full name from the text.\n"
            "The text may be a voice transcription in Urdu or English of a Pakistani person's name.\n"
            f"Common Pakistani names include {COMMON_NAMES}.\n"
            "Fix obvious transcription errors. Do NOT invent a name that is not in the text.\n"
        )
    elif field == FieldKind.PHONE:
        body = (
            "Extract a Pakistani mobile phone number from the text.\n"
            "The text may be a voice transcription where digits are spoken as words.\n"
            f"Convert Urdu number words to digits: {URDU_DIGITS}.\n"
            f"Also handle English words: {ENGLISH_DIGITS}. \"double X\" means the digit X twice.\n"
            "Accepted formats: 03XXXXXXXXX, +923XXXXXXXXX, 92 3XXXXXXXXX. Pakistani mobile numbers start with 03.\n"
        )
    elif field == FieldKind.ADDRESS:
        body = (
            "Extract the delivery address from the text.\n"
            "Include street, area and city. Drop conversational filler.\n"
        )
    else:
        lang_name = "Urdu" if language == "ur" else "English"
        body = (
            "Extract the order quantity from the text.\n"
            f"Look for digits or number words (\"one\", \"two\", ...) in {lang_name} or Romanized Urdu.\n"
            "The quantity must be a whole number.\n"
        )

    return (
        "You extract one field from a customer's WhatsApp message.\n"
        "Return ONLY valid JSON. No markdown. No extra text.\n"
        f"Output schema: {{\"{key}\": <value or null>}}\n"
        f"Use {{\"{key}\": null}} if the field is not present.\n"
        "\n"
        + body
    )


def build_cleanup_prompt(field: FieldKind) -> str:
    if field == FieldKind.NAME:
        body = (
            "You receive two voice transcriptions (English and Urdu) of the same audio of a Pakistani person's name.\n"
            "Compare them and return the correct name.\n"
            "Rules:\n"
            "  1. The English transcription usually has better spelling of Pakistani names.\n"
            "  2. The Urdu transcription may confirm the name if the English one is garbled.\n"
            "  3. Remove filler: \"my name is\", \"mera naam hai\", \"mera naam\", \"English:\", \"Urdu:\", \"ji\", punctuation.\n"
            f"  4. Fix common misspellings: {NAME_FIXES}.\n"
            "  5. Capitalize the first letter of each name part.\n"
            "  6. Pick the reading that looks most like a real Pakistani name.\n"
            "  7. Do NOT invent names. If both are garbled, return the English one cleaned up.\n"
        )
    elif field == FieldKind.PHONE:
        body = (
            "You clean up a voice transcription of a Pakistani mobile phone number spoken in Urdu or English.\n"
            f"Urdu number words: {URDU_DIGITS}.\n"
            f"English number words: {ENGLISH_DIGITS}. \"double X\" means the digit X twice.\n"
            "Pakistani mobile numbers start with 03 and have 11 digits (03XXXXXXXXX).\n"
            "Remove filler such as \"میرا نمبر ہے\" or \"my number is\".\n"
            "Convert every spoken digit and return the complete number.\n"
        )
    elif field == FieldKind.ADDRESS:
        body = (
            "You clean up a voice transcription of a Pakistani delivery address spoken in Urdu or English.\n"
            "The transcription may misspell area names, city names or street numbers.\n"
            f"Common cities: {CITIES}.\n"
            f"Common address terms: {ADDRESS_TERMS}.\n"
            "Fix obvious errors in place names and keep the full address intact.\n"
            "Remove filler such as \"میرا پتہ ہے\" or \"my address is\".\n"
        )
    else:
        body = (
            "You clean up a voice transcription of an order quantity spoken in Urdu or English.\n"
            "Convert Urdu number words to digits: ایک=1, دو=2, تین=3, چار=4, پانچ=5, چھ=6, سات=7, آٹھ=8, نو=9, دس=10.\n"
            "Remove filler such as \"مجھے چاہیے\" or \"I want\".\n"
        )

    return (
        body
        + "\n"
        "Return ONLY valid JSON. No markdown. No extra text.\n"
        "Output schema: {\"cleaned\": \"<text>\"}\n"
    )
