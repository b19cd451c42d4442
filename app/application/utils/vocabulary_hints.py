"""
Transcription priming text per expected field.

Whisper-style models bias toward vocabulary present in the prompt, so each hint
is a short sample sentence followed by words the speaker is likely to use.
"""
from __future__ import annotations

from app.domain.entities.field_kind import FieldKind


COMMON_NAMES = (
    "Wasif, Wasi, Ahmed, Hassan, Hussain, Umar, Usman, Bilal, Tariq, Imran, Fatima, Ayesha, "
    "Zainab, Maryam, Raza, Iqbal, Shah, Malik, Chaudhry, Butt, Rajput, Sheikh, Syed, Qureshi, "
    "Ansari, Abbasi, Abdullah, Naeem, Rasool, Rahman"
)

VOCABULARY_HINTS: dict[FieldKind, str] = {
    FieldKind.ADDRESS: (
        "میرا پتہ ہے مکان نمبر 5، گلی نمبر 3، بلاک B، ڈیفنس فیز 2، لاہور۔ "
        "محلہ، علاقہ، کالونی، سوسائٹی، ٹاؤن، روڈ، بازار، سیکٹر، کراچی، اسلام آباد، راولپنڈی، "
        "فیصل آباد، ملتان، پشاور، گوجرانوالہ، سیالکوٹ، حیدرآباد، ساہیوال، بہاولپور"
    ),
    FieldKind.NAME: f"My name is Muhammad Ali Khan. {COMMON_NAMES}",
    FieldKind.PHONE: (
        "میرا نمبر ہے صفر تین صفر صفر ایک دو تین چار پانچ چھ سات۔ "
        "03001234567، 03211234567، 03331234567، 03451234567، "
        "صفر، ایک، دو، تین، چار، پانچ، چھ، سات، آٹھ، نو، فون نمبر، موبائل نمبر"
    ),
    FieldKind.QUANTITY: "مجھے ایک چاہیے۔ ایک، دو، تین، چار، پانچ، چھ، سات، آٹھ، نو، دس، یونٹ، عدد",
}


def vocabulary_hint(field: FieldKind | None) -> str | None:
    if field is None:
        return None
    return VOCABULARY_HINTS.get(field)
