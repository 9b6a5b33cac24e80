"""
Общие утилиты для работы с текстом
"""
import re
from typing import Union

# Буква или диакритический знак (\p{L}\p{M})
LETTER_OR_MARK = r"(?:[^\W\d_]|[\u0300-\u036f\u0483-\u0489])"

# Любая последовательность не-букв и не-цифр
NON_ALNUM_RE = re.compile(r"[\W_]+")

# Целое слово из букв и цифр
WORD_RE = re.compile(r"\b[^\W_]+\b")

TAG_RE = re.compile(r"<[^>]*>")


def to_text(value: Union[str, bytes, None]) -> str:
    """
    Привести вход к строке

    Некорректные UTF-8 последовательности отбрасываются.
    """
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="ignore")
    return value


def strip_tags(text: str) -> str:
    """Удаление HTML-тегов"""
    return TAG_RE.sub("", text)
