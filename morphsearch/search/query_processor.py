"""
Обработчик поисковых запросов

Токенизация, удаление стоп-слов, исправление раскладки клавиатуры
и нормализация запроса стеммером.
"""
import re
from types import MappingProxyType
from typing import List, Mapping, Optional, Iterable

from ..core.models import SearchQuery
from .stemmer import RussianStemmer, default_stemmer
from .text_utils import NON_ALNUM_RE


# Русские стоп-слова по умолчанию
DEFAULT_STOPWORDS_RU = frozenset({
    "а", "без", "более", "бы", "был", "была", "были", "было", "быть",
    "в", "вам", "вас", "весь", "во", "вот", "все", "всего", "всех",
    "вы", "где", "да", "даже", "для", "до", "его", "ее", "её", "если", "есть",
    "еще", "ещё", "же", "за", "здесь", "и", "из", "или", "им", "их", "к",
    "как", "ко", "когда", "кто", "ли", "либо", "между", "меня", "мне",
    "может", "мы", "на", "над", "надо", "наш", "не", "него", "нее", "неё",
    "нет", "ни", "них", "но", "ну", "о", "об", "однако", "он", "она", "они",
    "оно", "от", "перед", "по", "под", "после", "при", "про", "с", "сам",
    "сама", "сами", "само", "свой", "себе", "себя", "со", "так", "также",
    "такой", "там", "те", "тем", "то", "тогда", "того", "тоже", "той",
    "только", "том", "тот", "ту", "ты", "у", "уж", "уже", "хотя", "чего",
    "чей", "чем", "через", "что", "чтоб", "чтобы", "чье", "чьё", "чья",
    "эта", "эти", "это", "этот", "этом", "этой", "эту", "я",
})

# Маппинг раскладки EN -> RU (клавиши)
EN_TO_RU = MappingProxyType({
    'q': 'й', 'w': 'ц', 'e': 'у', 'r': 'к', 't': 'е', 'y': 'н', 'u': 'г',
    'i': 'ш', 'o': 'щ', 'p': 'з', '[': 'х', ']': 'ъ', 'a': 'ф', 's': 'ы',
    'd': 'в', 'f': 'а', 'g': 'п', 'h': 'р', 'j': 'о', 'k': 'л', 'l': 'д',
    ';': 'ж', "'": 'э', 'z': 'я', 'x': 'ч', 'c': 'с', 'v': 'м', 'b': 'и',
    'n': 'т', 'm': 'ь', ',': 'б', '.': 'ю',
})

# Маппинг раскладки RU -> EN
RU_TO_EN = MappingProxyType({v: k for k, v in EN_TO_RU.items()})

LATIN_RE = re.compile(r"[a-z]", re.IGNORECASE)
WHITESPACE_RE = re.compile(r"\s+")


def _stopwords_pattern(stopwords: Iterable[str]) -> "re.Pattern":
    # Длинные слова первыми, чтобы "во" не проигрывало "в"
    words = sorted(stopwords, key=lambda w: (-len(w), w))
    return re.compile(
        r"\b(?:" + "|".join(re.escape(w) for w in words) + r")\b",
        re.IGNORECASE,
    )


class QueryProcessor:
    """
    Обработчик поисковых запросов

    Выполняет:
    1. Токенизацию
    2. Удаление стоп-слов
    3. Исправление раскладки клавиатуры
    4. Нормализацию стеммером (запрос для нечёткого поиска)

    Таблицы стоп-слов и раскладки можно подменить через конструктор.
    """

    def __init__(
        self,
        stopwords: Optional[Iterable[str]] = None,
        layout: Optional[Mapping[str, str]] = None,
        stemmer: Optional[RussianStemmer] = None,
        min_term_length: int = 2,
    ):
        self.stopwords = frozenset(stopwords) if stopwords is not None else DEFAULT_STOPWORDS_RU
        layout = layout if layout is not None else EN_TO_RU
        self.stemmer = stemmer or default_stemmer
        self.min_term_length = min_term_length

        self._stopwords_re = _stopwords_pattern(self.stopwords) if self.stopwords else None
        self._to_cyrillic = str.maketrans(dict(layout))
        self._to_latin = str.maketrans({v: k for k, v in layout.items()})

    def process(self, query: str) -> SearchQuery:
        """Полная обработка запроса"""
        normalized = self.strip_stop_words(query)
        layout_variant = self.correct_keyboard_layout(normalized)

        return SearchQuery(
            raw_query=query,
            normalized_query=normalized,
            tokens=self.tokenize(normalized),
            layout_variant=layout_variant if layout_variant != normalized else None,
            stemmed_query=self.stem_join(normalized),
        )

    def tokenize(self, text: str) -> List[str]:
        """
        Разбиение на термины

        Делит по любым не буквенно-цифровым символам, отбрасывает
        однобуквенные токены. Порядок сохраняется, дубли не удаляются.
        """
        parts = NON_ALNUM_RE.split(text.lower())
        return [t for t in parts if t and len(t) >= self.min_term_length]

    def strip_stop_words(self, text: str) -> str:
        """Удаление стоп-слов и лишних пробелов"""
        text = text.lower()
        if self._stopwords_re is not None:
            text = self._stopwords_re.sub(" ", text)
        text = WHITESPACE_RE.sub(" ", text)
        return text.strip()

    def correct_keyboard_layout(self, text: str) -> str:
        """
        Исправление раскладки клавиатуры

        Если в тексте есть латинские буквы - переводим в русскую раскладку,
        иначе - в английскую. Это только вариант запроса, а не исправление:
        для правильно набранного текста результат будет бессмысленным.

        Примеры:
            ghbdtn -> привет
            руддщ -> hello
        """
        is_latin = LATIN_RE.search(text) is not None
        table = self._to_cyrillic if is_latin else self._to_latin
        return text.lower().translate(table)

    def stem_join(self, text: str) -> str:
        """
        Нормализация запроса стеммером

        Пример:
            "документы по расходам" -> "документ по расход"
        """
        stems = []
        for token in self.tokenize(text):
            stemmed = self.stemmer.stem(token)
            if stemmed not in stems:
                stems.append(stemmed)
        return " ".join(stems)


# Обработчик по умолчанию
default_processor = QueryProcessor()


def tokenize(text: str) -> List[str]:
    return default_processor.tokenize(text)


def strip_stop_words(text: str) -> str:
    return default_processor.strip_stop_words(text)


def correct_keyboard_layout(text: str) -> str:
    return default_processor.correct_keyboard_layout(text)


def stem_join(text: str) -> str:
    return default_processor.stem_join(text)
