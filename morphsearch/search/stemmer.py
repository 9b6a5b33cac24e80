"""
Стеммер для русского языка

Отсечение окончаний в RV-области слова (часть после первой гласной).
Группы окончаний заданы явными таблицами, порядок шагов важен.
"""
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import List, Tuple, Union

from .text_utils import to_text

VOWELS = frozenset("аеиоуыэюя")


@dataclass(frozen=True)
class SuffixGroup:
    """
    Группа окончаний

    after_a_ya - окончания, которые отсекаются только после "а" или "я"
    (буква должна находиться внутри RV).
    """
    name: str
    suffixes: Tuple[str, ...]
    after_a_ya: Tuple[str, ...] = ()

    def candidates(self) -> List[Tuple[str, bool]]:
        """Окончания от длинных к коротким"""
        items = [(s, False) for s in self.suffixes]
        items += [(s, True) for s in self.after_a_ya]
        return sorted(items, key=lambda x: -len(x[0]))

    def strip(self, rv: str) -> Tuple[str, bool]:
        """
        Отсечь самое длинное подходящее окончание

        Returns:
            (новый RV, было ли отсечение)
        """
        for suffix, needs_a_ya in self.candidates():
            if not rv.endswith(suffix):
                continue
            rest = rv[:-len(suffix)]
            if needs_a_ya and (not rest or rest[-1] not in "ая"):
                continue
            return rest, True
        return rv, False


PERFECTIVE_GERUND = SuffixGroup(
    "perfective_gerund",
    ("ив", "ивши", "ившись", "ыв", "ывши", "ывшись"),
    ("в", "вши", "вшись"),
)

REFLEXIVE = SuffixGroup("reflexive", ("ся", "сь"))

ADJECTIVE = SuffixGroup(
    "adjective",
    (
        "ее", "ие", "ые", "ое", "ими", "ыми", "ей", "ий", "ый", "ой", "ем",
        "им", "ым", "ом", "его", "ого", "ему", "ому", "их", "ых", "ую", "юю",
        "ая", "яя", "ою", "ею",
    ),
)

PARTICIPLE = SuffixGroup(
    "participle",
    ("ивш", "ывш", "ующ"),
    ("ем", "нн", "вш", "ющ", "щ"),
)

VERB = SuffixGroup(
    "verb",
    (
        "ила", "ыла", "ена", "ейте", "уйте", "ите", "или", "ыли", "ей", "уй",
        "ил", "ыл", "им", "ым", "ен", "ило", "ыло", "ено", "ят", "ует", "уют",
        "ит", "ыт", "ены", "ить", "ыть", "ишь", "ую", "ю",
    ),
    (
        "ла", "на", "ете", "йте", "ли", "й", "л", "ем", "н", "ло", "но", "ет",
        "ют", "ны", "ть", "ешь", "нно",
    ),
)

NOUN = SuffixGroup(
    "noun",
    (
        "а", "ев", "ов", "ие", "ье", "е", "иями", "ями", "ами", "еи", "ии",
        "и", "ией", "ей", "ой", "ий", "й", "иям", "ям", "ием", "ем", "ам",
        "ом", "о", "у", "ах", "иях", "ях", "ы", "ь", "ию", "ью", "ю", "ия",
        "ья", "я",
    ),
)

SUPERLATIVE = SuffixGroup("superlative", ("ейш", "ейше"))

DERIVATIONAL = SuffixGroup("derivational", ("ост", "ость"))

# Согласная, гласные, согласные, гласная, ... "ост"/"ость"
DERIVATIONAL_SHAPE_RE = re.compile(
    r"[^аеиоуыэюя][аеиоуыэюя]+[^аеиоуыэюя]+[аеиоуыэюя].*(?<=о)сть?$"
)


def split_rv(word: str) -> Tuple[str, str]:
    """
    Разделить слово на неизменяемый префикс и RV-область

    Префикс заканчивается первой гласной. Если гласной нет, RV пустая.
    """
    for i, char in enumerate(word):
        if char in VOWELS:
            return word[:i + 1], word[i + 1:]
    return word, ""


class RussianStemmer:
    """
    Стеммер для русского языка

    Пример:
        >>> RussianStemmer().stem("документы")
        'документ'
    """

    def stem(self, word: Union[str, bytes]) -> str:
        """Получить основу слова"""
        return _stem(to_text(word))

    def stem_tokens(self, tokens: List[str]) -> List[str]:
        """Применить стемминг к списку токенов"""
        return [self.stem(t) for t in tokens]


@lru_cache(maxsize=100_000)
def _stem(word: str) -> str:
    word = word.lower().replace("ё", "е")

    start, rv = split_rv(word)
    if not rv:
        return word

    rv, stripped = PERFECTIVE_GERUND.strip(rv)
    if not stripped:
        rv, _ = REFLEXIVE.strip(rv)
        rv, stripped = ADJECTIVE.strip(rv)
        if stripped:
            rv, _ = PARTICIPLE.strip(rv)
        else:
            rv, stripped = VERB.strip(rv)
            if not stripped:
                rv, _ = NOUN.strip(rv)

    if rv.endswith("и"):
        rv = rv[:-1]

    if DERIVATIONAL_SHAPE_RE.search(rv):
        rv, _ = DERIVATIONAL.strip(rv)

    if rv.endswith("ь"):
        rv = rv[:-1]
    else:
        rv, _ = SUPERLATIVE.strip(rv)
        if rv.endswith("нн"):
            rv = rv[:-1]

    return start + rv


# Стеммер по умолчанию (без состояния, безопасен для общего использования)
default_stemmer = RussianStemmer()


def stem(word: Union[str, bytes]) -> str:
    """Получить основу слова стеммером по умолчанию"""
    return default_stemmer.stem(word)
