"""
Подсветка найденных терминов и формирование сниппетов
"""
import html
import re
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union

from ..core.config import HighlightConfig
from ..core.models import Term, TermClass
from .distance import levenshtein
from .query_processor import QueryProcessor, default_processor
from .stemmer import RussianStemmer, default_stemmer
from .text_utils import LETTER_OR_MARK, WORD_RE, strip_tags

TermClassOf = Callable[[str], Optional[TermClass]]

# Граница блока: после точки, знака вопроса, восклицательного знака или перевода строки
BLOCK_SPLIT_RE = re.compile(r"(?<=[.?!\n])")


def collect_terms(
    current: Optional[str],
    previous: Optional[str] = None,
    processor: Optional[QueryProcessor] = None,
) -> List[Term]:
    """
    Собрать термины для подсветки из текущего и исходного запросов

    Термины исходного запроса (если он отличается) получают класс PREVIOUS,
    термины текущего - CURRENT. Термин из обоих запросов остаётся CURRENT.
    """
    processor = processor or default_processor
    classes: Dict[str, TermClass] = {}

    if previous and previous != current:
        for token in processor.tokenize(previous):
            classes[processor.stemmer.stem(token)] = TermClass.PREVIOUS

    if current:
        for token in processor.tokenize(current):
            classes[processor.stemmer.stem(token)] = TermClass.CURRENT

    return [Term(text, term_class) for text, term_class in classes.items()]


class Highlighter:
    """
    Подсветка терминов

    - Термины обрабатываются от длинных к коротким.
    - Каждый термин стеммится, подсвечиваются все формы "стем + буквы".
    - Для терминов длиннее 4 символов дополнительно подсвечиваются слова
      с расстоянием Левенштейна не больше 2.
    - Уже подсвеченный фрагмент повторно не оборачивается.
    - Весь исходный текст экранируется.
    """

    def __init__(
        self,
        config: Optional[HighlightConfig] = None,
        stemmer: Optional[RussianStemmer] = None,
    ):
        self.config = config or HighlightConfig()
        self.stemmer = stemmer or default_stemmer

    def highlight(
        self,
        text: str,
        terms: Sequence[Union[Term, str]],
        term_class_of: Optional[TermClassOf] = None,
    ) -> str:
        """
        Подсветить термины в тексте

        Args:
            text: Исходный (неэкранированный) текст
            terms: Термины; строка без класса получает класс по term_class_of
            term_class_of: Класс для строкового термина

        Returns:
            Экранированный текст с тегами <mark class="...">
        """
        spans: List[Tuple[int, int, str]] = []

        for term, css_class in self._ordered(terms, term_class_of):
            lowered = term.lower()
            stemmed = self.stemmer.stem(lowered)

            if stemmed:
                pattern = re.compile(re.escape(stemmed) + LETTER_OR_MARK + "*", re.IGNORECASE)
                for match in pattern.finditer(text):
                    self._add_span(spans, match.start(), match.end(), css_class)

            if len(lowered) > self.config.fuzzy_min_length:
                for match in WORD_RE.finditer(text):
                    word = match.group(0).lower()
                    if levenshtein(word, lowered) <= self.config.fuzzy_max_distance:
                        self._add_span(spans, match.start(), match.end(), css_class)

        return self._render(text, spans)

    def build_snippets(
        self,
        body: str,
        terms: Sequence[Union[Term, str]],
        term_class_of: Optional[TermClassOf] = None,
        max_snippets: Optional[int] = None,
    ) -> List[str]:
        """
        Сформировать сниппеты с подсветкой

        Текст без разметки делится на предложения, берутся те,
        где встречается хоть один термин (не больше max_snippets).
        """
        if max_snippets is None:
            max_snippets = self.config.max_snippets

        ordered = [term.lower() for term, _ in self._ordered(terms, term_class_of) if term]
        snippets: List[str] = []

        if max_snippets <= 0 or not ordered:
            return snippets

        for block in BLOCK_SPLIT_RE.split(strip_tags(body)):
            block_lower = block.lower()
            if any(term in block_lower for term in ordered):
                snippets.append(self.highlight(block, terms, term_class_of))

            if len(snippets) >= max_snippets:
                break

        return snippets

    def _ordered(
        self,
        terms: Sequence[Union[Term, str]],
        term_class_of: Optional[TermClassOf],
    ) -> List[Tuple[str, str]]:
        """Термины с css-классами, от длинных к коротким"""
        items = []
        for term in terms:
            if isinstance(term, Term):
                text, term_class = term.text, term.term_class
            else:
                text = term
                term_class = term_class_of(term) if term_class_of else None
            css_class = term_class.value if term_class else self.config.default_class
            items.append((text, css_class))
        return sorted(items, key=lambda x: -len(x[0]))

    @staticmethod
    def _add_span(spans: List[Tuple[int, int, str]], start: int, end: int, css_class: str) -> None:
        if start == end:
            return
        for s, e, _ in spans:
            if start < e and s < end:
                return
        spans.append((start, end, css_class))

    @staticmethod
    def _render(text: str, spans: List[Tuple[int, int, str]]) -> str:
        parts = []
        pos = 0
        for start, end, css_class in sorted(spans):
            parts.append(html.escape(text[pos:start]))
            parts.append(
                f'<mark class="{html.escape(css_class)}">{html.escape(text[start:end])}</mark>'
            )
            pos = end
        parts.append(html.escape(text[pos:]))
        return "".join(parts)


# Подсветка по умолчанию
default_highlighter = Highlighter()


def highlight(
    text: str,
    terms: Sequence[Union[Term, str]],
    term_class_of: Optional[TermClassOf] = None,
) -> str:
    return default_highlighter.highlight(text, terms, term_class_of)


def build_snippets(
    body: str,
    terms: Sequence[Union[Term, str]],
    term_class_of: Optional[TermClassOf] = None,
    max_snippets: int = 5,
) -> List[str]:
    return default_highlighter.build_snippets(body, terms, term_class_of, max_snippets)
