"""
Оценка релевантности документа запросу
"""
import re
from typing import Optional, Sequence

from ..core.config import ScoringWeights
from ..core.models import Document

REJECTED = -1


class RelevanceScorer:
    """
    Эвристическая оценка релевантности

    Алгоритм:
    1. Полный запрос в заголовке: +400, иначе в тексте: +200.
    2. Если полного совпадения нет, оцениваем каждое слово:
       - в заголовке: +100
       - в тексте: +10 за вхождение, не больше +100 на слово
         (если точных вхождений нет, считаем слова, начинающиеся со стема)
       - если хотя бы одно слово не найдено нигде - документ отклоняется (-1)
    3. Все слова в заголовке: +50.
    4. Слова идут в тексте по порядку на расстоянии до 20 символов: +20.
    5. Чем раньше первое слово, тем больше бонус (до +20).
    """

    def __init__(self, weights: Optional[ScoringWeights] = None):
        self.weights = weights or ScoringWeights()

    def score(
        self,
        document: Document,
        query: str,
        words: Sequence[str],
        stems: Sequence[Optional[str]],
    ) -> int:
        """
        Рассчитать оценку

        Args:
            document: Документ (заголовок и текст)
            query: Полный запрос
            words: Слова запроса (длиной от 2 символов)
            stems: Стемы слов, индекс совпадает с words

        Returns:
            Оценка >= 0 или -1, если документ нужно исключить
        """
        w = self.weights
        title = document.title.lower()
        text = document.body.lower()
        query_lower = query.lower()
        words = [word.lower() for word in words]

        score = 0

        found_in_title = query_lower in title
        found_in_text = query_lower in text

        if found_in_title:
            score += w.exact_title
        elif found_in_text:
            score += w.exact_body

        if not found_in_title and not found_in_text:
            found_words = 0

            for i, word in enumerate(words):
                stem = stems[i] if i < len(stems) else None

                in_title = word in title
                count = text.count(word) if word else 0

                if count == 0 and stem:
                    count = self._count_stem_forms(stem.lower(), text)

                if in_title or count > 0:
                    found_words += 1
                    if in_title:
                        score += w.word_in_title
                    if count > 0:
                        score += min(count * w.word_occurrence, w.word_body_cap)

            if found_words < len(words):
                return REJECTED

            if len(words) > 1 and all(word in title for word in words):
                score += w.all_words_in_title

            if len(words) > 1 and self._words_are_close(words, text):
                score += w.proximity

            first_word = words[0] if words else ""
            pos = (title + " " + text).find(first_word)
            if pos != -1:
                score += max(0, w.position_max - pos // w.position_step)

        if found_in_title or found_in_text or score > 0:
            return score
        return REJECTED

    def _count_stem_forms(self, stem: str, text: str) -> int:
        """Количество слов текста, начинающихся со стема"""
        pattern = r"\b" + re.escape(stem) + r"[^\W\d_]*"
        return len(re.findall(pattern, text, re.IGNORECASE))

    def _words_are_close(self, words: Sequence[str], text: str) -> bool:
        """Слова идут по порядку на небольшом расстоянии друг от друга"""
        gap = ".{0,%d}" % self.weights.proximity_window
        pattern = gap.join(re.escape(word) for word in words)
        return re.search(pattern, text, re.IGNORECASE) is not None
