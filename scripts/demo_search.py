"""
Демонстрационный скрипт поиска
Загружает демо статьи в память и показывает оценки, подсветку и сниппеты
"""
import asyncio
import logging
from typing import Any, Dict, List, Optional

from morphsearch.core.interfaces import IDocumentIndex, IDocumentRepository
from morphsearch.core.models import Document
from morphsearch.search.engine import SearchEngine


# Тестовые данные - статьи базы знаний
DEMO_ARTICLES = [
    Document(
        id="expenses",
        title="Документы по расходам",
        body=(
            "Для возмещения расходов приложите чеки и авансовый отчёт. "
            "Документы по расходам сдаются в бухгалтерию до пятого числа!"
        ),
    ),
    Document(
        id="report",
        title="Квартальный отчёт",
        body=(
            "Бухгалтер предоставил документ о расходах за квартал.\n"
            "Отчёт согласован с руководителем."
        ),
    ),
    Document(
        id="vacation",
        title="Как оформить отпуск",
        body="Заявление на отпуск подаётся за две недели. Приказ подписывает директор.",
    ),
    Document(
        id="hello",
        title="Привет, новый сотрудник",
        body="Первые шаги в компании: пропуск, почта и рабочее место.",
    ),
]


class DemoIndex(IDocumentIndex):
    """Простейший индекс: все слова запроса должны встречаться в статье"""

    def __init__(self, documents: List[Document]):
        self.documents = documents

    def _text(self, doc: Document) -> str:
        return f"{doc.title} {doc.body}".lower()

    async def search(self, query: str, limit: int = 3000) -> List[str]:
        tokens = query.split()
        return [
            d.id for d in self.documents
            if tokens and all(t in self._text(d) for t in tokens)
        ][:limit]

    async def fuzzy_search(self, query: str, distance: int = 3, prefix_length: int = 2) -> List[str]:
        tokens = query.split()
        return [d.id for d in self.documents if any(t in self._text(d) for t in tokens)]


class DemoRepository(IDocumentRepository):

    def __init__(self, documents: List[Document]):
        self.documents = {d.id: d for d in documents}

    async def get_many(
        self,
        document_ids: List[str],
        filters: Optional[Dict[str, Any]] = None
    ) -> List[Document]:
        return [self.documents[i] for i in document_ids if i in self.documents]


async def run_search(engine: SearchEngine, query: str):
    """Поиск с выводом результатов"""
    print(f"\n🔍 Поиск: '{query}'")

    result = await engine.search(query)
    if result.query_corrected:
        print(f"   Показаны результаты для: '{result.corrected_query}'")
    print(f"   Найдено: {result.total} статей за {result.took_ms}ms")

    for i, item in enumerate(result.items, 1):
        print(f"   {i}. {item.title_highlighted} | Скор: {item.score}")
        for snippet in item.snippets:
            print(f"      {snippet}")


async def main():
    """Главная функция"""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    engine = SearchEngine(DemoIndex(DEMO_ARTICLES), DemoRepository(DEMO_ARTICLES))

    print("=" * 60)
    print("🚀 Демонстрация морфологического поиска")
    print("=" * 60)

    await run_search(engine, "документы по расходам")
    await run_search(engine, "расходов")
    await run_search(engine, "ghbdtn")          # "привет" в английской раскладке
    await run_search(engine, "отпуска")
    await run_search(engine, "по и в")          # только стоп-слова

    print("\n" + "=" * 60)
    print("✓ Готово")
    print("=" * 60)


if __name__ == "__main__":
    asyncio.run(main())
