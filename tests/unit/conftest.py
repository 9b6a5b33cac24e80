"""Unit test configuration - fixtures with in-memory collaborators"""

from typing import List

import pytest

from morphsearch.core.models import Document

from .fakes import InMemoryIndex, InMemoryRepository


@pytest.fixture
def documents() -> List[Document]:
    return [
        Document(
            id="d1",
            title="Документы по расходам",
            body="Сводные документы по расходам за год.",
            metadata={"category": "finance"},
        ),
        Document(
            id="d2",
            title="Отчёт",
            body="Бухгалтер предоставил документ о расходах.",
            metadata={"category": "reports"},
        ),
        Document(
            id="d3",
            title="Погода",
            body="Солнечно.",
            metadata={"category": "misc"},
        ),
    ]


@pytest.fixture
def index(documents) -> InMemoryIndex:
    return InMemoryIndex(documents)


@pytest.fixture
def repository(documents) -> InMemoryRepository:
    return InMemoryRepository(documents)
