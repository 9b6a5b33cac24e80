"""
Исключения сервиса поиска
"""


class SearchError(Exception):
    """Базовая ошибка поиска"""
    pass


class IndexUnavailableError(SearchError):
    """Полнотекстовый индекс недоступен"""
    pass
