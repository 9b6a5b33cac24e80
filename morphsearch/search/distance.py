"""
Расстояние Левенштейна
"""
from typing import Union

from .text_utils import to_text


def levenshtein(s1: Union[str, bytes], s2: Union[str, bytes]) -> int:
    """
    Расстояние Левенштейна между двумя строками

    Считается по символам Unicode, а не по байтам: кириллица,
    латиница и любые другие символы весят одинаково.
    Вставка, удаление и замена стоят 1.
    """
    s1 = to_text(s1)
    s2 = to_text(s2)

    if len(s1) < len(s2):
        s1, s2 = s2, s1

    if len(s2) == 0:
        return len(s1)

    previous_row = list(range(len(s2) + 1))

    for i, c1 in enumerate(s1):
        current_row = [i + 1]
        for j, c2 in enumerate(s2):
            insertions = previous_row[j + 1] + 1
            deletions = current_row[j] + 1
            substitutions = previous_row[j] + (c1 != c2)
            current_row.append(min(insertions, deletions, substitutions))
        previous_row = current_row

    return previous_row[-1]
