"""
Модуль поиска: булевы операции над картами релевантности и ранжирование TF-IDF
"""

import math
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from wikisearch.config import SEARCH_CONFIG
from wikisearch.utils import logger

RelevanceMap = Dict[str, float]
RankedResult = List[Tuple[str, float]]
Lookup = Callable[[str], RelevanceMap]

# Операторы в порядке приоритета проверки
OPERATORS = (' or ', ' and ', ' minus ')


def union(a: RelevanceMap, b: RelevanceMap) -> RelevanceMap:
    """OR: все ключи обеих карт, релевантности складываются"""
    result = dict(b)
    for url, relevance in a.items():
        result[url] = relevance + b.get(url, 0.0)
    return result


def intersection(a: RelevanceMap, b: RelevanceMap) -> RelevanceMap:
    """AND: только общие ключи, релевантность - сумма"""
    return {url: relevance + b[url] for url, relevance in a.items() if url in b}


def difference(a: RelevanceMap, b: RelevanceMap) -> RelevanceMap:
    """MINUS: ключи a, которых нет в b, значения без изменений"""
    return {url: relevance for url, relevance in a.items() if url not in b}


COMBINATORS = {
    'or': union,
    'and': intersection,
    'minus': difference,
}


@dataclass
class Query:
    """
    Разобранный запрос: либо один бинарный оператор над двумя операндами,
    либо список слов без оператора.
    """
    text: str
    operator: Optional[str] = None
    left: str = ''
    right: str = ''
    words: Tuple[str, ...] = ()


def parse_query(text: str) -> Query:
    """
    Лексический разбор: первый найденный оператор (в порядке OPERATORS)
    делит строку по первому вхождению. Вложенности и скобок нет.
    """
    for separator in OPERATORS:
        position = text.find(separator)
        if position != -1:
            return Query(
                text=text,
                operator=separator.strip(),
                left=text[:position],
                right=text[position + len(separator):],
            )

    words = tuple(word for word in text.split(' ') if word)
    return Query(text=text, words=words)


def evaluate(text: str, lookup: Lookup) -> RelevanceMap:
    """
    Вычисление запроса. Полная строка запроса всегда ищется целиком
    и объединяется с результатом разбора.
    """
    if not text.strip():
        return {}

    query = parse_query(text)
    result = lookup(query.text)

    if query.operator:
        combine = COMBINATORS[query.operator]
        return union(result, combine(lookup(query.left), lookup(query.right)))

    found = [lookup(word) for word in query.words]
    if not found:
        return result

    intersect = found[0]
    combined = found[0]
    for relevance in found[1:]:
        intersect = intersection(intersect, relevance)
        combined = union(combined, relevance)

    return union(union(result, intersect), combined)


def calculate_idf(term_pages: int, total_pages: float) -> float:
    """IDF для всего набора результатов"""
    return abs(math.log(total_pages / term_pages) + 1.0)


def rank(relevance: RelevanceMap, total_pages: float) -> RankedResult:
    """
    Умножение всех оценок на общий IDF и сортировка по возрастанию
    (лучшие результаты в конце списка). Пустая карта дает пустой результат.
    """
    term_pages = len(relevance)
    if term_pages == 0:
        return []

    idf = calculate_idf(term_pages, total_pages)

    # При равенстве оценок порядок определяется URL
    return sorted(
        ((url, score * idf) for url, score in relevance.items()),
        key=lambda item: (item[1], item[0]),
    )


class SearchEngine:
    """Класс поиска по индексу"""

    def __init__(self, index, total_pages: Optional[float] = None):
        self.index = index
        if total_pages is None:
            total_pages = SEARCH_CONFIG['total_pages']
        self.total_pages = total_pages
        self.results_limit = SEARCH_CONFIG['results_limit']

    def search(self, query: str, full_result: bool = False) -> RankedResult:
        """
        Основной метод поиска: результаты от лучшего к худшему
        """
        query = query.strip().lower()
        logger.info(f"Searching for: '{query}'")

        relevance = evaluate(query, self.index.get_counts)
        ranked = rank(relevance, self.total_pages)
        ranked.reverse()

        if not full_result:
            ranked = ranked[:self.results_limit]

        logger.info(f"Found {len(relevance)} results for query: '{query}'")
        return ranked
