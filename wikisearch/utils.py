"""
Вспомогательные функции
"""

import re
import hashlib
from typing import List
import logging

# Настройка логирования
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger('wikisearch')


def url_to_filename(url: str) -> str:
    """
    Имя файла кэша для URL
    """
    url_hash = hashlib.md5(url.encode('utf-8')).hexdigest()
    return f"{url_hash}.html"


def clean_text(text: str) -> str:
    """
    Очистка текста от лишних символов и приведение к нижнему регистру
    """
    # Удаление специальных символов
    text = re.sub(r'[^\w\s]', ' ', text)

    # Замена множественных пробелов на один
    text = re.sub(r'\s+', ' ', text)

    return text.strip().lower()


def tokenize(text: str) -> List[str]:
    """
    Токенизация текста (без стоп-слов: "and", "or" и т.п. тоже индексируются)
    """
    return clean_text(text).split()


def generate_snippet(text: str, query_terms: List[str], max_length: int = 140) -> str:
    """
    Генерация сниппета вокруг первого найденного термина запроса
    """
    if not text:
        return ""

    lowered = text.lower()

    # Находим позицию первого термина
    positions = [lowered.find(term.lower()) for term in query_terms if term]
    positions = [pos for pos in positions if pos != -1]

    if not positions:
        # Если термины не найдены, берем начало текста
        return text[:max_length] + "..." if len(text) > max_length else text

    first_pos = min(positions)

    # Выделяем контекст вокруг первого термина
    start = max(0, first_pos - max_length // 2)
    end = min(len(text), start + max_length)

    snippet = text[start:end]

    # Добавляем многоточия если нужно
    if start > 0:
        snippet = "..." + snippet
    if end < len(text):
        snippet = snippet + "..."

    return snippet
