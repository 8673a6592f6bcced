"""
Модуль загрузки и разбора страниц
"""

import os
from dataclasses import dataclass, field
from typing import Iterator, List, Optional

import requests
from bs4 import BeautifulSoup
from bs4.element import Tag

from wikisearch.config import PARSER_CONFIG
from wikisearch.utils import url_to_filename, logger


class FetchError(Exception):
    """Ошибка загрузки или чтения страницы"""

    def __init__(self, url: str, message: str):
        super().__init__(f"{url}: {message}")
        self.url = url


@dataclass
class ParsedPage:
    """Разобранная страница: заголовок и абзацы основного текста"""
    url: str
    title: str
    paragraphs: List[Tag] = field(default_factory=list)

    def text(self) -> str:
        return ' '.join(p.get_text(separator=' ', strip=True) for p in self.paragraphs)

    def hrefs(self) -> Iterator[str]:
        """Значения href всех ссылок в абзацах, в порядке документа"""
        for paragraph in self.paragraphs:
            for anchor in paragraph.find_all('a', href=True):
                yield anchor['href']


class PageFetcher:
    """Класс для загрузки страниц из сети или из локального кэша"""

    def __init__(self, cache_dir: Optional[str] = None):
        self.session = requests.Session()
        self.session.headers.update({'User-Agent': PARSER_CONFIG['user_agent']})
        self.cache_dir = cache_dir or PARSER_CONFIG['cache_dir']
        self.max_content_length = PARSER_CONFIG['max_content_length']
        self.selector = PARSER_CONFIG['content_selector']

    def parse(self, url: str, html: str) -> Optional[ParsedPage]:
        """
        Разбор HTML: возвращает ParsedPage или None, если абзацев нет
        """
        soup = BeautifulSoup(html, 'html.parser')

        title_tag = soup.find('title')
        title = title_tag.get_text(strip=True) if title_tag else "No title"

        paragraphs = soup.select(self.selector)
        if not paragraphs:
            paragraphs = soup.find_all('p')

        if not paragraphs:
            logger.warning(f"No paragraphs found in {url}")
            return None

        return ParsedPage(url=url, title=title, paragraphs=paragraphs)

    def fetch(self, url: str) -> Optional[ParsedPage]:
        """
        Загрузка страницы из сети (результат также сохраняется в кэш)
        """
        try:
            logger.info(f"Fetching: {url}")

            response = self.session.get(url, timeout=PARSER_CONFIG['timeout'])
            response.raise_for_status()

        except requests.RequestException as e:
            logger.error(f"Error downloading {url}: {e}")
            raise FetchError(url, str(e)) from e

        # Проверка размера контента
        if len(response.content) > self.max_content_length:
            logger.warning(f"Content too large for {url}, skipping")
            return None

        # Проверка типа контента
        content_type = response.headers.get('content-type', '')
        if 'text/html' not in content_type:
            logger.warning(f"Non-HTML content for {url}: {content_type}")
            return None

        try:
            self.cache_page(url, response.text)
        except OSError as e:
            logger.warning(f"Could not cache {url}: {e}")

        return self.parse(url, response.text)

    def read_cached(self, url: str) -> Optional[ParsedPage]:
        """
        Чтение страницы из локального кэша (режим тестирования)
        """
        path = self._cache_path(url)
        if not os.path.exists(path):
            logger.warning(f"No cached copy of {url}")
            return None

        try:
            with open(path, 'r', encoding='utf-8') as f:
                html = f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Error reading cached copy of {url}: {e}")
            raise FetchError(url, str(e)) from e

        return self.parse(url, html)

    def cache_page(self, url: str, html: str):
        """Сохранение HTML страницы в кэш"""
        os.makedirs(self.cache_dir, exist_ok=True)
        with open(self._cache_path(url), 'w', encoding='utf-8') as f:
            f.write(html)
        logger.debug(f"Cached: {url}")

    def _cache_path(self, url: str) -> str:
        return os.path.join(self.cache_dir, url_to_filename(url))
