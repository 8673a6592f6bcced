"""
Модуль обхода страниц в ширину (очередь URL и дедупликация)
"""

from collections import deque
from typing import Deque, Optional
from urllib.parse import urljoin

from wikisearch.config import CRAWL_CONFIG
from wikisearch.fetcher import FetchError, ParsedPage, PageFetcher
from wikisearch.utils import logger


class WikiCrawler:
    """Класс краулера: FIFO очередь URL, загрузка и индексация страниц"""

    def __init__(self, source: str, index, fetcher: Optional[PageFetcher] = None):
        # откуда начали обход
        self.source = source
        self.index = index
        self.fetcher = fetcher or PageFetcher()
        self.home_domain = CRAWL_CONFIG['home_domain']
        self.site_root = CRAWL_CONFIG['site_root']
        self.link_prefix = CRAWL_CONFIG['link_prefix']

        # очередь URL для индексации, дубликаты допускаются
        self._queue: Deque[str] = deque([source])

        logger.info(f"WikiCrawler initialized with source {source}")

    def enqueue(self, url: str):
        """Добавление URL в конец очереди (без проверки на дубликаты)"""
        self._queue.append(url)

    def queue_size(self) -> int:
        """Количество URL в очереди"""
        return len(self._queue)

    def crawl(self, testing: bool = False) -> Optional[str]:
        """
        Берет URL из очереди и индексирует его.
        Возвращает URL, либо None, если страница пропущена.
        FetchError пробрасывается вызывающему коду.
        """
        if not self._queue:
            logger.warning("Crawl queue is empty")
            return None

        url = self._queue.popleft()

        # В режиме тестирования уже проиндексированные страницы обрабатываются заново
        if not testing and self.index.is_indexed(url):
            logger.debug(f"Already indexed, skipping: {url}")
            return None

        if testing:
            page = self.fetcher.read_cached(url)
        else:
            page = self.fetcher.fetch(url)

        if page is None:
            logger.warning(f"Empty fetch, skipping: {url}")
            return None

        self.index.index_page(url, page)

        if self.home_domain in url:
            self.queue_internal_links(page)

        logger.info(f"Indexed: {url} ({self.queue_size()} in queue)")
        return url

    def queue_internal_links(self, page: ParsedPage):
        """
        Добавление ссылок из абзацев страницы в очередь.
        Относительные ссылки сайта (/wiki/...) разрешаются от корня сайта,
        прочие абсолютные ссылки добавляются, только если ведут на другой домен.
        """
        for href in page.hrefs():
            if href.startswith(self.link_prefix):
                self.enqueue(urljoin(self.site_root, href))
                continue

            url = urljoin(page.url, href)
            if url and self.home_domain not in url:
                self.enqueue(url)

    def crawl_until(self, max_pages: int, testing: bool = False) -> int:
        """
        Основной цикл обхода: до max_pages проиндексированных страниц
        или до опустошения очереди. Возвращает число проиндексированных страниц.
        """
        pages_indexed = 0
        failures = 0

        while self._queue and pages_indexed < max_pages:
            try:
                result = self.crawl(testing)
            except FetchError as e:
                failures += 1
                logger.error(f"Fetch failed: {e}")
                continue

            if result is not None:
                pages_indexed += 1

                # Логирование прогресса
                if pages_indexed % CRAWL_CONFIG['progress_every'] == 0:
                    logger.info(f"Progress: {pages_indexed} pages indexed, {self.queue_size()} in queue")

        logger.info(f"Crawling completed. Pages indexed: {pages_indexed}, failures: {failures}")
        return pages_indexed
