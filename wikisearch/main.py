"""
Главный файл для запуска краулера и поиска
"""

import argparse
from typing import Optional

from wikisearch.config import CRAWL_CONFIG, SEARCH_CONFIG
from wikisearch.crawler import WikiCrawler
from wikisearch.database import Database
from wikisearch.fetcher import FetchError, PageFetcher
from wikisearch.search_engine import SearchEngine, RankedResult
from wikisearch.utils import generate_snippet, tokenize, logger


class SearchApp:
    """Главный класс приложения"""

    def __init__(self, db_name: Optional[str] = None):
        self.db = Database(db_name)
        self.fetcher = PageFetcher()
        self.search_engine = SearchEngine(self.db)

        logger.info("Search application initialized")

    def crawl(self, source: str, max_pages: int, testing: bool = False) -> int:
        """Обход страниц, начиная с source"""
        crawler = WikiCrawler(source, self.db, self.fetcher)

        # Заранее заполняем очередь ссылками со стартовой страницы
        page = self.fetcher.read_cached(source) if testing else self.fetcher.fetch(source)
        if page is not None:
            crawler.queue_internal_links(page)

        logger.info(f"Starting crawl from {source} ({crawler.queue_size()} URLs in queue)")
        count = crawler.crawl_until(max_pages, testing)

        print("\n=== Crawling Statistics ===")
        print(f"pages_indexed: {count}")
        print(f"urls_to_visit: {crawler.queue_size()}")
        print(f"total_documents: {self.db.get_total_documents()}")
        return count

    def search(self, query: str, full_result: bool = False) -> RankedResult:
        return self.search_engine.search(query, full_result)

    def print_results(self, query: str, full_result: bool = False):
        """
        Поиск и вывод результатов (от лучшего к худшему)
        """
        results = self.search(query, full_result)

        print(f"\nQuery: {query.strip().lower()}")
        if not results:
            print("No results found. Try different search terms.")
            return

        terms = tokenize(query)
        for i, (url, score) in enumerate(results, 1):
            info = self.db.get_document_info(url)
            title = info[1] if info else "Unknown"
            content = self.db.get_document_content(url) or ""
            snippet = generate_snippet(content, terms, SEARCH_CONFIG['snippet_length'])

            print(f"\n{i}. {title}")
            print(f"   {url}")
            print(f"   Score: {score:.4f}")
            print(f"   {snippet}")

    def interactive_search(self, full_result: bool = False):
        """Интерактивный режим поиска"""
        if self.db.get_total_documents() == 0:
            print("No documents in database. Please crawl first.")
            return

        print("Enter a search term (empty line or Ctrl-D to exit): ")
        while True:
            try:
                query = input("> ")
            except EOFError:
                break

            if not query.strip():
                break

            self.print_results(query, full_result)

    def show_statistics(self):
        """Показать статистику базы данных"""
        print("\n=== Database Statistics ===")
        print(f"Total documents: {self.db.get_total_documents()}")

    def cleanup(self):
        """Очистка ресурсов"""
        self.db.close()
        logger.info("Application cleanup completed")


def main(argv=None):
    """Основная функция"""
    parser = argparse.ArgumentParser(description='Wiki crawler and boolean search')
    parser.add_argument('--db', type=str, help='SQLite database file')
    parser.add_argument('--crawl', action='store_true', help='Crawl pages breadth-first')
    parser.add_argument('--source', type=str, default=CRAWL_CONFIG['source_url'],
                        help='Source URL for crawling')
    parser.add_argument('--max-pages', type=int, default=CRAWL_CONFIG['max_pages'],
                        help='Number of pages to index')
    parser.add_argument('--testing', action='store_true',
                        help='Read pages from the local cache and re-index already indexed pages')
    parser.add_argument('--search', type=str, help='Search query (supports "or", "and", "minus")')
    parser.add_argument('--full', action='store_true',
                        help=f"Show all results instead of the top {SEARCH_CONFIG['results_limit']}")
    parser.add_argument('--interactive', action='store_true', help='Start interactive mode')
    parser.add_argument('--stats', action='store_true', help='Show database statistics')
    parser.add_argument('--clear', action='store_true', help='Clear the index')

    args = parser.parse_args(argv)

    app = SearchApp(args.db)

    try:
        if args.clear:
            app.db.clear_database()

        if args.crawl:
            app.crawl(args.source, args.max_pages, args.testing)

        if args.search:
            app.print_results(args.search, args.full)

        if args.interactive:
            app.interactive_search(args.full)

        if args.stats:
            app.show_statistics()

        if not any([args.clear, args.crawl, args.search, args.interactive, args.stats]):
            parser.print_help()

    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
    except FetchError as e:
        logger.error(f"Could not fetch source page: {e}")
        return 1
    except Exception as e:
        logger.error(f"Application error: {e}")
        raise
    finally:
        app.cleanup()

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
