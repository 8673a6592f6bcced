"""
Модуль для работы с базой данных (хранилище индекса)
"""

import sqlite3
from collections import Counter
from typing import Dict, Optional, Tuple

from wikisearch.config import DATABASE_CONFIG
from wikisearch.fetcher import ParsedPage
from wikisearch.utils import tokenize, logger


class Database:
    """Класс для работы с базой данных: счетчики терминов по страницам"""

    def __init__(self, db_name: Optional[str] = None):
        self.db_name = db_name or DATABASE_CONFIG['db_name']
        self.conn = None
        self.cursor = None
        self._initialize_database()

    def _initialize_database(self):
        """Инициализация базы данных и создание таблиц"""
        try:
            self.conn = sqlite3.connect(self.db_name)
            self.cursor = self.conn.cursor()

            # Таблица документов
            self.cursor.execute('''
                CREATE TABLE IF NOT EXISTS documents (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    url TEXT UNIQUE NOT NULL,
                    title TEXT,
                    content TEXT,
                    content_length INTEGER,
                    indexed_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            ''')

            # Счетчики терминов (обратный индекс)
            self.cursor.execute('''
                CREATE TABLE IF NOT EXISTS term_counts (
                    term TEXT NOT NULL,
                    doc_id INTEGER NOT NULL,
                    count INTEGER DEFAULT 0,
                    PRIMARY KEY (term, doc_id),
                    FOREIGN KEY (doc_id) REFERENCES documents (id)
                )
            ''')

            self.conn.commit()
            logger.info("Database initialized successfully")

        except sqlite3.Error as e:
            logger.error(f"Database initialization error: {e}")
            if self.conn:
                self.conn.rollback()
            raise

    def is_indexed(self, url: str) -> bool:
        """Проверка, проиндексирована ли страница"""
        try:
            self.cursor.execute('SELECT 1 FROM documents WHERE url = ?', (url,))
            return self.cursor.fetchone() is not None
        except sqlite3.Error as e:
            logger.error(f"Error checking whether {url} is indexed: {e}")
            return False

    def index_page(self, url: str, page: ParsedPage):
        """
        Индексация страницы: подсчет терминов по всем абзацам.
        Повторная индексация заменяет старые счетчики.
        """
        content = page.text()
        term_counts = Counter(tokenize(content))

        try:
            self.cursor.execute('''
                INSERT OR IGNORE INTO documents (url, title, content, content_length)
                VALUES (?, ?, ?, ?)
            ''', (url, page.title, content, len(content)))

            self.cursor.execute('SELECT id FROM documents WHERE url = ?', (url,))
            doc_id = self.cursor.fetchone()[0]

            # Обновляем title и content если документ уже существует
            self.cursor.execute('''
                UPDATE documents
                SET title = ?, content = ?, content_length = ?, indexed_at = CURRENT_TIMESTAMP
                WHERE id = ?
            ''', (page.title, content, len(content), doc_id))

            self.cursor.execute('DELETE FROM term_counts WHERE doc_id = ?', (doc_id,))
            self.cursor.executemany(
                'INSERT INTO term_counts (term, doc_id, count) VALUES (?, ?, ?)',
                [(term, doc_id, count) for term, count in term_counts.items()]
            )

            self.conn.commit()
            logger.debug(f"Indexed: {url} (ID: {doc_id}, Terms: {len(term_counts)})")

        except sqlite3.Error as e:
            logger.error(f"Error indexing page {url}: {e}")
            self.conn.rollback()
            raise

    def get_counts(self, term: str) -> Dict[str, float]:
        """Отображение URL -> количество вхождений термина"""
        try:
            self.cursor.execute('''
                SELECT d.url, tc.count
                FROM term_counts tc
                JOIN documents d ON tc.doc_id = d.id
                WHERE tc.term = ?
            ''', (term,))
            return {url: float(count) for url, count in self.cursor.fetchall()}

        except sqlite3.Error as e:
            logger.error(f"Error getting counts for term {term}: {e}")
            return {}

    def get_count(self, url: str, term: str) -> int:
        """Количество вхождений термина на странице"""
        try:
            self.cursor.execute('''
                SELECT tc.count
                FROM term_counts tc
                JOIN documents d ON tc.doc_id = d.id
                WHERE d.url = ? AND tc.term = ?
            ''', (url, term))
            result = self.cursor.fetchone()
            return result[0] if result else 0
        except sqlite3.Error as e:
            logger.error(f"Error getting count of {term} for {url}: {e}")
            return 0

    def get_total_documents(self) -> int:
        """Получение общего количества документов"""
        try:
            self.cursor.execute('SELECT COUNT(*) FROM documents')
            result = self.cursor.fetchone()
            return result[0] if result else 0
        except sqlite3.Error as e:
            logger.error(f"Error getting total documents count: {e}")
            return 0

    def get_document_info(self, url: str) -> Optional[Tuple[int, str]]:
        """Получение (id, title) документа"""
        try:
            self.cursor.execute('SELECT id, title FROM documents WHERE url = ?', (url,))
            return self.cursor.fetchone()
        except sqlite3.Error as e:
            logger.error(f"Error getting document info for {url}: {e}")
            return None

    def get_document_content(self, url: str) -> Optional[str]:
        """Получение содержимого документа по URL"""
        try:
            self.cursor.execute('SELECT content FROM documents WHERE url = ?', (url,))
            result = self.cursor.fetchone()
            return result[0] if result else None
        except sqlite3.Error as e:
            logger.error(f"Error getting document content for {url}: {e}")
            return None

    def clear_database(self):
        """Очистка базы данных"""
        try:
            for table in ['term_counts', 'documents']:
                self.cursor.execute(f'DELETE FROM {table}')

            self.cursor.execute("DELETE FROM sqlite_sequence WHERE name = 'documents'")
            self.conn.commit()
            logger.info("Database cleared successfully")

        except sqlite3.Error as e:
            logger.error(f"Error clearing database: {e}")
            self.conn.rollback()

    def close(self):
        """Закрытие соединения с базой данных"""
        if self.conn:
            self.conn.close()
            self.conn = None
            logger.info("Database connection closed")

    def __del__(self):
        """Деструктор"""
        self.close()
