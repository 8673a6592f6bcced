"""
Конфигурация краулера и поискового движка
"""

import os

# Конфигурация загрузчика страниц
PARSER_CONFIG = {
    'user_agent': 'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36',
    'timeout': 10,
    'max_content_length': 5000000,  # Максимальный размер страницы в байтах
    'cache_dir': os.path.join(os.path.dirname(os.path.abspath(__file__)), 'resources'),
    'content_selector': '#mw-content-text p',
}

# Конфигурация обхода
CRAWL_CONFIG = {
    'source_url': 'https://en.wikipedia.org/wiki/Java_(programming_language)',
    'home_domain': 'https://en.wikipedia.org/',
    'site_root': 'https://en.wikipedia.org/',
    'link_prefix': '/wiki/',
    'max_pages': 1000,
    'progress_every': 100,  # Как часто логировать прогресс (в страницах)
}

# Конфигурация базы данных
DATABASE_CONFIG = {
    'db_name': os.getenv('WIKISEARCH_DB', 'wikisearch.db'),
}

# Конфигурация поиска
SEARCH_CONFIG = {
    'total_pages': 10000,  # Размер корпуса для расчета IDF
    'results_limit': 20,
    'snippet_length': 140,
}
