"""
Persistent cache with TTL support for search results.
Uses SQLite so cached lookups survive restarts.
"""
import time
import hashlib
import re
import sqlite3
import json
import threading
from pathlib import Path
from typing import Optional, List
from dataclasses import dataclass
from config import Config
from utils.logger import app_logger


@dataclass
class CacheEntry:
    """Cache entry holding the raw result dictionaries of one lookup."""
    search_type: str
    query: str
    results: List[dict]
    created_at: float
    expires_at: float


class SearchCache:
    """
    Persistent SQLite-backed cache for search results with automatic TTL.
    """

    def __init__(self, max_size: int = 500, db_path: Optional[str] = None, ttl: Optional[int] = None):
        """
        Initialize search cache with SQLite persistence.

        Args:
            max_size: Maximum number of cached searches (default 500)
            db_path: Path to SQLite database file (default: Config.SEARCH_CACHE_PATH)
            ttl: Lifetime of an entry in seconds (default: Config.SEARCH_CACHE_TTL)
        """
        self._max_size = max_size
        self._ttl = ttl if ttl is not None else Config.SEARCH_CACHE_TTL

        if db_path is None:
            db_path = Config.SEARCH_CACHE_PATH

        if db_path != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)

        self._db_path = db_path
        self._local = threading.local()
        self._init_db()

        # Clean up expired entries on startup
        self._evict_expired()

        app_logger.info(f"Search cache initialized with SQLite: {self._db_path}")

    def _get_conn(self) -> sqlite3.Connection:
        """Get thread-local database connection."""
        if not hasattr(self._local, 'conn'):
            self._local.conn = sqlite3.connect(self._db_path, check_same_thread=False)
            self._local.conn.row_factory = sqlite3.Row
        return self._local.conn

    def _init_db(self) -> None:
        """Initialize database schema."""
        conn = self._get_conn()
        cursor = conn.cursor()

        cursor.execute("PRAGMA busy_timeout=5000")

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS search_cache (
                cache_key TEXT PRIMARY KEY,
                search_type TEXT NOT NULL,
                query TEXT NOT NULL,
                results TEXT NOT NULL,
                created_at REAL NOT NULL,
                expires_at REAL NOT NULL
            )
        """)

        cursor.execute("""
            CREATE INDEX IF NOT EXISTS idx_search_cache_expires
            ON search_cache(expires_at)
        """)

        conn.commit()

    @staticmethod
    def _normalize_query(query: str) -> str:
        """Lowercase and collapse whitespace for consistent caching."""
        return re.sub(r'\s+', ' ', query).strip().lower()

    def _make_key(self, search_type: str, query: str) -> str:
        """Create cache key from search type and normalized query."""
        query_hash = hashlib.md5(self._normalize_query(query).encode()).hexdigest()[:16]
        return f"{search_type}:{query_hash}"

    @staticmethod
    def _deserialize_entry(row: sqlite3.Row) -> CacheEntry:
        """Deserialize cache entry from database row."""
        return CacheEntry(
            search_type=row['search_type'],
            query=row['query'],
            results=json.loads(row['results']),
            created_at=row['created_at'],
            expires_at=row['expires_at']
        )

    def _evict_expired(self) -> None:
        """Remove expired entries from database."""
        now = time.time()
        conn = self._get_conn()
        cursor = conn.cursor()

        cursor.execute("DELETE FROM search_cache WHERE expires_at < ?", (now,))
        if cursor.rowcount > 0:
            app_logger.debug(f"Cache: evicted {cursor.rowcount} expired entries")
        conn.commit()

    def _evict_oldest(self) -> None:
        """Evict oldest entries if cache is full."""
        conn = self._get_conn()
        cursor = conn.cursor()

        cursor.execute("SELECT COUNT(*) FROM search_cache")
        current_count = cursor.fetchone()[0]

        if current_count >= self._max_size:
            # Remove 10% oldest entries
            to_remove = max(1, self._max_size // 10)
            cursor.execute("""
                DELETE FROM search_cache
                WHERE cache_key IN (
                    SELECT cache_key FROM search_cache
                    ORDER BY created_at ASC
                    LIMIT ?
                )
            """, (to_remove,))
            conn.commit()
            app_logger.debug(f"Cache: evicted {to_remove} oldest entries")

    def get(self, search_type: str, query: str) -> Optional[List[dict]]:
        """
        Get cached search results.

        Args:
            search_type: Type of search (web, youtube, images)
            query: Search query

        Returns:
            List of result dictionaries or None if not cached/expired
        """
        conn = self._get_conn()
        cursor = conn.cursor()

        cursor.execute("""
            SELECT * FROM search_cache
            WHERE cache_key = ? AND expires_at >= ?
        """, (self._make_key(search_type, query), time.time()))

        row = cursor.fetchone()
        if row:
            entry = self._deserialize_entry(row)
            app_logger.info(f"Cache HIT: {search_type} | '{query[:50]}'")
            return entry.results

        app_logger.debug(f"Cache MISS: {search_type} | '{query[:50]}'")
        return None

    def set(self, search_type: str, query: str, results: List[dict]) -> None:
        """
        Cache search results for the configured TTL.

        Args:
            search_type: Type of search
            query: Search query
            results: Result dictionaries as returned by the search provider
        """
        self._evict_oldest()
        created_at = time.time()
        expires_at = created_at + self._ttl

        conn = self._get_conn()
        cursor = conn.cursor()

        cursor.execute("""
            INSERT OR REPLACE INTO search_cache
            (cache_key, search_type, query, results, created_at, expires_at)
            VALUES (?, ?, ?, ?, ?, ?)
        """, (
            self._make_key(search_type, query),
            search_type,
            self._normalize_query(query),
            json.dumps(results),
            created_at,
            expires_at
        ))

        conn.commit()

        app_logger.info(
            f"Cache SET: {search_type} | '{query[:50]}' | "
            f"{len(results)} results (TTL: {self._ttl/60:.0f}min)"
        )

    def count(self) -> int:
        """Number of live (unexpired) entries."""
        cursor = self._get_conn().cursor()
        cursor.execute("SELECT COUNT(*) FROM search_cache WHERE expires_at >= ?", (time.time(),))
        return cursor.fetchone()[0]

    def clear(self) -> None:
        """Clear all cache entries."""
        conn = self._get_conn()
        cursor = conn.cursor()

        cursor.execute("DELETE FROM search_cache")
        conn.commit()

        app_logger.info(f"Cache cleared: {cursor.rowcount} entries removed")


_search_cache: Optional[SearchCache] = None


def get_search_cache() -> SearchCache:
    """Get the global search cache instance, creating it on first use."""
    global _search_cache
    if _search_cache is None:
        _search_cache = SearchCache(max_size=Config.SEARCH_CACHE_MAX_SIZE)
    return _search_cache
