import logging
import sqlite3
from typing import Optional

from locallibrary.config import settings

logger = logging.getLogger(__name__)

# Default database file. LIBRARY_DB_FILE (via settings) overrides it; callers
# such as tests pass an explicit path instead.
DATABASE_FILE = settings.database_file

# Largest value an SQLite INTEGER column holds; record ids are in 1..MAX_ROW_ID
MAX_ROW_ID = 2**63 - 1


def get_db_connection(db_file: Optional[str] = None) -> sqlite3.Connection:
    """Open a connection to the SQLite database with dict-like rows."""
    conn = sqlite3.connect(db_file or DATABASE_FILE)
    conn.row_factory = sqlite3.Row
    return conn


def create_tables(db_file: Optional[str] = None) -> None:
    """Create the catalog tables if they do not exist yet."""
    conn = get_db_connection(db_file)
    try:
        cursor = conn.cursor()
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS authors (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                first_name TEXT NOT NULL,
                family_name TEXT NOT NULL,
                date_of_birth TEXT,
                date_of_death TEXT
            )
        """)

        # Genre names are unique by convention only (checked before insert).
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS genres (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL
            )
        """)

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS books (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                title TEXT NOT NULL,
                author_id INTEGER NOT NULL,
                summary TEXT NOT NULL,
                isbn TEXT NOT NULL
            )
        """)

        # Book-Genre links, owned by the book
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS book_genres (
                book_id INTEGER NOT NULL,
                genre_id INTEGER NOT NULL,
                PRIMARY KEY (book_id, genre_id)
            )
        """)

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS bookinstances (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                book_id INTEGER NOT NULL,
                imprint TEXT NOT NULL,
                status TEXT NOT NULL DEFAULT 'Maintenance'
                    CHECK(status IN ('Available', 'Maintenance', 'Loaned', 'Reserved')),
                due_back TEXT
            )
        """)

        cursor.execute("CREATE INDEX IF NOT EXISTS idx_authors_family_name ON authors(family_name)")
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_genres_name ON genres(name)")
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_books_title ON books(title)")
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_books_author_id ON books(author_id)")
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_book_genres_genre_id ON book_genres(genre_id)")
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_bookinstances_book_id ON bookinstances(book_id)")
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_bookinstances_status ON bookinstances(status)")

        conn.commit()
    finally:
        conn.close()


def initialize_database(db_file: Optional[str] = None) -> None:
    """Initialize the database, creating tables when needed."""
    create_tables(db_file)
    logger.debug(f"Database ready at {db_file or DATABASE_FILE}")
