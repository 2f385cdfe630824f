import logging
from typing import Dict, List, Optional

from locallibrary import database
from locallibrary.author import Author
from locallibrary.book import Book
from locallibrary.bookinstance import BookInstance, BookStatus
from locallibrary.database import get_db_connection, initialize_database
from locallibrary.genre import Genre

logger = logging.getLogger(__name__)


class Catalog:
    """Manages the library records and their persistence.

    Every operation opens its own connection. Referenced records (a book's
    author and genres, a copy's book) are resolved on read, which is what the
    views call "population".
    """

    def __init__(self, db_file: Optional[str] = None) -> None:
        self.db_file = db_file or database.DATABASE_FILE
        # Make sure the schema exists on every start
        initialize_database(self.db_file)

    def _connect(self):
        return get_db_connection(self.db_file)

    # ------------------------- Counts ------------------------- #
    def _count(self, table: str, where: str = "", params: tuple = ()) -> int:
        conn = self._connect()
        try:
            cursor = conn.execute(f"SELECT COUNT(*) FROM {table} {where}", params)
            return cursor.fetchone()[0]
        finally:
            conn.close()

    def count_books(self) -> int:
        return self._count("books")

    def count_authors(self) -> int:
        return self._count("authors")

    def count_genres(self) -> int:
        return self._count("genres")

    def count_bookinstances(self, status: Optional[BookStatus] = None) -> int:
        if status is None:
            return self._count("bookinstances")
        return self._count("bookinstances", "WHERE status = ?", (BookStatus(status).value,))

    def get_statistics(self) -> Dict[str, int]:
        """Counts shown on the home page and by the CLI."""
        return {
            "book_count": self.count_books(),
            "book_instance_count": self.count_bookinstances(),
            "book_instance_available_count": self.count_bookinstances(BookStatus.AVAILABLE),
            "author_count": self.count_authors(),
            "genre_count": self.count_genres(),
        }

    # ------------------------- Authors ------------------------- #
    def list_authors(self) -> List[Author]:
        """All authors ordered by family name."""
        conn = self._connect()
        try:
            rows = conn.execute(
                "SELECT * FROM authors ORDER BY family_name, first_name, id"
            ).fetchall()
            return [Author.from_dict(dict(row)) for row in rows]
        finally:
            conn.close()

    def get_author(self, author_id: int) -> Optional[Author]:
        conn = self._connect()
        try:
            row = conn.execute("SELECT * FROM authors WHERE id = ?", (author_id,)).fetchone()
            return Author.from_dict(dict(row)) if row else None
        finally:
            conn.close()

    def create_author(self, author: Author) -> Author:
        data = author.to_dict()
        conn = self._connect()
        try:
            cursor = conn.execute(
                "INSERT INTO authors (first_name, family_name, date_of_birth, date_of_death) VALUES (?, ?, ?, ?)",
                (data["first_name"], data["family_name"], data["date_of_birth"], data["date_of_death"]),
            )
            conn.commit()
            author.id = cursor.lastrowid
        finally:
            conn.close()
        logger.info(f"Author created: id={author.id} name={author.name!r}")
        return author

    def update_author(self, author_id: int, author: Author) -> Optional[Author]:
        """Replace the stored fields of an author. None if it does not exist."""
        data = author.to_dict()
        conn = self._connect()
        try:
            cursor = conn.execute(
                "UPDATE authors SET first_name = ?, family_name = ?, date_of_birth = ?, date_of_death = ? WHERE id = ?",
                (data["first_name"], data["family_name"], data["date_of_birth"], data["date_of_death"], author_id),
            )
            conn.commit()
            if cursor.rowcount == 0:
                return None
        finally:
            conn.close()
        author.id = author_id
        logger.info(f"Author updated: id={author_id}")
        return author

    def delete_author(self, author_id: int) -> bool:
        return self._delete("authors", author_id)

    def books_by_author(self, author_id: int) -> List[Book]:
        """Books written by an author, ordered by title (not populated)."""
        conn = self._connect()
        try:
            rows = conn.execute(
                "SELECT * FROM books WHERE author_id = ? ORDER BY title, id", (author_id,)
            ).fetchall()
            return [Book.from_dict(dict(row)) for row in rows]
        finally:
            conn.close()

    # ------------------------- Genres ------------------------- #
    def list_genres(self) -> List[Genre]:
        """All genres ordered by name."""
        conn = self._connect()
        try:
            rows = conn.execute("SELECT * FROM genres ORDER BY name, id").fetchall()
            return [Genre.from_dict(dict(row)) for row in rows]
        finally:
            conn.close()

    def get_genre(self, genre_id: int) -> Optional[Genre]:
        conn = self._connect()
        try:
            row = conn.execute("SELECT * FROM genres WHERE id = ?", (genre_id,)).fetchone()
            return Genre.from_dict(dict(row)) if row else None
        finally:
            conn.close()

    def find_genre_by_name(self, name: str) -> Optional[Genre]:
        """Case-insensitive lookup used to keep genre names unique."""
        conn = self._connect()
        try:
            row = conn.execute(
                "SELECT * FROM genres WHERE name = ? COLLATE NOCASE ORDER BY id LIMIT 1",
                (name.strip(),),
            ).fetchone()
            return Genre.from_dict(dict(row)) if row else None
        finally:
            conn.close()

    def create_genre(self, genre: Genre) -> Genre:
        conn = self._connect()
        try:
            cursor = conn.execute("INSERT INTO genres (name) VALUES (?)", (genre.name,))
            conn.commit()
            genre.id = cursor.lastrowid
        finally:
            conn.close()
        logger.info(f"Genre created: id={genre.id} name={genre.name!r}")
        return genre

    def update_genre(self, genre_id: int, genre: Genre) -> Optional[Genre]:
        conn = self._connect()
        try:
            cursor = conn.execute("UPDATE genres SET name = ? WHERE id = ?", (genre.name, genre_id))
            conn.commit()
            if cursor.rowcount == 0:
                return None
        finally:
            conn.close()
        genre.id = genre_id
        logger.info(f"Genre updated: id={genre_id}")
        return genre

    def delete_genre(self, genre_id: int) -> bool:
        return self._delete("genres", genre_id)

    def books_by_genre(self, genre_id: int) -> List[Book]:
        conn = self._connect()
        try:
            rows = conn.execute(
                """
                SELECT b.* FROM books b
                JOIN book_genres bg ON bg.book_id = b.id
                WHERE bg.genre_id = ?
                ORDER BY b.title, b.id
                """,
                (genre_id,),
            ).fetchall()
            return [Book.from_dict(dict(row)) for row in rows]
        finally:
            conn.close()

    # ------------------------- Books ------------------------- #
    def list_books(self) -> List[Book]:
        """All books ordered by title, with their author populated."""
        conn = self._connect()
        try:
            rows = conn.execute("SELECT * FROM books ORDER BY title, id").fetchall()
            books = [Book.from_dict(dict(row)) for row in rows]
        finally:
            conn.close()
        authors = {author.id: author for author in self.list_authors()}
        for book in books:
            book.author = authors.get(book.author_id)
        return books

    def get_book(self, book_id: int) -> Optional[Book]:
        """A single book with author and genres populated."""
        conn = self._connect()
        try:
            row = conn.execute("SELECT * FROM books WHERE id = ?", (book_id,)).fetchone()
            if row is None:
                return None
            book = Book.from_dict(dict(row))
            genre_rows = conn.execute(
                """
                SELECT g.* FROM genres g
                JOIN book_genres bg ON bg.genre_id = g.id
                WHERE bg.book_id = ?
                ORDER BY g.name, g.id
                """,
                (book_id,),
            ).fetchall()
        finally:
            conn.close()
        book.genres = [Genre.from_dict(dict(genre_row)) for genre_row in genre_rows]
        book.genre_ids = [genre.id for genre in book.genres]
        book.author = self.get_author(book.author_id)
        return book

    def create_book(self, book: Book) -> Book:
        conn = self._connect()
        try:
            cursor = conn.execute(
                "INSERT INTO books (title, author_id, summary, isbn) VALUES (?, ?, ?, ?)",
                (book.title, book.author_id, book.summary, book.isbn),
            )
            book.id = cursor.lastrowid
            self._write_book_genres(conn, book.id, book.genre_ids)
            conn.commit()
        finally:
            conn.close()
        logger.info(f"Book created: id={book.id} title={book.title!r}")
        return book

    def update_book(self, book_id: int, book: Book) -> Optional[Book]:
        conn = self._connect()
        try:
            cursor = conn.execute(
                "UPDATE books SET title = ?, author_id = ?, summary = ?, isbn = ? WHERE id = ?",
                (book.title, book.author_id, book.summary, book.isbn, book_id),
            )
            if cursor.rowcount == 0:
                return None
            conn.execute("DELETE FROM book_genres WHERE book_id = ?", (book_id,))
            self._write_book_genres(conn, book_id, book.genre_ids)
            conn.commit()
        finally:
            conn.close()
        book.id = book_id
        logger.info(f"Book updated: id={book_id}")
        return book

    def delete_book(self, book_id: int) -> bool:
        conn = self._connect()
        try:
            conn.execute("DELETE FROM book_genres WHERE book_id = ?", (book_id,))
            cursor = conn.execute("DELETE FROM books WHERE id = ?", (book_id,))
            conn.commit()
            deleted = cursor.rowcount > 0
        finally:
            conn.close()
        if deleted:
            logger.info(f"Book deleted: id={book_id}")
        return deleted

    def instances_of_book(self, book_id: int) -> List[BookInstance]:
        conn = self._connect()
        try:
            rows = conn.execute(
                "SELECT * FROM bookinstances WHERE book_id = ? ORDER BY id", (book_id,)
            ).fetchall()
            return [BookInstance.from_dict(dict(row)) for row in rows]
        finally:
            conn.close()

    @staticmethod
    def _write_book_genres(conn, book_id: int, genre_ids: List[int]) -> None:
        conn.executemany(
            "INSERT OR IGNORE INTO book_genres (book_id, genre_id) VALUES (?, ?)",
            [(book_id, genre_id) for genre_id in genre_ids],
        )

    # ------------------------- Book instances ------------------------- #
    def list_bookinstances(self) -> List[BookInstance]:
        """All copies with their book populated."""
        conn = self._connect()
        try:
            rows = conn.execute("SELECT * FROM bookinstances ORDER BY id").fetchall()
            instances = [BookInstance.from_dict(dict(row)) for row in rows]
            book_rows = conn.execute("SELECT * FROM books").fetchall()
        finally:
            conn.close()
        books = {row["id"]: Book.from_dict(dict(row)) for row in book_rows}
        for instance in instances:
            instance.book = books.get(instance.book_id)
        return instances

    def get_bookinstance(self, instance_id: int) -> Optional[BookInstance]:
        conn = self._connect()
        try:
            row = conn.execute("SELECT * FROM bookinstances WHERE id = ?", (instance_id,)).fetchone()
            if row is None:
                return None
            instance = BookInstance.from_dict(dict(row))
            book_row = conn.execute("SELECT * FROM books WHERE id = ?", (instance.book_id,)).fetchone()
        finally:
            conn.close()
        instance.book = Book.from_dict(dict(book_row)) if book_row else None
        return instance

    def create_bookinstance(self, instance: BookInstance) -> BookInstance:
        data = instance.to_dict()
        conn = self._connect()
        try:
            cursor = conn.execute(
                "INSERT INTO bookinstances (book_id, imprint, status, due_back) VALUES (?, ?, ?, ?)",
                (data["book_id"], data["imprint"], data["status"], data["due_back"]),
            )
            conn.commit()
            instance.id = cursor.lastrowid
        finally:
            conn.close()
        logger.info(f"Book copy created: id={instance.id} book_id={instance.book_id}")
        return instance

    def update_bookinstance(self, instance_id: int, instance: BookInstance) -> Optional[BookInstance]:
        data = instance.to_dict()
        conn = self._connect()
        try:
            cursor = conn.execute(
                "UPDATE bookinstances SET book_id = ?, imprint = ?, status = ?, due_back = ? WHERE id = ?",
                (data["book_id"], data["imprint"], data["status"], data["due_back"], instance_id),
            )
            conn.commit()
            if cursor.rowcount == 0:
                return None
        finally:
            conn.close()
        instance.id = instance_id
        logger.info(f"Book copy updated: id={instance_id}")
        return instance

    def delete_bookinstance(self, instance_id: int) -> bool:
        return self._delete("bookinstances", instance_id)

    # ------------------------- Utilities ------------------------- #
    def _delete(self, table: str, record_id: int) -> bool:
        conn = self._connect()
        try:
            cursor = conn.execute(f"DELETE FROM {table} WHERE id = ?", (record_id,))
            conn.commit()
            deleted = cursor.rowcount > 0
        finally:
            conn.close()
        if deleted:
            logger.info(f"Deleted from {table}: id={record_id}")
        return deleted
