from __future__ import annotations

from locallibrary.author import Author
from locallibrary.genre import Genre


class Book:
    """A catalog title. Copies of it are BookInstance records."""

    def __init__(self, title: str, author_id: int, summary: str, isbn: str,
                 genre_ids: list[int] | None = None, id: int | None = None,
                 author: Author | None = None, genres: list[Genre] | None = None) -> None:
        self.id = id
        self.title = title.strip()
        self.author_id = author_id
        self.summary = summary.strip()
        self.isbn = isbn.strip()
        self.genre_ids = list(genre_ids or [])
        # Populated references, filled in by the catalog on request
        self.author = author
        self.genres = genres or []

    def __str__(self) -> str:  # pragma: no cover - string formatting trivial
        return f"{self.title} (ISBN: {self.isbn})"

    @property
    def url(self) -> str:
        return f"/catalog/book/{self.id}"

    @staticmethod
    def from_dict(data: dict) -> "Book":
        return Book(
            id=data.get("id"),
            title=data["title"],
            author_id=data["author_id"],
            summary=data.get("summary") or "",
            isbn=data.get("isbn") or "",
            genre_ids=data.get("genre_ids"),
        )
