from __future__ import annotations

from datetime import date
from enum import Enum

from locallibrary.book import Book
from locallibrary.dates import format_date, iso_date, parse_stored_date


class BookStatus(str, Enum):
    """Availability of a single copy."""
    AVAILABLE = "Available"
    MAINTENANCE = "Maintenance"
    LOANED = "Loaned"
    RESERVED = "Reserved"


class BookInstance:
    """A specific physical copy of a book that someone might borrow."""

    def __init__(self, book_id: int, imprint: str, status: BookStatus | str = BookStatus.MAINTENANCE,
                 due_back: date | None = None, id: int | None = None, book: Book | None = None) -> None:
        self.id = id
        self.book_id = book_id
        self.imprint = imprint.strip()
        self.status = BookStatus(status)
        self.due_back = due_back
        self.book = book

    def __str__(self) -> str:
        return f"{self.imprint} [{self.status.value}]"

    @property
    def url(self) -> str:
        return f"/catalog/bookinstance/{self.id}"

    @property
    def due_back_formatted(self) -> str:
        return format_date(self.due_back)

    @property
    def due_back_iso(self) -> str:
        return iso_date(self.due_back)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "book_id": self.book_id,
            "imprint": self.imprint,
            "status": self.status.value,
            "due_back": iso_date(self.due_back) or None,
        }

    @staticmethod
    def from_dict(data: dict) -> "BookInstance":
        return BookInstance(
            id=data.get("id"),
            book_id=data["book_id"],
            imprint=data["imprint"],
            status=data.get("status") or BookStatus.MAINTENANCE,
            due_back=parse_stored_date(data.get("due_back")),
        )
