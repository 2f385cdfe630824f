"""Form validation for the catalog views.

Each form is a pydantic model built from the submitted fields. Validators trim
input and raise ``PydanticCustomError`` so the message shown to the user is
exactly the text given here. ``parse_form`` turns a failed validation into the
list of ``{"param", "msg"}`` items the templates render above the form.
"""
from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel, ValidationError, field_validator, model_validator
from pydantic_core import PydanticCustomError

from locallibrary.author import Author
from locallibrary.book import Book
from locallibrary.bookinstance import BookInstance, BookStatus
from locallibrary.database import MAX_ROW_ID
from locallibrary.dates import iso_date
from locallibrary.genre import Genre

FormT = TypeVar("FormT", bound=BaseModel)


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _required(value: Any, message: str) -> str:
    value = _text(value)
    if not value:
        raise PydanticCustomError("required", message)
    return value


def _max_length(value: str, limit: int, message: str) -> str:
    if len(value) > limit:
        raise PydanticCustomError("too_long", message)
    return value


def _optional_date(value: Any, message: str) -> Optional[date]:
    if isinstance(value, date):
        return value
    value = _text(value)
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise PydanticCustomError("invalid_date", message)


def _reference(value: Any, message: str) -> int:
    value = _required(value, message)
    try:
        record_id = int(value)
    except ValueError:
        raise PydanticCustomError("invalid_reference", message)
    if not 1 <= record_id <= MAX_ROW_ID:
        raise PydanticCustomError("invalid_reference", message)
    return record_id


class AuthorForm(BaseModel):
    first_name: str = ""
    family_name: str = ""
    date_of_birth: Optional[date] = None
    date_of_death: Optional[date] = None

    @field_validator("first_name", mode="before")
    @classmethod
    def _check_first_name(cls, value):
        value = _required(value, "First name must be specified.")
        if not value.isalnum():
            raise PydanticCustomError("alphanumeric", "First name has non-alphanumeric characters.")
        return _max_length(value, 100, "First name must be at most 100 characters.")

    @field_validator("family_name", mode="before")
    @classmethod
    def _check_family_name(cls, value):
        value = _required(value, "Family name must be specified.")
        if not value.isalnum():
            raise PydanticCustomError("alphanumeric", "Family name has non-alphanumeric characters.")
        return _max_length(value, 100, "Family name must be at most 100 characters.")

    @field_validator("date_of_birth", mode="before")
    @classmethod
    def _check_date_of_birth(cls, value):
        return _optional_date(value, "Invalid date of birth")

    @field_validator("date_of_death", mode="before")
    @classmethod
    def _check_date_of_death(cls, value):
        return _optional_date(value, "Invalid date of death")

    @model_validator(mode="after")
    def _check_lifespan(self):
        if self.date_of_birth and self.date_of_death and self.date_of_death < self.date_of_birth:
            raise PydanticCustomError("lifespan", "Date of death must not be before date of birth.")
        return self

    def to_author(self) -> Author:
        return Author(
            first_name=self.first_name,
            family_name=self.family_name,
            date_of_birth=self.date_of_birth,
            date_of_death=self.date_of_death,
        )

    @staticmethod
    def values_from(author: Author) -> Dict[str, str]:
        return {
            "first_name": author.first_name,
            "family_name": author.family_name,
            "date_of_birth": iso_date(author.date_of_birth),
            "date_of_death": iso_date(author.date_of_death),
        }


class GenreForm(BaseModel):
    name: str = ""

    @field_validator("name", mode="before")
    @classmethod
    def _check_name(cls, value):
        value = _required(value, "Genre name required")
        return _max_length(value, 100, "Genre name must be at most 100 characters.")

    def to_genre(self) -> Genre:
        return Genre(name=self.name)

    @staticmethod
    def values_from(genre: Genre) -> Dict[str, str]:
        return {"name": genre.name}


class BookForm(BaseModel):
    title: str = ""
    author: int = 0
    summary: str = ""
    isbn: str = ""
    genre: List[int] = []

    @field_validator("title", mode="before")
    @classmethod
    def _check_title(cls, value):
        return _required(value, "Title must not be empty.")

    @field_validator("author", mode="before")
    @classmethod
    def _check_author(cls, value):
        return _reference(value, "Author must not be empty.")

    @field_validator("summary", mode="before")
    @classmethod
    def _check_summary(cls, value):
        return _required(value, "Summary must not be empty.")

    @field_validator("isbn", mode="before")
    @classmethod
    def _check_isbn(cls, value):
        return _required(value, "ISBN must not be empty")

    @field_validator("genre", mode="before")
    @classmethod
    def _check_genre(cls, value):
        # Checkbox values; anything that is not an id is dropped
        if value is None or value == "":
            return []
        if isinstance(value, (str, int)):
            value = [value]
        genre_ids = []
        for item in value:
            try:
                genre_id = int(_text(item))
            except ValueError:
                continue
            if 1 <= genre_id <= MAX_ROW_ID and genre_id not in genre_ids:
                genre_ids.append(genre_id)
        return genre_ids

    def to_book(self) -> Book:
        return Book(
            title=self.title,
            author_id=self.author,
            summary=self.summary,
            isbn=self.isbn,
            genre_ids=self.genre,
        )

    @staticmethod
    def values_from(book: Book) -> Dict[str, Any]:
        return {
            "title": book.title,
            "author": str(book.author_id),
            "summary": book.summary,
            "isbn": book.isbn,
            "genre": [str(genre_id) for genre_id in book.genre_ids],
        }


class BookInstanceForm(BaseModel):
    book: int = 0
    imprint: str = ""
    status: BookStatus = BookStatus.MAINTENANCE
    due_back: Optional[date] = None

    @field_validator("book", mode="before")
    @classmethod
    def _check_book(cls, value):
        return _reference(value, "Book must be specified")

    @field_validator("imprint", mode="before")
    @classmethod
    def _check_imprint(cls, value):
        return _required(value, "Imprint must be specified")

    @field_validator("status", mode="before")
    @classmethod
    def _check_status(cls, value):
        value = _text(value)
        if not value:
            return BookStatus.MAINTENANCE
        try:
            return BookStatus(value)
        except ValueError:
            raise PydanticCustomError("invalid_status", "Invalid status")

    @field_validator("due_back", mode="before")
    @classmethod
    def _check_due_back(cls, value):
        return _optional_date(value, "Invalid date")

    def to_bookinstance(self) -> BookInstance:
        return BookInstance(
            book_id=self.book,
            imprint=self.imprint,
            status=self.status,
            due_back=self.due_back,
        )

    @staticmethod
    def values_from(instance: BookInstance) -> Dict[str, str]:
        return {
            "book": str(instance.book_id),
            "imprint": instance.imprint,
            "status": instance.status.value,
            "due_back": instance.due_back_iso,
        }


def form_errors(exc: ValidationError) -> List[Dict[str, str]]:
    """Flatten a pydantic ValidationError into template-friendly items."""
    errors = []
    for error in exc.errors():
        loc = error.get("loc") or ()
        errors.append({"param": str(loc[0]) if loc else "", "msg": error["msg"]})
    return errors


def parse_form(form_cls: Type[FormT], data: Dict[str, Any]) -> Tuple[Optional[FormT], List[Dict[str, str]]]:
    """Validate submitted data. Returns (form, []) or (None, errors)."""
    try:
        return form_cls(**data), []
    except ValidationError as exc:
        return None, form_errors(exc)


def submitted_values(data: Dict[str, Any]) -> Dict[str, Any]:
    """Trimmed copy of the submitted fields, for re-rendering a failed form."""
    values: Dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, list):
            values[key] = [_text(item) for item in value]
        else:
            values[key] = _text(value)
    return values
