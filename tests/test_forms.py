from datetime import date

from locallibrary.bookinstance import BookStatus
from locallibrary.forms import (
    AuthorForm,
    BookForm,
    BookInstanceForm,
    GenreForm,
    parse_form,
    submitted_values,
)


def _messages(errors):
    return [error["msg"] for error in errors]


def test_author_form_trims_and_parses_dates():
    form, errors = parse_form(AuthorForm, {
        "first_name": "  Patrick ",
        "family_name": "Rothfuss",
        "date_of_birth": "1973-06-06",
        "date_of_death": "",
    })
    assert errors == []
    assert form.first_name == "Patrick"
    assert form.date_of_birth == date(1973, 6, 6)
    assert form.date_of_death is None


def test_author_form_required_and_alphanumeric_names():
    _, errors = parse_form(AuthorForm, {
        "first_name": "   ",
        "family_name": "O'Brien",
        "date_of_birth": "",
        "date_of_death": "",
    })
    assert _messages(errors) == [
        "First name must be specified.",
        "Family name has non-alphanumeric characters.",
    ]
    assert [error["param"] for error in errors] == ["first_name", "family_name"]


def test_author_form_invalid_dates():
    _, errors = parse_form(AuthorForm, {
        "first_name": "Ben",
        "family_name": "Bova",
        "date_of_birth": "not-a-date",
        "date_of_death": "1932-13-45",
    })
    assert _messages(errors) == ["Invalid date of birth", "Invalid date of death"]


def test_author_form_rejects_death_before_birth():
    _, errors = parse_form(AuthorForm, {
        "first_name": "Ben",
        "family_name": "Bova",
        "date_of_birth": "1990-01-01",
        "date_of_death": "1980-01-01",
    })
    assert _messages(errors) == ["Date of death must not be before date of birth."]


def test_genre_form():
    form, errors = parse_form(GenreForm, {"name": " Fantasy "})
    assert errors == []
    assert form.to_genre().name == "Fantasy"

    _, errors = parse_form(GenreForm, {"name": ""})
    assert _messages(errors) == ["Genre name required"]


def test_book_form_messages():
    _, errors = parse_form(BookForm, {"title": "", "author": "", "summary": " ", "isbn": "", "genre": []})
    assert _messages(errors) == [
        "Title must not be empty.",
        "Author must not be empty.",
        "Summary must not be empty.",
        "ISBN must not be empty",
    ]


def test_book_form_genre_ids():
    form, errors = parse_form(BookForm, {
        "title": "Dune",
        "author": "3",
        "summary": "Spice",
        "isbn": "9780441013593",
        "genre": ["2", "x", "2", "5"],
    })
    assert errors == []
    book = form.to_book()
    assert book.author_id == 3
    assert book.genre_ids == [2, 5]


def test_bookinstance_form_defaults_and_errors():
    form, errors = parse_form(BookInstanceForm, {"book": "1", "imprint": "Gollancz", "status": "", "due_back": ""})
    assert errors == []
    assert form.status is BookStatus.MAINTENANCE
    assert form.due_back is None

    _, errors = parse_form(BookInstanceForm, {"book": "", "imprint": "", "status": "Lost", "due_back": "soon"})
    assert _messages(errors) == [
        "Book must be specified",
        "Imprint must be specified",
        "Invalid status",
        "Invalid date",
    ]


def test_submitted_values_trims_everything():
    assert submitted_values({"title": "  Dune ", "genre": [" 1", "2 "]}) == {"title": "Dune", "genre": ["1", "2"]}


def test_author_form_name_length_limit():
    form, errors = parse_form(AuthorForm, {"first_name": "a" * 100, "family_name": "b" * 100})
    assert errors == []
    assert len(form.first_name) == 100

    _, errors = parse_form(AuthorForm, {"first_name": "a" * 101, "family_name": "b" * 101})
    assert _messages(errors) == [
        "First name must be at most 100 characters.",
        "Family name must be at most 100 characters.",
    ]


def test_genre_form_name_length_limit():
    form, errors = parse_form(GenreForm, {"name": "g" * 100})
    assert errors == []
    assert form.name == "g" * 100

    _, errors = parse_form(GenreForm, {"name": "g" * 101})
    assert _messages(errors) == ["Genre name must be at most 100 characters."]


def test_references_outside_id_range_are_rejected():
    for book in ("99999999999999999999", str(2**63), "0", "-3"):
        _, errors = parse_form(BookInstanceForm, {"book": book, "imprint": "Gollancz"})
        assert _messages(errors) == ["Book must be specified"], book

    _, errors = parse_form(BookForm, {
        "title": "Dune", "author": str(2**63), "summary": "Spice", "isbn": "1",
    })
    assert _messages(errors) == ["Author must not be empty."]


def test_book_form_drops_genre_ids_outside_id_range():
    form, errors = parse_form(BookForm, {
        "title": "Dune",
        "author": "3",
        "summary": "Spice",
        "isbn": "9780441013593",
        "genre": [str(2**63), "0", "4"],
    })
    assert errors == []
    assert form.genre == [4]
