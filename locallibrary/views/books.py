import logging
import sqlite3

from fastapi import APIRouter, Depends, Request

from locallibrary.catalog import Catalog
from locallibrary.forms import BookForm, parse_form, submitted_values
from locallibrary.templating import redirect, render
from locallibrary.views import RecordId, get_catalog, not_found

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/catalog")

BOOK_FIELDS = ("title", "author", "summary", "isbn")


async def _submitted_book(request: Request) -> dict:
    form = await request.form()
    data = {name: form.get(name, "") for name in BOOK_FIELDS}
    data["genre"] = form.getlist("genre")
    return data


def _validate_book(catalog: Catalog, data: dict):
    """Validate the book form and the records it refers to.

    Returns (book, errors, authors, genres); the lists are what the form needs
    when it has to be shown again.
    """
    authors = catalog.list_authors()
    genres = catalog.list_genres()
    form, errors = parse_form(BookForm, data)
    if errors:
        return None, errors, authors, genres

    if form.author not in {author.id for author in authors}:
        return None, [{"param": "author", "msg": "Selected author does not exist."}], authors, genres

    known_genres = {genre.id for genre in genres}
    book = form.to_book()
    book.genre_ids = [genre_id for genre_id in book.genre_ids if genre_id in known_genres]
    return book, [], authors, genres


@router.get("/", name="index")
def index(request: Request, catalog: Catalog = Depends(get_catalog)):
    """Home page with record counts."""
    try:
        data = catalog.get_statistics()
    except sqlite3.Error as exc:
        logger.error(f"Could not load catalog counts: {exc}")
        return render(request, "index.html", title="Local Library Home", error=exc)
    return render(request, "index.html", title="Local Library Home", data=data)


@router.get("/books", name="book_list")
def book_list(request: Request, catalog: Catalog = Depends(get_catalog)):
    """Display list of all books."""
    return render(request, "book_list.html", title="Book List", book_list=catalog.list_books())


@router.get("/book/create", name="book_create_get")
def book_create_get(request: Request, catalog: Catalog = Depends(get_catalog)):
    return render(request, "book_form.html", title="Create Book", values={"genre": []},
                  authors=catalog.list_authors(), genres=catalog.list_genres(), errors=[])


@router.post("/book/create", name="book_create_post")
async def book_create_post(request: Request, catalog: Catalog = Depends(get_catalog)):
    data = await _submitted_book(request)
    book, errors, authors, genres = _validate_book(catalog, data)
    if errors:
        return render(request, "book_form.html", title="Create Book", values=submitted_values(data),
                      authors=authors, genres=genres, errors=errors)

    book = catalog.create_book(book)
    return redirect(book.url)


@router.get("/book/{book_id}/delete", name="book_delete_get")
def book_delete_get(book_id: RecordId, request: Request, catalog: Catalog = Depends(get_catalog)):
    book = catalog.get_book(book_id)
    if book is None:
        return redirect("/catalog/books")
    return render(request, "book_delete.html", title="Delete Book", book=book,
                  book_instances=catalog.instances_of_book(book_id))


@router.post("/book/{book_id}/delete", name="book_delete_post")
def book_delete_post(book_id: RecordId, request: Request, catalog: Catalog = Depends(get_catalog)):
    """Delete a book, unless copies of it still exist."""
    book = catalog.get_book(book_id)
    if book is None:
        return redirect("/catalog/books")

    book_instances = catalog.instances_of_book(book_id)
    if book_instances:
        logger.info(f"Refusing to delete book {book_id}: {len(book_instances)} copy(ies) remain")
        return render(request, "book_delete.html", title="Delete Book", book=book,
                      book_instances=book_instances)

    catalog.delete_book(book_id)
    return redirect("/catalog/books")


@router.get("/book/{book_id}/update", name="book_update_get")
def book_update_get(book_id: RecordId, request: Request, catalog: Catalog = Depends(get_catalog)):
    book = catalog.get_book(book_id)
    if book is None:
        raise not_found("Book not found")
    return render(request, "book_form.html", title="Update Book", values=BookForm.values_from(book),
                  authors=catalog.list_authors(), genres=catalog.list_genres(), errors=[])


@router.post("/book/{book_id}/update", name="book_update_post")
async def book_update_post(book_id: RecordId, request: Request, catalog: Catalog = Depends(get_catalog)):
    if catalog.get_book(book_id) is None:
        raise not_found("Book not found")
    data = await _submitted_book(request)
    book, errors, authors, genres = _validate_book(catalog, data)
    if errors:
        return render(request, "book_form.html", title="Update Book", values=submitted_values(data),
                      authors=authors, genres=genres, errors=errors)

    book = catalog.update_book(book_id, book)
    if book is None:
        raise not_found("Book not found")
    return redirect(book.url)


@router.get("/book/{book_id}", name="book_detail")
def book_detail(book_id: RecordId, request: Request, catalog: Catalog = Depends(get_catalog)):
    """Display detail page for a specific book."""
    book = catalog.get_book(book_id)
    if book is None:
        raise not_found("Book not found")
    return render(request, "book_detail.html", title=book.title, book=book,
                  book_instances=catalog.instances_of_book(book_id))
