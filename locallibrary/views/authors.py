import logging

from fastapi import APIRouter, Depends, Request

from locallibrary.catalog import Catalog
from locallibrary.forms import AuthorForm, parse_form, submitted_values
from locallibrary.templating import redirect, render
from locallibrary.views import RecordId, get_catalog, not_found

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/catalog")

AUTHOR_FIELDS = ("first_name", "family_name", "date_of_birth", "date_of_death")


async def _submitted_author(request: Request) -> dict:
    form = await request.form()
    return {name: form.get(name, "") for name in AUTHOR_FIELDS}


@router.get("/authors", name="author_list")
def author_list(request: Request, catalog: Catalog = Depends(get_catalog)):
    """Display list of all authors."""
    return render(request, "author_list.html", title="Author List", author_list=catalog.list_authors())


@router.get("/author/create", name="author_create_get")
def author_create_get(request: Request):
    return render(request, "author_form.html", title="Create Author", values={}, errors=[])


@router.post("/author/create", name="author_create_post")
async def author_create_post(request: Request, catalog: Catalog = Depends(get_catalog)):
    data = await _submitted_author(request)
    form, errors = parse_form(AuthorForm, data)
    if errors:
        return render(request, "author_form.html", title="Create Author",
                      values=submitted_values(data), errors=errors)

    author = catalog.create_author(form.to_author())
    return redirect(author.url)


@router.get("/author/{author_id}/delete", name="author_delete_get")
def author_delete_get(author_id: RecordId, request: Request, catalog: Catalog = Depends(get_catalog)):
    author = catalog.get_author(author_id)
    if author is None:
        # Nothing to delete
        return redirect("/catalog/authors")
    return render(request, "author_delete.html", title="Delete Author", author=author,
                  author_books=catalog.books_by_author(author_id))


@router.post("/author/{author_id}/delete", name="author_delete_post")
def author_delete_post(author_id: RecordId, request: Request, catalog: Catalog = Depends(get_catalog)):
    """Delete an author, unless books still reference it."""
    author = catalog.get_author(author_id)
    if author is None:
        return redirect("/catalog/authors")

    author_books = catalog.books_by_author(author_id)
    if author_books:
        logger.info(f"Refusing to delete author {author_id}: {len(author_books)} book(s) remain")
        return render(request, "author_delete.html", title="Delete Author", author=author,
                      author_books=author_books)

    catalog.delete_author(author_id)
    return redirect("/catalog/authors")


@router.get("/author/{author_id}/update", name="author_update_get")
def author_update_get(author_id: RecordId, request: Request, catalog: Catalog = Depends(get_catalog)):
    author = catalog.get_author(author_id)
    if author is None:
        raise not_found("Author not found")
    return render(request, "author_form.html", title="Update Author",
                  values=AuthorForm.values_from(author), errors=[])


@router.post("/author/{author_id}/update", name="author_update_post")
async def author_update_post(author_id: RecordId, request: Request, catalog: Catalog = Depends(get_catalog)):
    if catalog.get_author(author_id) is None:
        raise not_found("Author not found")
    data = await _submitted_author(request)
    form, errors = parse_form(AuthorForm, data)
    if errors:
        return render(request, "author_form.html", title="Update Author",
                      values=submitted_values(data), errors=errors)

    author = catalog.update_author(author_id, form.to_author())
    if author is None:
        raise not_found("Author not found")
    return redirect(author.url)


@router.get("/author/{author_id}", name="author_detail")
def author_detail(author_id: RecordId, request: Request, catalog: Catalog = Depends(get_catalog)):
    """Display detail page for a specific author."""
    author = catalog.get_author(author_id)
    if author is None:
        raise not_found("Author not found")
    return render(request, "author_detail.html", title="Author Detail", author=author,
                  author_books=catalog.books_by_author(author_id))
