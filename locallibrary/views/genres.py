import logging

from fastapi import APIRouter, Depends, Request

from locallibrary.catalog import Catalog
from locallibrary.forms import GenreForm, parse_form, submitted_values
from locallibrary.templating import redirect, render
from locallibrary.views import RecordId, get_catalog, not_found

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/catalog")


async def _submitted_genre(request: Request) -> dict:
    form = await request.form()
    return {"name": form.get("name", "")}


@router.get("/genres", name="genre_list")
def genre_list(request: Request, catalog: Catalog = Depends(get_catalog)):
    """Display list of all genres."""
    return render(request, "genre_list.html", title="Genre List", genre_list=catalog.list_genres())


@router.get("/genre/create", name="genre_create_get")
def genre_create_get(request: Request):
    return render(request, "genre_form.html", title="Create Genre", values={}, errors=[])


@router.post("/genre/create", name="genre_create_post")
async def genre_create_post(request: Request, catalog: Catalog = Depends(get_catalog)):
    """Create a genre, or go to the existing one with the same name."""
    data = await _submitted_genre(request)
    form, errors = parse_form(GenreForm, data)
    if errors:
        return render(request, "genre_form.html", title="Create Genre",
                      values=submitted_values(data), errors=errors)

    existing = catalog.find_genre_by_name(form.name)
    if existing is not None:
        return redirect(existing.url)

    genre = catalog.create_genre(form.to_genre())
    return redirect(genre.url)


@router.get("/genre/{genre_id}/delete", name="genre_delete_get")
def genre_delete_get(genre_id: RecordId, request: Request, catalog: Catalog = Depends(get_catalog)):
    genre = catalog.get_genre(genre_id)
    if genre is None:
        return redirect("/catalog/genres")
    return render(request, "genre_delete.html", title="Delete Genre", genre=genre,
                  genre_books=catalog.books_by_genre(genre_id))


@router.post("/genre/{genre_id}/delete", name="genre_delete_post")
def genre_delete_post(genre_id: RecordId, request: Request, catalog: Catalog = Depends(get_catalog)):
    """Delete a genre, unless books are still filed under it."""
    genre = catalog.get_genre(genre_id)
    if genre is None:
        return redirect("/catalog/genres")

    genre_books = catalog.books_by_genre(genre_id)
    if genre_books:
        logger.info(f"Refusing to delete genre {genre_id}: {len(genre_books)} book(s) remain")
        return render(request, "genre_delete.html", title="Delete Genre", genre=genre,
                      genre_books=genre_books)

    catalog.delete_genre(genre_id)
    return redirect("/catalog/genres")


@router.get("/genre/{genre_id}/update", name="genre_update_get")
def genre_update_get(genre_id: RecordId, request: Request, catalog: Catalog = Depends(get_catalog)):
    genre = catalog.get_genre(genre_id)
    if genre is None:
        raise not_found("Genre not found")
    return render(request, "genre_form.html", title="Update Genre",
                  values=GenreForm.values_from(genre), errors=[])


@router.post("/genre/{genre_id}/update", name="genre_update_post")
async def genre_update_post(genre_id: RecordId, request: Request, catalog: Catalog = Depends(get_catalog)):
    if catalog.get_genre(genre_id) is None:
        raise not_found("Genre not found")
    data = await _submitted_genre(request)
    form, errors = parse_form(GenreForm, data)
    if errors:
        return render(request, "genre_form.html", title="Update Genre",
                      values=submitted_values(data), errors=errors)

    existing = catalog.find_genre_by_name(form.name)
    if existing is not None and existing.id != genre_id:
        return render(request, "genre_form.html", title="Update Genre",
                      values=submitted_values(data),
                      errors=[{"param": "name", "msg": f"Genre '{existing.name}' already exists"}])

    genre = catalog.update_genre(genre_id, form.to_genre())
    if genre is None:
        raise not_found("Genre not found")
    return redirect(genre.url)


@router.get("/genre/{genre_id}", name="genre_detail")
def genre_detail(genre_id: RecordId, request: Request, catalog: Catalog = Depends(get_catalog)):
    """Display detail page for a specific genre."""
    genre = catalog.get_genre(genre_id)
    if genre is None:
        raise not_found("Genre not found")
    return render(request, "genre_detail.html", title="Genre Detail", genre=genre,
                  genre_books=catalog.books_by_genre(genre_id))
