from fastapi import APIRouter, Depends, Request

from locallibrary.bookinstance import BookStatus
from locallibrary.catalog import Catalog
from locallibrary.forms import BookInstanceForm, parse_form, submitted_values
from locallibrary.templating import redirect, render
from locallibrary.views import RecordId, get_catalog, not_found

router = APIRouter(prefix="/catalog")

BOOKINSTANCE_FIELDS = ("book", "imprint", "status", "due_back")
STATUSES = [status.value for status in BookStatus]


async def _submitted_bookinstance(request: Request) -> dict:
    form = await request.form()
    return {name: form.get(name, "") for name in BOOKINSTANCE_FIELDS}


def _render_form(request: Request, catalog: Catalog, title: str, values: dict, errors: list):
    return render(request, "bookinstance_form.html", title=title, values=values, errors=errors,
                  book_list=catalog.list_books(), statuses=STATUSES)


def _validate_bookinstance(catalog: Catalog, data: dict):
    form, errors = parse_form(BookInstanceForm, data)
    if errors:
        return None, errors
    if catalog.get_book(form.book) is None:
        return None, [{"param": "book", "msg": "Selected book does not exist."}]
    return form.to_bookinstance(), []


@router.get("/bookinstances", name="bookinstance_list")
def bookinstance_list(request: Request, catalog: Catalog = Depends(get_catalog)):
    """Display list of all book copies."""
    return render(request, "bookinstance_list.html", title="Book Instance List",
                  bookinstance_list=catalog.list_bookinstances())


@router.get("/bookinstance/create", name="bookinstance_create_get")
def bookinstance_create_get(request: Request, catalog: Catalog = Depends(get_catalog)):
    return _render_form(request, catalog, "Create BookInstance",
                        {"status": BookStatus.MAINTENANCE.value}, [])


@router.post("/bookinstance/create", name="bookinstance_create_post")
async def bookinstance_create_post(request: Request, catalog: Catalog = Depends(get_catalog)):
    data = await _submitted_bookinstance(request)
    instance, errors = _validate_bookinstance(catalog, data)
    if errors:
        return _render_form(request, catalog, "Create BookInstance", submitted_values(data), errors)

    instance = catalog.create_bookinstance(instance)
    return redirect(instance.url)


@router.get("/bookinstance/{instance_id}/delete", name="bookinstance_delete_get")
def bookinstance_delete_get(instance_id: RecordId, request: Request, catalog: Catalog = Depends(get_catalog)):
    instance = catalog.get_bookinstance(instance_id)
    if instance is None:
        return redirect("/catalog/bookinstances")
    return render(request, "bookinstance_delete.html", title="Delete BookInstance", bookinstance=instance)


@router.post("/bookinstance/{instance_id}/delete", name="bookinstance_delete_post")
def bookinstance_delete_post(instance_id: RecordId, catalog: Catalog = Depends(get_catalog)):
    catalog.delete_bookinstance(instance_id)
    return redirect("/catalog/bookinstances")


@router.get("/bookinstance/{instance_id}/update", name="bookinstance_update_get")
def bookinstance_update_get(instance_id: RecordId, request: Request, catalog: Catalog = Depends(get_catalog)):
    instance = catalog.get_bookinstance(instance_id)
    if instance is None:
        raise not_found("Book copy not found")
    return _render_form(request, catalog, "Update BookInstance",
                        BookInstanceForm.values_from(instance), [])


@router.post("/bookinstance/{instance_id}/update", name="bookinstance_update_post")
async def bookinstance_update_post(instance_id: RecordId, request: Request, catalog: Catalog = Depends(get_catalog)):
    if catalog.get_bookinstance(instance_id) is None:
        raise not_found("Book copy not found")
    data = await _submitted_bookinstance(request)
    instance, errors = _validate_bookinstance(catalog, data)
    if errors:
        return _render_form(request, catalog, "Update BookInstance", submitted_values(data), errors)

    instance = catalog.update_bookinstance(instance_id, instance)
    if instance is None:
        raise not_found("Book copy not found")
    return redirect(instance.url)


@router.get("/bookinstance/{instance_id}", name="bookinstance_detail")
def bookinstance_detail(instance_id: RecordId, request: Request, catalog: Catalog = Depends(get_catalog)):
    """Display detail page for a specific book copy."""
    instance = catalog.get_bookinstance(instance_id)
    if instance is None:
        raise not_found("Book copy not found")
    title = f"Copy: {instance.book.title}" if instance.book else "Copy"
    return render(request, "bookinstance_detail.html", title=title, bookinstance=instance)
