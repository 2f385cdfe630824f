"""Catalog views, one router per record kind."""
from typing import Annotated

from fastapi import HTTPException, Path, Request

from locallibrary.catalog import Catalog
from locallibrary.database import MAX_ROW_ID

# Record id taken from the URL. Anything outside the stored range fails
# validation, which the app renders as a 404 page.
RecordId = Annotated[int, Path(ge=1, le=MAX_ROW_ID)]


def get_catalog(request: Request) -> Catalog:
    """Dependency returning the catalog attached to the running app."""
    catalog = getattr(request.app.state, "catalog", None)
    if catalog is None:
        catalog = Catalog()
        request.app.state.catalog = catalog
    return catalog


def not_found(message: str) -> HTTPException:
    return HTTPException(status_code=404, detail=message)
