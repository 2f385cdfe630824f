from datetime import date

import pytest

from locallibrary.author import Author
from locallibrary.book import Book
from locallibrary.bookinstance import BookInstance, BookStatus


@pytest.fixture
def book(catalog):
    author = catalog.create_author(Author("Ben", "Bova"))
    return catalog.create_book(Book("Death Wave", author.id, "Summary", "9780765379504"))


def test_bookinstance_list(client, catalog, book):
    catalog.create_bookinstance(BookInstance(book.id, "Tor, 2015", BookStatus.AVAILABLE))
    catalog.create_bookinstance(BookInstance(book.id, "Tor, 2016", BookStatus.LOANED, date(2026, 3, 1)))

    response = client.get("/catalog/bookinstances")
    assert response.status_code == 200
    assert "Book Instance List" in response.text
    assert "Death Wave : Tor, 2015" in response.text
    assert "(Due: Mar 1, 2026)" in response.text


def test_bookinstance_list_empty(client):
    response = client.get("/catalog/bookinstances")
    assert "There are no book copies in this library." in response.text


def test_bookinstance_detail(client, catalog, book):
    instance = catalog.create_bookinstance(BookInstance(book.id, "Tor, 2015", BookStatus.LOANED,
                                                       date(2026, 3, 1)))

    response = client.get(f"/catalog/bookinstance/{instance.id}")
    assert response.status_code == 200
    assert "<title>Copy: Death Wave</title>" in response.text
    assert f'href="{book.url}"' in response.text
    assert "Due back:</strong> Mar 1, 2026" in response.text


def test_bookinstance_detail_not_found(client):
    response = client.get("/catalog/bookinstance/999")
    assert response.status_code == 404
    assert "Book copy not found" in response.text


def test_bookinstance_create_form_defaults_to_maintenance(client, book):
    response = client.get("/catalog/bookinstance/create")
    assert response.status_code == 200
    assert "Create BookInstance" in response.text
    assert f'<option value="{book.id}">Death Wave</option>' in response.text
    assert '<option value="Maintenance" selected>' in response.text


def test_bookinstance_create_success(client, catalog, book):
    response = client.post("/catalog/bookinstance/create", data={
        "book": str(book.id),
        "imprint": "Tor, 2015",
        "status": "Loaned",
        "due_back": "2026-03-01",
    }, follow_redirects=False)

    assert response.status_code == 303
    [instance] = catalog.list_bookinstances()
    assert response.headers["location"] == instance.url
    assert instance.status is BookStatus.LOANED
    assert instance.due_back == date(2026, 3, 1)


def test_bookinstance_create_blank_status_and_date(client, catalog, book):
    client.post("/catalog/bookinstance/create", data={
        "book": str(book.id), "imprint": "Tor, 2015", "status": "", "due_back": "",
    })

    [instance] = catalog.list_bookinstances()
    assert instance.status is BookStatus.MAINTENANCE
    assert instance.due_back is None


def test_bookinstance_create_invalid(client, catalog, book):
    response = client.post("/catalog/bookinstance/create", data={
        "book": str(book.id), "imprint": "", "status": "Lost", "due_back": "soon",
    })

    assert response.status_code == 200
    assert "Imprint must be specified" in response.text
    assert "Invalid status" in response.text
    assert "Invalid date" in response.text
    # Chosen book stays selected
    assert f'<option value="{book.id}" selected>' in response.text
    assert catalog.count_bookinstances() == 0


def test_bookinstance_create_unknown_book(client, catalog):
    response = client.post("/catalog/bookinstance/create", data={
        "book": "999", "imprint": "Tor, 2015", "status": "Available",
    })

    assert response.status_code == 200
    assert "Selected book does not exist." in response.text
    assert catalog.count_bookinstances() == 0


def test_bookinstance_delete(client, catalog, book):
    instance = catalog.create_bookinstance(BookInstance(book.id, "Tor, 2015"))

    page = client.get(f"/catalog/bookinstance/{instance.id}/delete")
    assert "Do you really want to delete this BookInstance?" in page.text

    response = client.post(f"/catalog/bookinstance/{instance.id}/delete", follow_redirects=False)
    assert response.status_code == 303
    assert response.headers["location"] == "/catalog/bookinstances"
    assert catalog.get_bookinstance(instance.id) is None


def test_bookinstance_delete_missing_redirects_to_list(client):
    response = client.get("/catalog/bookinstance/999/delete", follow_redirects=False)
    assert response.status_code == 303
    assert response.headers["location"] == "/catalog/bookinstances"


def test_bookinstance_update(client, catalog, book):
    instance = catalog.create_bookinstance(BookInstance(book.id, "Tor, 2015", BookStatus.LOANED,
                                                       date(2026, 3, 1)))

    page = client.get(f"/catalog/bookinstance/{instance.id}/update")
    assert page.status_code == 200
    assert 'value="2026-03-01"' in page.text
    assert '<option value="Loaned" selected>' in page.text

    response = client.post(f"/catalog/bookinstance/{instance.id}/update", data={
        "book": str(book.id), "imprint": "Tor, 2015", "status": "Available", "due_back": "",
    }, follow_redirects=False)

    assert response.status_code == 303
    assert response.headers["location"] == instance.url
    updated = catalog.get_bookinstance(instance.id)
    assert updated.status is BookStatus.AVAILABLE
    assert updated.due_back is None


def test_bookinstance_update_missing_is_not_found(client, book):
    assert client.get("/catalog/bookinstance/999/update").status_code == 404
    response = client.post("/catalog/bookinstance/999/update", data={
        "book": str(book.id), "imprint": "Tor, 2015", "status": "Available",
    })
    assert response.status_code == 404


def test_bookinstance_create_out_of_range_book(client, catalog):
    response = client.post("/catalog/bookinstance/create", data={
        "book": "99999999999999999999", "imprint": "Tor, 2015",
    })

    assert response.status_code == 200
    assert "Book must be specified" in response.text
    assert catalog.count_bookinstances() == 0


def test_bookinstance_update_missing_with_invalid_data_is_not_found(client):
    response = client.post("/catalog/bookinstance/999/update", data={"book": "", "imprint": ""})
    assert response.status_code == 404
    assert "Book copy not found" in response.text
