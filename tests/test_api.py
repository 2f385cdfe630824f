import logging
import sqlite3

from fastapi.testclient import TestClient

from locallibrary.api import create_app
from locallibrary.author import Author
from locallibrary.book import Book
from locallibrary.bookinstance import BookInstance, BookStatus
from locallibrary.config import settings
from locallibrary.genre import Genre


def test_root_redirects_to_catalog(client):
    response = client.get("/", follow_redirects=False)
    assert response.status_code == 303
    assert response.headers["location"] == "/catalog/"


def test_index_shows_counts(client, catalog):
    author = catalog.create_author(Author("Ben", "Bova"))
    catalog.create_genre(Genre("Science Fiction"))
    book = catalog.create_book(Book("Death Wave", author.id, "Summary", "9780765379504"))
    catalog.create_bookinstance(BookInstance(book.id, "Tor, 2015", BookStatus.AVAILABLE))
    catalog.create_bookinstance(BookInstance(book.id, "Tor, 2015", BookStatus.LOANED))

    response = client.get("/catalog/")
    assert response.status_code == 200
    assert "Local Library Home" in response.text
    assert "<strong>Books:</strong> 1" in response.text
    assert "<strong>Copies:</strong> 2" in response.text
    assert "<strong>Copies available:</strong> 1" in response.text
    assert "<strong>Authors:</strong> 1" in response.text
    assert "<strong>Genres:</strong> 1" in response.text


def test_index_renders_storage_error(client, catalog, monkeypatch):
    def broken():
        raise sqlite3.OperationalError("database is locked")

    monkeypatch.setattr(catalog, "get_statistics", broken)

    response = client.get("/catalog/")
    assert response.status_code == 200
    assert "Could not load the catalog counts: database is locked" in response.text


def test_unknown_record_renders_error_page(client):
    response = client.get("/catalog/author/999")
    assert response.status_code == 404
    assert "Author not found" in response.text


def test_malformed_id_is_not_found(client):
    response = client.get("/catalog/book/not-a-number")
    assert response.status_code == 404
    assert "Page not found" in response.text


def test_unknown_route_is_not_found(client):
    response = client.get("/catalog/shelves")
    assert response.status_code == 404


def test_unhandled_error_renders_500_page(catalog, monkeypatch):
    def broken():
        raise RuntimeError("boom")

    monkeypatch.setattr(catalog, "list_genres", broken)
    client = TestClient(create_app(catalog), raise_server_exceptions=False)

    response = client.get("/catalog/genres")
    assert response.status_code == 500
    assert "Internal Server Error" in response.text
    assert "boom" not in response.text


def test_security_headers(client):
    response = client.get("/catalog/")
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.json()["db"] is True


def test_static_stylesheet(client):
    response = client.get("/static/style.css")
    assert response.status_code == 200
    assert "text/css" in response.headers["content-type"]


def test_out_of_range_ids_are_not_found(client):
    too_big = str(2**63)
    for path in (
        f"/catalog/book/{too_big}",
        f"/catalog/author/{too_big}/update",
        f"/catalog/genre/{too_big}/delete",
        f"/catalog/bookinstance/{too_big}",
        "/catalog/book/99999999999999999999",
        "/catalog/author/0",
        "/catalog/genre/-1",
    ):
        response = client.get(path)
        assert response.status_code == 404, path
        assert "Page not found" in response.text


def test_out_of_range_id_on_post_is_not_found(client):
    response = client.post("/catalog/book/99999999999999999999/delete", follow_redirects=False)
    assert response.status_code == 404


def test_startup_logs_environment(catalog, caplog):
    caplog.set_level(logging.INFO, logger="locallibrary.api")

    with TestClient(create_app(catalog)):
        pass

    assert f"started ({settings.environment}) with database {catalog.db_file}" in caplog.text
