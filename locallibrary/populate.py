"""Sample catalog data, handy for trying the site out."""
from datetime import date
from typing import Dict

from locallibrary.author import Author
from locallibrary.book import Book
from locallibrary.bookinstance import BookInstance, BookStatus
from locallibrary.catalog import Catalog
from locallibrary.genre import Genre

AUTHORS = [
    ("Patrick", "Rothfuss", date(1973, 6, 6), None),
    ("Ben", "Bova", date(1932, 11, 8), None),
    ("Isaac", "Asimov", date(1920, 1, 2), date(1992, 4, 6)),
    ("Bob", "Billings", None, None),
    ("Jim", "Jones", date(1971, 12, 16), None),
]

GENRES = ["Fantasy", "Science Fiction", "French Poetry"]

# (title, summary, isbn, author index, genre indexes)
BOOKS = [
    ("The Name of the Wind (The Kingkiller Chronicle, #1)",
     "I have stolen princesses back from sleeping barrow kings. I burned down the town of Trebon. "
     "I have spent the night with Felurian and left with both my sanity and my life.",
     "9781473211896", 0, [0]),
    ("The Wise Man's Fear (The Kingkiller Chronicle, #2)",
     "Picking up the tale of Kvothe Kingkiller once again, we follow him into exile, "
     "into political intrigue, courtship, adventure, love and magic.",
     "9788401352836", 0, [0]),
    ("The Slow Regard of Silent Things (Kingkiller Chronicle)",
     "Deep below the University, there is a dark place. Few people know of it.",
     "9780756411336", 0, [0]),
    ("Apes and Angels",
     "Humankind headed out to the stars not for conquest, nor exploration, nor even for curiosity.",
     "9780765379528", 1, [1]),
    ("Death Wave",
     "In Ben Bova's previous novel New Earth, Jordan Kell led the first human mission beyond the solar system.",
     "9780765379504", 1, [1]),
    ("Test Book 1", "Summary of test book 1", "ISBN111111", 4, [0, 1]),
    ("Test Book 2", "Summary of test book 2", "ISBN222222", 4, []),
]

# (book index, imprint, status, due_back)
COPIES = [
    (0, "London Gollancz, 2014.", BookStatus.AVAILABLE, None),
    (1, "Gollancz, 2011.", BookStatus.LOANED, date(2024, 3, 1)),
    (2, "Gollancz, 2015.", BookStatus.AVAILABLE, None),
    (3, "New York Tom Doherty Associates, 2016.", BookStatus.AVAILABLE, None),
    (3, "New York Tom Doherty Associates, 2016.", BookStatus.AVAILABLE, None),
    (3, "New York Tom Doherty Associates, 2016.", BookStatus.AVAILABLE, None),
    (4, "New York, NY Tom Doherty Associates, LLC, 2015.", BookStatus.AVAILABLE, None),
    (4, "New York, NY Tom Doherty Associates, LLC, 2015.", BookStatus.MAINTENANCE, None),
    (4, "New York, NY Tom Doherty Associates, LLC, 2015.", BookStatus.LOANED, None),
    (0, "Imprint XXX2", BookStatus.AVAILABLE, None),
    (1, "Imprint XXX3", BookStatus.AVAILABLE, None),
]


def populate(catalog: Catalog) -> Dict[str, int]:
    """Insert the sample records and return the resulting counts."""
    authors = [
        catalog.create_author(Author(first, family, born, died))
        for first, family, born, died in AUTHORS
    ]
    genres = [catalog.create_genre(Genre(name)) for name in GENRES]
    books = [
        catalog.create_book(Book(
            title=title,
            author_id=authors[author_index].id,
            summary=summary,
            isbn=isbn,
            genre_ids=[genres[i].id for i in genre_indexes],
        ))
        for title, summary, isbn, author_index, genre_indexes in BOOKS
    ]
    for book_index, imprint, status, due_back in COPIES:
        catalog.create_bookinstance(BookInstance(books[book_index].id, imprint, status, due_back))
    return catalog.get_statistics()
