"""Local Library - catalog web application

This package contains:
- Record types (author.py, book.py, genre.py, bookinstance.py)
- Data layer (database.py, catalog.py)
- Form validation (forms.py)
- Web views (api.py, views/)
- CLI interface (cli.py)
"""

__version__ = "1.0.0"
