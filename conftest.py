import pytest
from fastapi.testclient import TestClient

from locallibrary.api import create_app
from locallibrary.catalog import Catalog


@pytest.fixture
def catalog(tmp_path, request):
    # A fresh database file for every test
    db_file = str(tmp_path / f"test_{request.node.name}.db")
    return Catalog(db_file=db_file)


@pytest.fixture
def client(catalog):
    return TestClient(create_app(catalog))
