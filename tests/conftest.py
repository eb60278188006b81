import logging

import pytest

from db import init_db, get_session, Category
from main import create_app


@pytest.fixture
def db_url(tmp_path):
    """Fresh SQLite file per test."""
    return f"sqlite:///{tmp_path / 'catdb-test.sqlite'}"


@pytest.fixture
def session(db_url):
    init_db(db_url)
    s = get_session()
    yield s
    s.close()


@pytest.fixture
def app(db_url):
    app = create_app(db_url)
    app.config.update(TESTING=True)
    return app


@pytest.fixture
def client(app):
    """Return a Flask test client."""
    return app.test_client()


@pytest.fixture
def make_category(session):
    """Insert a category directly, bypassing the importer."""
    def _make(name, parent=None, **fields):
        category = Category(name=name, parent_id=parent, **fields)
        session.add(category)
        session.commit()
        return category
    return _make


class FakeDenormalization:
    """Records calls instead of writing s_articles_categories_ro."""

    def __init__(self):
        self.calls = []

    def add_assignment(self, article_id, category_id):
        self.calls.append(("add_assignment", article_id, category_id))

    def disable_transactions(self):
        self.calls.append(("disable_transactions",))


@pytest.fixture
def denormalization():
    return FakeDenormalization()


@pytest.fixture
def import_logger():
    return logging.getLogger("tests.import")
