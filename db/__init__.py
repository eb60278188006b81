"""
db - Database layer.

Public API:
    init_db()       → create engine + tables
    get_session()   → new Session
    Category, CategoryAttributes, ArticleCategory, ArticleCategoryRO → ORM models
"""

from db.engine import init_db, get_session          # noqa: F401
from db.models import (                              # noqa: F401
    Base, Category, CategoryAttributes, ArticleCategory, ArticleCategoryRO,
)
