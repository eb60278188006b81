"""
db.models - SQLAlchemy ORM declarations.

Tables keep the legacy shop's physical names and columns so the same
database can be read by the storefront while the import runs.

Tables
------
s_categories               - category tree, self-referencing on `parent`.
s_categories_attributes    - at most one row per category with six
                             free-text attribute columns.
s_articles_categories      - article ↔ category links (a set: unique pair).
s_articles_categories_ro   - denormalized links, one row per ancestor of
                             an assigned category, maintained by
                             services.denormalization.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import (
    Boolean, Column, String, Integer, DateTime, Text, ForeignKey, Index,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, relationship

import config


class Base(DeclarativeBase):
    pass


class Category(Base):
    __tablename__ = "s_categories"

    # ── Tree ───────────────────────────────────────────────────────────
    id        = Column(Integer, primary_key=True, autoincrement=True)
    parent_id = Column("parent", Integer,
                       ForeignKey("s_categories.id", ondelete="CASCADE"),
                       nullable=True, index=True)
    name      = Column("description", String(255), nullable=False)
    position  = Column(Integer, default=0)
    active    = Column(Boolean, default=True)

    # ── SEO / CMS ──────────────────────────────────────────────────────
    meta_title       = Column("metatitle", String(255), nullable=True)
    meta_keywords    = Column("metakeywords", Text, nullable=True)
    meta_description = Column("metadescription", Text, nullable=True)
    cms_headline     = Column("cmsheadline", String(255), nullable=True)
    cms_text         = Column("cmstext", Text, nullable=True)

    # ── Storefront behaviour ───────────────────────────────────────────
    template           = Column(String(255), nullable=True)
    blog               = Column(Boolean, default=False)
    external           = Column(String(255), nullable=True)
    external_target    = Column(String(255), nullable=True)
    hide_filter        = Column("hidefilter", Boolean, default=False)
    hide_top           = Column("hidetop", Boolean, default=False)
    product_box_layout = Column(String(50), nullable=True)

    # ── Timestamps ─────────────────────────────────────────────────────
    added   = Column(DateTime, default=lambda: datetime.now(timezone.utc))
    changed = Column(DateTime, default=lambda: datetime.now(timezone.utc),
                     onupdate=lambda: datetime.now(timezone.utc))

    parent = relationship("Category", remote_side=[id],
                          back_populates="children")
    children = relationship("Category", back_populates="parent")
    attributes = relationship(
        "CategoryAttributes", back_populates="category",
        uselist=False, lazy="selectin",
    )

    __table_args__ = (
        Index("ix_parent_description", "parent", "description"),
    )

    # ── Serialisation ──────────────────────────────────────────────────
    def to_dict(self) -> dict:
        d = {
            "id": self.id,
            "parent": self.parent_id,
            "name": self.name,
            "position": self.position,
            "active": bool(self.active),
            "metaTitle": self.meta_title or "",
            "metaKeywords": self.meta_keywords or "",
            "metaDescription": self.meta_description or "",
            "cmsHeadline": self.cms_headline or "",
            "cmsText": self.cms_text or "",
            "template": self.template or "",
            "blog": bool(self.blog),
            "external": self.external or "",
            "externalTarget": self.external_target or "",
            "hideFilter": bool(self.hide_filter),
            "hideTop": bool(self.hide_top),
            "productBoxLayout": self.product_box_layout or "",
        }
        if self.attributes is not None:
            d["attributes"] = self.attributes.to_dict()
        return d


class CategoryAttributes(Base):
    __tablename__ = "s_categories_attributes"

    id          = Column(Integer, primary_key=True, autoincrement=True)
    category_id = Column("categoryID", Integer,
                         ForeignKey("s_categories.id", ondelete="CASCADE"),
                         nullable=False, unique=True)
    attribute1  = Column(Text, nullable=True)
    attribute2  = Column(Text, nullable=True)
    attribute3  = Column(Text, nullable=True)
    attribute4  = Column(Text, nullable=True)
    attribute5  = Column(Text, nullable=True)
    attribute6  = Column(Text, nullable=True)

    category = relationship("Category", back_populates="attributes")

    def to_dict(self) -> dict:
        return {
            f"attribute{i}": getattr(self, f"attribute{i}")
            for i in range(1, config.ATTRIBUTE_SLOTS + 1)
        }


class ArticleCategory(Base):
    __tablename__ = "s_articles_categories"

    id          = Column(Integer, primary_key=True, autoincrement=True)
    article_id  = Column("articleID", Integer, nullable=False, index=True)
    category_id = Column("categoryID", Integer,
                         ForeignKey("s_categories.id", ondelete="CASCADE"),
                         nullable=False, index=True)

    __table_args__ = (
        UniqueConstraint("articleID", "categoryID", name="uq_article_category"),
    )


class ArticleCategoryRO(Base):
    __tablename__ = "s_articles_categories_ro"

    id                 = Column(Integer, primary_key=True, autoincrement=True)
    article_id         = Column("articleID", Integer, nullable=False, index=True)
    category_id        = Column("categoryID", Integer,
                                ForeignKey("s_categories.id", ondelete="CASCADE"),
                                nullable=False, index=True)
    parent_category_id = Column("parentCategoryID", Integer,
                                ForeignKey("s_categories.id", ondelete="CASCADE"),
                                nullable=False)

    __table_args__ = (
        UniqueConstraint("articleID", "categoryID", "parentCategoryID",
                         name="uq_article_category_ro"),
    )
