from sqlalchemy import select

from db.models import ArticleCategoryRO, Category
from services.denormalization import CategoryDenormalization


def _ro_rows(session):
    return sorted(
        (r.article_id, r.category_id, r.parent_category_id)
        for r in session.execute(select(ArticleCategoryRO)).scalars()
    )


def test_category_path_walks_to_root(session, make_category):
    root = make_category("Root")
    shoes = make_category("Shoes", parent=root.id)
    boots = make_category("Boots", parent=shoes.id)

    denorm = CategoryDenormalization(session)
    assert denorm.category_path(boots.id) == [boots.id, shoes.id, root.id]
    assert denorm.category_path(12345) == []


def test_category_path_stops_on_cycle(session, make_category):
    a = make_category("A")
    b = make_category("B", parent=a.id)
    a.parent_id = b.id
    session.commit()

    assert CategoryDenormalization(session).category_path(a.id) == [a.id, b.id]


def test_add_assignment_writes_one_row_per_ancestor(session, make_category):
    root = make_category("Root")
    shoes = make_category("Shoes", parent=root.id)

    denorm = CategoryDenormalization(session)
    assert denorm.add_assignment(7, shoes.id) == 2
    session.commit()

    assert _ro_rows(session) == sorted([(7, shoes.id, shoes.id), (7, root.id, shoes.id)])


def test_add_assignment_is_idempotent(session, make_category):
    root = make_category("Root")
    denorm = CategoryDenormalization(session)
    denorm.disable_transactions()

    denorm.add_assignment(7, root.id)
    assert denorm.add_assignment(7, root.id) == 0
    assert _ro_rows(session) == [(7, root.id, root.id)]


def test_transactions_toggle(session, make_category):
    root = make_category("Root")
    denorm = CategoryDenormalization(session)
    assert denorm.transactions_enabled

    # flushed only: a rollback discards it
    denorm.add_assignment(1, root.id)
    session.rollback()
    assert _ro_rows(session) == []

    # committed immediately: survives a rollback
    denorm.disable_transactions()
    assert not denorm.transactions_enabled
    denorm.add_assignment(1, root.id)
    session.rollback()
    assert _ro_rows(session) == [(1, root.id, root.id)]

    denorm.enable_transactions()
    assert denorm.transactions_enabled


def test_importer_link_reaches_denormalized_table(session, make_category):
    from import_engine.category_importer import CategoryImporter, LinkOutcome

    root = make_category("Root")
    child = make_category("Child", parent=root.id)
    importer = CategoryImporter(session, CategoryDenormalization(session))

    assert importer.assign_articles_to_category(9, child.id) is LinkOutcome.LINKED
    session.commit()

    assert _ro_rows(session) == sorted([(9, child.id, child.id), (9, root.id, child.id)])
    assert session.get(Category, child.id) is not None
