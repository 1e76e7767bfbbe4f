"""Tests for SnippetService."""

import pytest

from app.core.errors import NotFoundError
from app.models.snippet import Snippet, SnippetTag, Tag
from app.schemas.snippet import SnippetUpdate
from app.services.snippet_service import SnippetService
from tests.fixtures.snippet_fixtures import snippet_data


def test_create_snippet_round_trips_fields_and_tags(db, faker):
    """create then get returns every field and the exact tag set."""
    svc = SnippetService(db)
    data = snippet_data(faker, title="Fetch JSON", language="typescript")
    created = svc.create_snippet(data, ["web", "async", "typescript"])

    found = svc.get_snippet(created.id)
    assert found.title == "Fetch JSON"
    assert found.description == data.description
    assert found.code == data.code
    assert found.language == "typescript"
    assert set(found.tags) == {"web", "async", "typescript"}
    assert found.created_at is not None
    assert found.updated_at is not None


def test_create_snippet_without_tags(db, faker):
    svc = SnippetService(db)
    created = svc.create_snippet(snippet_data(faker), [])
    assert created.tags == []
    assert db.query(SnippetTag).count() == 0


def test_create_snippet_reuses_existing_tags(db, setup_snippet, faker):
    """Tags are created on demand and shared by name."""
    svc = SnippetService(db)
    svc.create_snippet(snippet_data(faker), ["python", "new-tag"])
    names = sorted(t.name for t in db.query(Tag).all())
    assert names == ["basics", "new-tag", "python"]


def test_create_snippet_duplicate_tag_names(db, faker):
    """Repeated names resolve to a single tag and a single association."""
    svc = SnippetService(db)
    created = svc.create_snippet(snippet_data(faker), ["dup", "dup"])
    assert created.tags == ["dup"]
    assert db.query(Tag).filter(Tag.name == "dup").count() == 1


def test_tag_names_are_case_sensitive(db, faker):
    svc = SnippetService(db)
    created = svc.create_snippet(snippet_data(faker), ["Python", "python"])
    assert sorted(created.tags) == ["Python", "python"]
    assert db.query(Tag).count() == 2


def test_get_snippet_not_found(db):
    svc = SnippetService(db)
    with pytest.raises(NotFoundError):
        svc.get_snippet(999)


def test_list_snippets_ordered_by_updated_at_desc(db, setup_snippets):
    svc = SnippetService(db)
    titles = [s.title for s in svc.list_snippets()]
    assert titles == ["Binary search", "Debounce", "Quick sort"]


def test_list_snippets_search_matches_title_or_description(db, setup_snippets):
    svc = SnippetService(db)
    by_title = svc.list_snippets(search="Debounce")
    assert [s.title for s in by_title] == ["Debounce"]

    by_description = svc.list_snippets(search="in place")
    assert [s.title for s in by_description] == ["Quick sort"]


def test_list_snippets_search_treats_wildcards_literally(db, setup_snippets):
    svc = SnippetService(db)
    assert svc.list_snippets(search="%") == []


def test_list_snippets_tag_filter_keeps_all_tags(db, setup_snippets):
    """Filtering by tag returns matching snippets with their full tag list."""
    svc = SnippetService(db)
    results = svc.list_snippets(tag="algorithms")
    assert {s.title for s in results} == {"Quick sort", "Binary search"}
    binary = next(s for s in results if s.title == "Binary search")
    assert set(binary.tags) == {"python", "algorithms", "search"}


def test_list_snippets_search_and_tag_combined(db, setup_snippets):
    svc = SnippetService(db)
    results = svc.list_snippets(search="search", tag="python")
    assert [s.title for s in results] == ["Binary search"]
    assert svc.list_snippets(search="Debounce", tag="python") == []


def test_list_snippets_unknown_tag(db, setup_snippets):
    svc = SnippetService(db)
    assert svc.list_snippets(tag="rust") == []


def test_update_snippet_replaces_tag_set(db, setup_snippet, faker):
    """After update, exactly the new tags remain attached."""
    svc = SnippetService(db)
    before = setup_snippet.updated_at
    data = SnippetUpdate(
        title="Hello again", description=None, code="print(1)", language="python"
    )
    updated = svc.update_snippet(setup_snippet.id, data, ["python", "io"])

    assert updated.title == "Hello again"
    assert updated.description is None
    assert set(updated.tags) == {"python", "io"}
    assert updated.updated_at >= before
    assert set(svc.get_snippet(setup_snippet.id).tags) == {"python", "io"}


def test_update_snippet_keeps_orphaned_tags(db, setup_snippet):
    svc = SnippetService(db)
    data = SnippetUpdate(title="t", code="c", language="python")
    svc.update_snippet(setup_snippet.id, data, [])
    counts = {t.name: t.count for t in svc.list_tags()}
    assert counts == {"basics": 0, "python": 0}


def test_update_snippet_moves_it_to_front(db, setup_snippets):
    svc = SnippetService(db)
    oldest = setup_snippets[0]
    data = SnippetUpdate(title=oldest.title, code="x", language="python")
    svc.update_snippet(oldest.id, data, oldest.tags)
    assert svc.list_snippets()[0].id == oldest.id


def test_update_snippet_not_found(db):
    svc = SnippetService(db)
    data = SnippetUpdate(title="t", code="c", language="python")
    with pytest.raises(NotFoundError):
        svc.update_snippet(12345, data, ["x"])
    assert db.query(Tag).count() == 0


def test_delete_snippet_removes_rows_and_decrements_counts(db, setup_snippets):
    svc = SnippetService(db)
    target = setup_snippets[2]
    before = {t.name: t.count for t in svc.list_tags()}

    svc.delete_snippet(target.id)

    assert target.id not in [s.id for s in svc.list_snippets()]
    assert db.query(SnippetTag).filter(SnippetTag.snippet_id == target.id).count() == 0
    after = {t.name: t.count for t in svc.list_tags()}
    assert after["python"] == before["python"] - 1
    assert after["algorithms"] == before["algorithms"] - 1
    assert after["search"] == 0


def test_delete_snippet_not_found(db):
    svc = SnippetService(db)
    with pytest.raises(NotFoundError):
        svc.delete_snippet(4242)


def test_list_tags_counts_and_order(db, setup_snippets):
    svc = SnippetService(db)
    tags = svc.list_tags()
    assert [t.name for t in tags] == ["algorithms", "javascript", "python", "search"]
    counts = {t.name: t.count for t in tags}
    assert counts == {"algorithms": 2, "javascript": 1, "python": 2, "search": 1}


def test_create_snippet_rolls_back_on_failure(db, faker, monkeypatch):
    """A failure while attaching tags leaves no snippet row behind."""
    from sqlalchemy.exc import SQLAlchemyError

    svc = SnippetService(db)

    def boom(*args, **kwargs):
        raise SQLAlchemyError("tag write failed")

    monkeypatch.setattr("app.services.snippet_service.insert_or_update_by_key", boom)
    with pytest.raises(SQLAlchemyError):
        svc.create_snippet(snippet_data(faker), ["python"])
    assert db.query(Snippet).count() == 0
