"""Tests for insert_or_update_by_key."""

from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker

from app.db import Base
from app.models.snippet import Tag
from app.models.weather_cache import WeatherCacheEntry
from app.utils.db.upsert import insert_or_update_by_key


def test_inserts_when_key_absent(db):
    tag = insert_or_update_by_key(db, Tag, "name", "python")
    assert tag.id is not None
    assert db.query(Tag).count() == 1


def test_returns_existing_row_for_same_key(db):
    first = insert_or_update_by_key(db, Tag, "name", "python")
    second = insert_or_update_by_key(db, Tag, "name", "python")
    assert first.id == second.id
    assert db.query(Tag).count() == 1


def test_overwrites_values_on_conflict(db):
    insert_or_update_by_key(db, WeatherCacheEntry, "city", "reno", {"data": "{}"})
    db.commit()
    entry = insert_or_update_by_key(
        db, WeatherCacheEntry, "city", "reno", {"data": '{"v": 2}'}
    )
    db.commit()
    assert entry.data == '{"v": 2}'
    assert db.query(WeatherCacheEntry).count() == 1


def test_key_committed_by_another_session_is_reused(tmp_path):
    """A row committed elsewhere between the lookup and the insert is returned."""
    engine = create_engine(f"sqlite:///{tmp_path / 'upsert.db'}")
    Base.metadata.create_all(bind=engine)
    make_session = sessionmaker(bind=engine, expire_on_commit=False)
    ours, theirs = make_session(), make_session()
    competing = []

    def commit_same_key_elsewhere(session, flush_context, instances):
        if not competing:
            theirs.add(Tag(name="fresh"))
            theirs.commit()
            competing.append(True)

    event.listen(ours, "before_flush", commit_same_key_elsewhere)
    try:
        tag = insert_or_update_by_key(ours, Tag, "name", "fresh")
        ours.commit()

        assert competing
        assert tag.id is not None
        assert ours.query(Tag).filter(Tag.name == "fresh").count() == 1
    finally:
        ours.close()
        theirs.close()
        engine.dispose()


def test_lost_race_still_applies_values(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'upsert.db'}")
    Base.metadata.create_all(bind=engine)
    make_session = sessionmaker(bind=engine, expire_on_commit=False)
    ours, theirs = make_session(), make_session()
    competing = []

    def commit_same_key_elsewhere(session, flush_context, instances):
        if not competing:
            theirs.add(WeatherCacheEntry(city="reno", data='{"v": 1}'))
            theirs.commit()
            competing.append(True)

    event.listen(ours, "before_flush", commit_same_key_elsewhere)
    try:
        entry = insert_or_update_by_key(
            ours, WeatherCacheEntry, "city", "reno", {"data": '{"v": 2}'}
        )
        ours.commit()

        assert ours.query(WeatherCacheEntry).count() == 1
        assert ours.query(WeatherCacheEntry).one().data == '{"v": 2}'
        assert entry.data == '{"v": 2}'
    finally:
        ours.close()
        theirs.close()
        engine.dispose()
