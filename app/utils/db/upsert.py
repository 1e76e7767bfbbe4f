"""Insert-or-update by a unique key, independent of the database dialect."""

from __future__ import annotations

from typing import Any, Mapping, Type, TypeVar

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

ModelType = TypeVar("ModelType")


def insert_or_update_by_key(
    db: Session,
    model: Type[ModelType],
    key_attr: str,
    key: Any,
    values: Mapping[str, Any] | None = None,
) -> ModelType:
    """
    Return the row of ``model`` whose unique ``key_attr`` equals ``key``.

    An existing row is overwritten with ``values``; otherwise a new row is
    added. The insert runs in a SAVEPOINT: if another transaction commits the
    same key first, the savepoint is rolled back and that row is updated
    instead. The session is flushed but not committed.
    """
    values = dict(values or {})
    column = getattr(model, key_attr)
    instance = db.query(model).filter(column == key).first()
    if instance is None:
        try:
            with db.begin_nested():
                instance = model(**{key_attr: key}, **values)
                db.add(instance)
                db.flush()
            return instance
        except IntegrityError:
            # Lost the insert race on the key; update the committed row.
            instance = db.query(model).filter(column == key).one()

    for attr, value in values.items():
        setattr(instance, attr, value)
    db.flush()
    return instance
