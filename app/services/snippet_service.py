"""Service for snippets and their many-to-many tags."""

from __future__ import annotations

from collections import defaultdict
from typing import Dict, Iterable, List, Optional

from sqlalchemy import case, func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session

from app.core.errors import NotFoundError
from app.infra.logging_config import get_logger
from app.models.mixins import utcnow
from app.models.snippet import Snippet, SnippetTag, Tag
from app.schemas.snippet import SnippetCreate, SnippetRead, SnippetUpdate, TagRead
from app.utils.db.upsert import insert_or_update_by_key

logger = get_logger("snippets")


class SnippetService:
    """
    Manages snippets and tags.

    Writes that touch more than one table run in a single transaction: any
    failure rolls back the snippet row together with its tag and join rows.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    # --- reads ---

    def get_snippets_query(
        self,
        search: Optional[str] = None,
        tag: Optional[str] = None,
    ) -> Query[Snippet]:
        """Build the filtered listing query, newest update first."""
        query = (
            self.db.query(Snippet)
            .outerjoin(SnippetTag, Snippet.id == SnippetTag.snippet_id)
            .outerjoin(Tag, SnippetTag.tag_id == Tag.id)
        )
        if search:
            query = query.filter(
                or_(
                    Snippet.title.contains(search, autoescape=True),
                    Snippet.description.contains(search, autoescape=True),
                )
            )
        query = query.group_by(Snippet.id)
        if tag:
            query = query.having(func.sum(case((Tag.name == tag, 1), else_=0)) > 0)
        return query.order_by(Snippet.updated_at.desc(), Snippet.id.desc())

    def list_snippets(
        self,
        search: Optional[str] = None,
        tag: Optional[str] = None,
    ) -> List[SnippetRead]:
        """List snippets with their tag names, optionally filtered."""
        snippets = self.get_snippets_query(search=search, tag=tag).all()
        tags_by_snippet = self._tag_names_for([s.id for s in snippets])
        return [self._to_read(s, tags_by_snippet.get(s.id, [])) for s in snippets]

    def get_snippet(self, snippet_id: int) -> SnippetRead:
        """Fetch one snippet with its tags. Raises NotFoundError if absent."""
        snippet = self.db.query(Snippet).filter(Snippet.id == snippet_id).first()
        if snippet is None:
            raise NotFoundError("Snippet not found")
        return self._to_read(snippet, self._tag_names_for([snippet.id]).get(snippet.id, []))

    def list_tags(self) -> List[TagRead]:
        """All tags with the number of snippets referencing each, by name."""
        rows = (
            self.db.query(Tag.id, Tag.name, func.count(SnippetTag.id))
            .outerjoin(SnippetTag, Tag.id == SnippetTag.tag_id)
            .group_by(Tag.id, Tag.name)
            .order_by(Tag.name)
            .all()
        )
        return [TagRead(id=id_, name=name, count=count) for id_, name, count in rows]

    # --- writes ---

    def create_snippet(self, data: SnippetCreate, tag_names: List[str]) -> SnippetRead:
        """Insert a snippet and its tag associations atomically."""
        try:
            snippet = Snippet(**data.model_dump())
            self.db.add(snippet)
            self.db.flush()
            self._attach_tags(snippet, tag_names)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("Create snippet failed")
            raise
        self.db.refresh(snippet)
        return self.get_snippet(snippet.id)

    def update_snippet(
        self,
        snippet_id: int,
        data: SnippetUpdate,
        tag_names: List[str],
    ) -> SnippetRead:
        """
        Overwrite a snippet's fields and replace its whole tag set.

        Existing join rows are deleted and re-created from ``tag_names``;
        there is no diffing against the previous set.
        """
        try:
            snippet = self.db.query(Snippet).filter(Snippet.id == snippet_id).first()
            if snippet is None:
                raise NotFoundError("Snippet not found")

            for field, value in data.model_dump().items():
                setattr(snippet, field, value)
            snippet.updated_at = utcnow()

            self.db.query(SnippetTag).filter(
                SnippetTag.snippet_id == snippet_id
            ).delete(synchronize_session=False)
            self._attach_tags(snippet, tag_names)
            self.db.commit()
        except (NotFoundError, SQLAlchemyError):
            self.db.rollback()
            raise
        return self.get_snippet(snippet_id)

    def delete_snippet(self, snippet_id: int) -> None:
        """Delete join rows, then the snippet. Raises NotFoundError if absent."""
        try:
            self.db.query(SnippetTag).filter(
                SnippetTag.snippet_id == snippet_id
            ).delete(synchronize_session=False)
            deleted = (
                self.db.query(Snippet)
                .filter(Snippet.id == snippet_id)
                .delete(synchronize_session=False)
            )
            if not deleted:
                raise NotFoundError("Snippet not found")
            self.db.commit()
        except (NotFoundError, SQLAlchemyError):
            self.db.rollback()
            raise

    # --- helpers ---

    def _attach_tags(self, snippet: Snippet, tag_names: Iterable[str]) -> None:
        # One upsert per submitted name; repeated names map to one join row.
        linked: set[int] = set()
        for name in tag_names:
            tag = insert_or_update_by_key(self.db, Tag, "name", name)
            if tag.id in linked:
                continue
            linked.add(tag.id)
            self.db.add(SnippetTag(snippet_id=snippet.id, tag_id=tag.id))
        self.db.flush()

    def _tag_names_for(self, snippet_ids: List[int]) -> Dict[int, List[str]]:
        if not snippet_ids:
            return {}
        rows = (
            self.db.query(SnippetTag.snippet_id, Tag.name)
            .join(Tag, SnippetTag.tag_id == Tag.id)
            .filter(SnippetTag.snippet_id.in_(snippet_ids))
            .order_by(SnippetTag.id)
            .all()
        )
        result: Dict[int, List[str]] = defaultdict(list)
        for snippet_id, name in rows:
            result[snippet_id].append(name)
        return result

    @staticmethod
    def _to_read(snippet: Snippet, tags: List[str]) -> SnippetRead:
        return SnippetRead(
            id=snippet.id,
            title=snippet.title,
            description=snippet.description,
            code=snippet.code,
            language=snippet.language,
            created_at=snippet.created_at,
            updated_at=snippet.updated_at,
            tags=tags,
        )
