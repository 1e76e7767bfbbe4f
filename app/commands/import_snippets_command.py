"""Import code snippets from a CSV export."""

from __future__ import annotations

import argparse
import csv
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Mapping

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.schemas.snippet import SnippetCreate
from app.services.snippet_service import SnippetService

TAG_SEPARATOR = re.compile(r"[;,]")


@dataclass
class ImportResult:
    imported: int = 0
    failed: int = 0
    errors: List[str] = field(default_factory=list)


def parse_tags(raw: str | None) -> List[str]:
    """Split a tags cell on ';' or ','; blank entries are dropped."""
    if not raw:
        return []
    return [t.strip() for t in TAG_SEPARATOR.split(raw) if t.strip()]


class ImportSnippetsCommand:
    """
    Command to create snippets from CSV rows.

    Expects a header with title, code and language columns; description and
    tags are optional. A bad row is logged and counted, the rest still import.
    """

    def __init__(self, db: Session) -> None:
        self.db = db
        self.snippet_service = SnippetService(db)
        self.logger = logging.getLogger(__name__)

    def execute(self, path: Path) -> ImportResult:
        with path.open(newline="", encoding="utf-8") as fh:
            return self.import_rows(csv.DictReader(fh))

    def import_rows(self, rows: Iterable[Mapping[str, str]]) -> ImportResult:
        result = ImportResult()
        for line_no, row in enumerate(rows, start=2):
            title = (row.get("title") or "").strip()
            try:
                data = SnippetCreate(
                    title=title,
                    description=(row.get("description") or "").strip() or None,
                    code=row.get("code") or "",
                    language=(row.get("language") or "").strip(),
                )
                self.snippet_service.create_snippet(data, parse_tags(row.get("tags")))
            except (ValidationError, SQLAlchemyError) as e:
                result.failed += 1
                result.errors.append(f"line {line_no}: {e}")
                self.logger.warning("Failed to import snippet %r: %s", title, e)
                continue
            result.imported += 1
            self.logger.info("Imported snippet: %s", title)
        self.logger.info(
            "Snippet import finished: %d imported, %d failed",
            result.imported,
            result.failed,
        )
        return result


def _parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("csv_path", type=Path, help="CSV file with a header row")
    return parser.parse_args(argv)


def main(argv: List[str] | None = None) -> int:
    from app.infra.logging_config import LoggingConfig
    from app.utils.db.db_session_helper import db_session

    LoggingConfig()
    args = _parse_args(argv)
    with db_session() as db:
        result = ImportSnippetsCommand(db).execute(args.csv_path)
    return 0 if result.failed == 0 else 1


if __name__ == "__main__":
    raise SystemExit(main())
