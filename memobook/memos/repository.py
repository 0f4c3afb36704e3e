import logging
from typing import Callable, List, Optional

from sqlalchemy import select, desc, delete, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from memobook.memos.mapper import to_memo
from memobook.memos.models import MemoRow, utcnow
from memobook.memos.schemas import Memo, MemoFormData, ALL_CATEGORIES
from memobook.shared.errors import StoreError

logger = logging.getLogger(__name__)

Notify = Callable[[str, dict], None]


def _like_pattern(query: str) -> str:
    escaped = query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class MemoRepository:
    """CRUD and query operations on the `memos` table.

    Every call opens its own session from `session_factory` and closes it
    before returning. Successful mutations call `notify("invalidate", ...)`
    so cached views know to refresh.
    """

    def __init__(self, session_factory: sessionmaker, notify: Optional[Notify] = None):
        self._session_factory = session_factory
        self._notify = notify or (lambda event, data: None)

    def _session(self) -> Session:
        return self._session_factory()

    def _fail(self, message: str, exc: Exception) -> StoreError:
        logger.error("%s: %s", message, exc)
        return StoreError(message)

    def _changed(self, op: str, memo_id: str | None = None):
        self._notify("invalidate", {"op": op, "id": memo_id})

    def _list(self, category: str | None = None) -> List[Memo]:
        stmt = select(MemoRow)
        if category is not None:
            stmt = stmt.where(MemoRow.category == category)
        stmt = stmt.order_by(desc(MemoRow.created_at))
        with self._session() as db:
            return [to_memo(r) for r in db.scalars(stmt).all()]

    def list_all(self) -> List[Memo]:
        try:
            return self._list()
        except SQLAlchemyError as e:
            raise self._fail("Failed to fetch memos", e) from e

    def get_by_id(self, memo_id: str) -> Optional[Memo]:
        try:
            with self._session() as db:
                row = db.get(MemoRow, memo_id)
                return to_memo(row) if row else None
        except SQLAlchemyError as e:
            logger.error("Error fetching memo %s: %s", memo_id, e)
            return None

    def create(self, form: MemoFormData) -> Memo:
        try:
            with self._session() as db:
                row = MemoRow(title=form.title, content=form.content, category=form.category)
                row.tags = form.tags
                db.add(row)
                db.commit()
                db.refresh(row)
                memo = to_memo(row)
        except SQLAlchemyError as e:
            raise self._fail("Failed to create memo", e) from e
        self._changed("create", memo.id)
        return memo

    def update(self, memo_id: str, form: MemoFormData) -> Memo:
        try:
            with self._session() as db:
                row = db.get(MemoRow, memo_id)
                if not row:
                    logger.error("Error updating memo: %s not found", memo_id)
                    raise StoreError("Failed to update memo")
                row.title = form.title
                row.content = form.content
                row.category = form.category
                row.tags = form.tags
                # refreshed even when the fields are unchanged
                row.updated_at = utcnow()
                db.commit()
                db.refresh(row)
                memo = to_memo(row)
        except SQLAlchemyError as e:
            raise self._fail("Failed to update memo", e) from e
        self._changed("update", memo_id)
        return memo

    def delete(self, memo_id: str) -> None:
        try:
            with self._session() as db:
                db.execute(delete(MemoRow).where(MemoRow.id == memo_id))
                db.commit()
        except SQLAlchemyError as e:
            raise self._fail("Failed to delete memo", e) from e
        self._changed("delete", memo_id)

    def list_by_category(self, category: str) -> List[Memo]:
        try:
            return self._list(None if category == ALL_CATEGORIES else category)
        except SQLAlchemyError as e:
            raise self._fail("Failed to fetch memos by category", e) from e

    def search(self, query: str) -> List[Memo]:
        # title/content only; tag matching happens client-side in MemoController
        pattern = _like_pattern(query)
        stmt = (
            select(MemoRow)
            .where(or_(MemoRow.title.ilike(pattern, escape="\\"), MemoRow.content.ilike(pattern, escape="\\")))
            .order_by(desc(MemoRow.created_at))
        )
        try:
            with self._session() as db:
                return [to_memo(r) for r in db.scalars(stmt).all()]
        except SQLAlchemyError as e:
            raise self._fail("Failed to search memos", e) from e

    def update_summary(self, memo_id: str, summary: str) -> Memo:
        try:
            with self._session() as db:
                row = db.get(MemoRow, memo_id)
                if not row:
                    logger.error("Error saving memo summary: %s not found", memo_id)
                    raise StoreError("Failed to save memo summary")
                row.summary = summary
                db.commit()
                db.refresh(row)
                memo = to_memo(row)
        except SQLAlchemyError as e:
            raise self._fail("Failed to save memo summary", e) from e
        self._changed("summary", memo_id)
        return memo

    def delete_all(self) -> None:
        try:
            with self._session() as db:
                db.execute(delete(MemoRow))
                db.commit()
        except SQLAlchemyError as e:
            raise self._fail("Failed to clear all memos", e) from e
        self._changed("clear")
