"""In-memory memo state for a presentation layer.

The controller keeps the loaded memo list as the single source of truth for
rendering. Mutations go through the repository first and then patch the
local list from the returned value; the full list is never re-fetched after
a mutation.
"""

from __future__ import annotations

import asyncio
import logging
from typing import List, Optional

from memobook.memos.repository import MemoRepository
from memobook.memos.schemas import ALL_CATEGORIES, Memo, MemoFormData, MemoStats
from memobook.shared.errors import ConfigError, GatewayError, StoreError
from memobook.summarize.service import SummaryGateway

logger = logging.getLogger(__name__)

MEMO_NOT_LOADED_MESSAGE = "Memo is not loaded."
NO_GATEWAY_MESSAGE = "Summarization is not available."


def matches_query(memo: Memo, query: str) -> bool:
    """Case-insensitive substring match on title, content or any tag."""
    q = query.lower()
    return (
        q in memo.title.lower()
        or q in memo.content.lower()
        or any(q in tag.lower() for tag in memo.tags)
    )


class MemoController:
    def __init__(self, repository: MemoRepository, gateway: Optional[SummaryGateway] = None):
        self._repo = repository
        self._gateway = gateway
        self.all_memos: List[Memo] = []
        self.loading = False
        self.search_query = ""
        self.category_filter = ALL_CATEGORIES
        self.summary_error: str | None = None

    async def load(self) -> None:
        self.loading = True
        try:
            self.all_memos = await asyncio.to_thread(self._repo.list_all)
        except StoreError as e:
            logger.error("Failed to load memos: %s", e)
        finally:
            self.loading = False

    async def create(self, form: MemoFormData) -> Memo:
        memo = await asyncio.to_thread(self._repo.create, form)
        self.all_memos = [memo, *self.all_memos]
        return memo

    async def update(self, memo_id: str, form: MemoFormData) -> Memo:
        memo = await asyncio.to_thread(self._repo.update, memo_id, form)
        self._replace(memo)
        return memo

    async def delete(self, memo_id: str) -> None:
        await asyncio.to_thread(self._repo.delete, memo_id)
        self.all_memos = [m for m in self.all_memos if m.id != memo_id]

    async def delete_all(self) -> None:
        await asyncio.to_thread(self._repo.delete_all)
        self.all_memos = []
        self.search_query = ""
        self.category_filter = ALL_CATEGORIES

    def set_search_query(self, query: str) -> None:
        self.search_query = query

    def set_category_filter(self, category: str) -> None:
        self.category_filter = category

    def find(self, memo_id: str) -> Optional[Memo]:
        return next((m for m in self.all_memos if m.id == memo_id), None)

    def filtered_view(self) -> List[Memo]:
        memos = self.all_memos
        if self.category_filter != ALL_CATEGORIES:
            memos = [m for m in memos if m.category == self.category_filter]
        if self.search_query.strip():
            memos = [m for m in memos if matches_query(m, self.search_query)]
        return memos

    def stats(self) -> MemoStats:
        by_category: dict[str, int] = {}
        for m in self.all_memos:
            by_category[m.category] = by_category.get(m.category, 0) + 1
        return MemoStats(
            total=len(self.all_memos),
            by_category=by_category,
            filtered=len(self.filtered_view()),
        )

    async def generate_summary(self, memo_id: str) -> str | None:
        """Ask the gateway for a fresh summary; failures land in `summary_error`."""
        memo = self.find(memo_id)
        if memo is None:
            self.summary_error = MEMO_NOT_LOADED_MESSAGE
            return None
        if self._gateway is None:
            self.summary_error = NO_GATEWAY_MESSAGE
            return None
        self.summary_error = None
        try:
            return await asyncio.to_thread(self._gateway.summarize, memo.content)
        except (ConfigError, GatewayError) as e:
            logger.error("Summary generation error: %s", e)
            self.summary_error = e.message
            return None

    async def save_summary(self, memo_id: str, summary: str) -> Memo:
        memo = await asyncio.to_thread(self._repo.update_summary, memo_id, summary)
        self._replace(memo)
        return memo

    def _replace(self, memo: Memo) -> None:
        self.all_memos = [memo if m.id == memo.id else m for m in self.all_memos]
