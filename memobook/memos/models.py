from datetime import datetime, timezone
from sqlalchemy import String, DateTime, Text
from sqlalchemy.orm import Mapped, mapped_column
from memobook.shared.db import Base
import uuid, json

def _id32() -> str:
    return uuid.uuid4().hex  # 32 chars

def utcnow() -> datetime:
    return datetime.now(timezone.utc)

class MemoRow(Base):
    __tablename__ = "memos"
    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_id32)
    title: Mapped[str] = mapped_column(String(200))
    content: Mapped[str] = mapped_column(Text, default="")
    category: Mapped[str] = mapped_column(String(16), default="other", index=True)
    # tags live as JSON text (SQLite has no array type); NULL means "never set"
    tags_json: Mapped[str | None] = mapped_column(Text, nullable=True, default="[]")
    summary: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)
    created_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True, default=utcnow, index=True)
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True, default=utcnow, onupdate=utcnow)

    @property
    def tags(self) -> list[str] | None:
        if self.tags_json is None:
            return None
        try:
            return json.loads(self.tags_json)
        except ValueError:
            return []

    @tags.setter
    def tags(self, val: list[str] | None):
        self.tags_json = json.dumps(list(val or []), ensure_ascii=False)
