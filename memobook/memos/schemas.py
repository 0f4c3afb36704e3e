from pydantic import BaseModel, Field
from typing import Optional, List, Dict

MEMO_CATEGORIES: Dict[str, str] = {
    "personal": "Personal",
    "work": "Work",
    "study": "Study",
    "idea": "Idea",
    "other": "Other",
}
ALL_CATEGORIES = "all"

class MemoFormData(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    content: str = ""
    category: str = Field(default="other", pattern=f"^({'|'.join(MEMO_CATEGORIES)})$")
    tags: List[str] = Field(default_factory=list)

class Memo(BaseModel):
    id: str
    title: str
    content: str
    category: str
    tags: List[str] = Field(default_factory=list)
    summary: Optional[str] = None
    created_at: str  # ISO 8601
    updated_at: str  # ISO 8601

class SummaryUpdate(BaseModel):
    summary: str = Field(min_length=1)

class MemoStats(BaseModel):
    total: int
    by_category: Dict[str, int]
    filtered: int
