from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from starlette.responses import StreamingResponse

from memobook.shared import sse
from memobook.shared.db import SessionLocal
from memobook.shared.errors import StoreError
from memobook.shared.http import ok, err
from memobook.memos.repository import MemoRepository
from memobook.memos.schemas import Memo, MemoFormData, SummaryUpdate, ALL_CATEGORIES

router = APIRouter(prefix="/memos", tags=["Memos"])

def get_repository() -> MemoRepository:
    return MemoRepository(SessionLocal, notify=sse.notifier(sse.MEMOS_CHANNEL))

def _store_failed(e: StoreError):
    return err(e.message, code="store_error", status=500)

@router.get("", response_model=List[Memo])
def list_memos(
    category: str = Query(ALL_CATEGORIES, description="Category to filter by, or 'all'"),
    repo: MemoRepository = Depends(get_repository),
):
    try:
        return repo.list_by_category(category)
    except StoreError as e:
        return _store_failed(e)

@router.get("/search", response_model=List[Memo])
def search_memos(q: str = Query("", description="Substring matched against title and content"), repo: MemoRepository = Depends(get_repository)):
    try:
        return repo.search(q)
    except StoreError as e:
        return _store_failed(e)

@router.get("/events")
async def memo_events():
    return StreamingResponse(sse.sse_stream(sse.MEMOS_CHANNEL), media_type="text/event-stream")

@router.get("/{memo_id}", response_model=Memo)
def get_memo(memo_id: str, repo: MemoRepository = Depends(get_repository)):
    memo = repo.get_by_id(memo_id)
    if not memo:
        raise HTTPException(404, "Memo not found")
    return memo

@router.post("", response_model=Memo, status_code=201)
def create_memo(payload: MemoFormData, repo: MemoRepository = Depends(get_repository)):
    try:
        return repo.create(payload)
    except StoreError as e:
        return _store_failed(e)

@router.put("/{memo_id}", response_model=Memo)
def update_memo(memo_id: str, payload: MemoFormData, repo: MemoRepository = Depends(get_repository)):
    try:
        return repo.update(memo_id, payload)
    except StoreError as e:
        return _store_failed(e)

@router.put("/{memo_id}/summary", response_model=Memo)
def save_memo_summary(memo_id: str, payload: SummaryUpdate, repo: MemoRepository = Depends(get_repository)):
    try:
        return repo.update_summary(memo_id, payload.summary)
    except StoreError as e:
        return _store_failed(e)

@router.delete("/{memo_id}")
def delete_memo(memo_id: str, repo: MemoRepository = Depends(get_repository)):
    try:
        repo.delete(memo_id)
    except StoreError as e:
        return _store_failed(e)
    return ok({"deleted": memo_id})

@router.delete("")
def clear_memos(repo: MemoRepository = Depends(get_repository)):
    try:
        repo.delete_all()
    except StoreError as e:
        return _store_failed(e)
    return ok({"deleted": "all"})
