# memobook/summarize/api.py
from fastapi import APIRouter, Depends
from pydantic import BaseModel
from memobook.shared.http import fail
from memobook.shared.errors import ConfigError, GatewayError
from .service import SummaryGateway

router = APIRouter(prefix="/api", tags=["Summarize"])

MISSING_CONTENT_MESSAGE = "Memo content is required."

def get_gateway() -> SummaryGateway:
    return SummaryGateway.from_settings()

class SummarizeIn(BaseModel):
    content: str | None = None

class SummarizeOut(BaseModel):
    summary: str

@router.post("/summarize", response_model=SummarizeOut)
def api_summarize(inb: SummarizeIn, gateway: SummaryGateway = Depends(get_gateway)):
    if not (inb.content or "").strip():
        return fail(MISSING_CONTENT_MESSAGE, status=400)
    try:
        return {"summary": gateway.summarize(inb.content)}
    except (ConfigError, GatewayError) as e:
        return fail(e.message, status=500)
