from typing import Any, List, Optional

from pydantic import BaseModel, Field

from relay_core.resources.moods import MAX_DAYS


class HistoryMessage(BaseModel):
    role: str = Field(..., examples=["user", "assistant"])
    content: str


class RelayBody(BaseModel):
    """chat-therapist 的请求体（供文档与客户端使用，路由本身读取原始 JSON）。"""

    message: str
    conversationHistory: List[HistoryMessage] = []


class MoodSummaryRequest(BaseModel):
    # 条目的形状由 MoodEntry.from_payload 校验，错误统一为 400 {"error"}
    entries: List[Any] = []
    days: Optional[int] = Field(default=30, ge=1, le=MAX_DAYS)
