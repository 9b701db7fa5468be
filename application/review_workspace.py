from __future__ import annotations

import threading
from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone
from typing import Optional

from config.constant import DEFAULT_CODE, DEFAULT_LANGUAGE
from config.logging import logger
from domain.errors import AppError
from domain.models import AnalysisResult, ReviewRecord
from domain.ports import CodeReviewPort, HistoryRepositoryPort

_id_lock = threading.Lock()
_last_minted: Optional[datetime] = None


def _iso(ts: datetime) -> str:
    # cùng định dạng với Date.toISOString(): 2024-01-01T12:00:00.000Z
    return ts.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def utc_now_iso() -> str:
    return _iso(datetime.now(timezone.utc))


def mint_review_id() -> str:
    """Timestamp id, strictly increasing for the lifetime of the process."""
    global _last_minted
    with _id_lock:
        now = datetime.now(timezone.utc)
        now = now.replace(microsecond=now.microsecond // 1000 * 1000)
        if _last_minted is not None and now <= _last_minted:
            now = _last_minted + timedelta(milliseconds=1)
        _last_minted = now
        return _iso(now)


@dataclass
class WorkspaceState:
    review_id: str
    code: str = DEFAULT_CODE
    language: str = DEFAULT_LANGUAGE
    result: Optional[AnalysisResult] = None
    error: Optional[str] = None
    is_loading: bool = False
    history_saved: Optional[bool] = None


def start_session(selected: Optional[ReviewRecord] = None) -> WorkspaceState:
    if selected is None:
        return WorkspaceState(review_id=mint_review_id())
    return WorkspaceState(
        review_id=selected.id,
        code=selected.source_code,
        language=selected.language,
        result=selected.result,
    )


def submit_review(
    state: WorkspaceState,
    service: CodeReviewPort,
    history: HistoryRepositoryPort,
    user_id: str,
) -> WorkspaceState:
    """Analyze, then record history. A failed save never hides the analysis result."""
    if state.is_loading:
        return state
    if not state.code.strip():
        return replace(state, error="Code cannot be empty.")

    state = replace(state, is_loading=True, error=None, result=None, history_saved=None)
    try:
        result = service.analyze(state.language, state.code)
    except AppError as e:
        return replace(state, is_loading=False, error=e.message)

    state = replace(state, is_loading=False, result=result)
    record = ReviewRecord(
        id=state.review_id or mint_review_id(),
        created_at=utc_now_iso(),
        language=state.language,
        source_code=state.code,
        result=result,
    )
    try:
        history.save(user_id, record)
    except Exception as e:
        # lưu history lỗi không được che mất kết quả đã phân tích
        logger.exception(f"[review] History not recorded for {record.id}: {e}")
        return replace(state, history_saved=False)
    return replace(state, history_saved=True)
