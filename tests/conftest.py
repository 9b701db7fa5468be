from __future__ import annotations

import json
from typing import List, Optional

import pytest

from domain.models import AnalysisResult, Issue, ReviewRecord

VALID_REPLY = {
    "issues": [{"line": 2, "type": "Logic", "message": "Missing null check"}],
    "suggestions": ["Use template literals"],
    "score": 72,
    "editedCode": "function greet(name) {\n  console.log(`Hello, ${name}`);\n}",
}


class FakeLLMClient:
    """Records calls instead of hitting a provider."""

    def __init__(self, reply: Optional[str] = None, error: Optional[Exception] = None, configured: bool = True):
        self.reply = json.dumps(VALID_REPLY) if reply is None else reply
        self.error = error
        self.configured = configured
        self.calls: List[dict] = []

    @property
    def is_configured(self) -> bool:
        return self.configured

    def chat_completion(self, model, messages, temperature=0.2, response_format=None):
        self.calls.append({
            "model": model,
            "messages": messages,
            "temperature": temperature,
            "response_format": response_format,
        })
        if self.error is not None:
            raise self.error
        return self.reply


class InMemoryHistory:
    def __init__(self, fail_save: bool = False):
        self.saved: List[tuple] = []
        self.fail_save = fail_save

    def list_reviews(self, user_id):
        return [r for uid, r in self.saved if uid == user_id]

    def save(self, user_id, record):
        from domain.errors import PersistenceError

        if self.fail_save:
            raise PersistenceError()
        self.saved.append((user_id, record))


def make_result(score: int = 80) -> AnalysisResult:
    return AnalysisResult(
        score=score,
        issues=[Issue(line=1, category="Style", message="Prefer const")],
        suggestions=["Extract a helper"],
        corrected_code="const x = 1;",
    )


def make_record(record_id: str = "2024-05-01T10:00:00.000Z", date: Optional[str] = None, score: int = 80) -> ReviewRecord:
    return ReviewRecord(
        id=record_id,
        created_at=date or record_id,
        language="javascript",
        source_code="var x = 1;",
        result=make_result(score),
    )


@pytest.fixture
def fake_client():
    return FakeLLMClient()
