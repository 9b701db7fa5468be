from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Protocol, Sequence

from domain.models import AnalysisResult, Identity, ReviewRecord


@dataclass
class ChatMessage:
    role: str
    content: str


class LLMClientPort(Protocol):
    @property
    def is_configured(self) -> bool: ...

    def chat_completion(
        self,
        model: str,
        messages: Sequence[ChatMessage],
        temperature: float = 0.2,
        response_format: Optional[Dict[str, Any]] = None,
    ) -> str: ...


class CodeReviewPort(Protocol):
    def analyze(self, language: str, code: str) -> AnalysisResult: ...


class HistoryRepositoryPort(Protocol):
    def list_reviews(self, user_id: str) -> List[ReviewRecord]: ...

    def save(self, user_id: str, record: ReviewRecord) -> None: ...


SessionListener = Callable[[Optional[Identity]], None]


class IdentityPort(Protocol):
    @property
    def current_identity(self) -> Optional[Identity]: ...

    def create_account(self, email: str, password: str, display_name: str) -> Identity: ...

    def sign_in(self, email: str, password: str) -> Identity: ...

    def sign_in_with_google(self, google_id_token: str) -> Identity: ...

    def sign_out(self) -> None: ...

    def update_display_name(self, name: str) -> Identity: ...

    def update_email(self, new_email: str, current_password: str) -> Identity: ...

    def update_password(self, current_password: str, new_password: str) -> None: ...

    def on_session_change(self, listener: SessionListener) -> Callable[[], None]: ...
