import json
from typing import Any, Dict, List, Optional

from application.error_classifier import classify_error
from application.prompts import build_review_prompt, review_response_format, review_system_prompt
from config.constant import FALLBACK_ISSUE_CATEGORY, ISSUE_CATEGORIES
from config.logging import logger
from domain.errors import ConfigurationError, UnknownError, ValidationError
from domain.models import AnalysisResult, Issue
from domain.ports import ChatMessage, CodeReviewPort, LLMClientPort
from utils.markdown import strip_code_fence


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _parse_issue(raw: Any) -> Issue:
    if not isinstance(raw, dict) or not isinstance(raw.get("message"), str):
        raise ValidationError()
    line = raw.get("line")
    # số dòng phải là int, không nhận float
    if line is not None and (not isinstance(line, int) or isinstance(line, bool) or line < 0):
        raise ValidationError()
    category = raw.get("type")
    if category not in ISSUE_CATEGORIES:
        category = FALLBACK_ISSUE_CATEGORY
    return Issue(line=line, category=category, message=raw["message"])


def parse_analysis(payload: Any) -> AnalysisResult:
    """Structural check of the decoded model reply. Partial results are never returned."""
    if not isinstance(payload, dict):
        raise ValidationError()

    score = payload.get("score")
    issues = payload.get("issues")
    suggestions = payload.get("suggestions")
    corrected = payload.get("editedCode")

    if not _is_number(score) or not isinstance(issues, list) or not isinstance(suggestions, list) \
            or not isinstance(corrected, str):
        raise ValidationError()
    if not 0 <= score <= 100:
        raise ValidationError("The AI model returned a score outside the 0-100 range.")
    if not all(isinstance(s, str) for s in suggestions):
        raise ValidationError()

    return AnalysisResult(
        score=int(score),
        issues=[_parse_issue(i) for i in issues],
        suggestions=list(suggestions),
        corrected_code=corrected,
    )


class CodeReviewService(CodeReviewPort):
    def __init__(self, client: LLMClientPort, default_model: Optional[str] = None, temperature: float = 0.2):
        self.client = client
        self.default_model = default_model
        self.temperature = temperature

    def _request(self, language: str, code: str) -> str:
        messages: List[ChatMessage] = [
            ChatMessage("system", review_system_prompt()),
            ChatMessage("user", build_review_prompt(language, code)),
        ]
        return self.client.chat_completion(
            model=self.default_model or "gpt-4o-mini",
            messages=messages,
            temperature=self.temperature,
            response_format=review_response_format(),
        )

    def analyze(self, language: str, code: str) -> AnalysisResult:
        if not self.client.is_configured:
            raise ConfigurationError()

        logger.info(f"[review] Gửi {len(code)} ký tự {language} tới model {self.default_model}")
        try:
            raw = self._request(language, code)
        except Exception as e:
            logger.exception(f"[review] Lỗi gọi model: {e}")
            raise classify_error(e) from e

        try:
            payload: Dict[str, Any] = json.loads(strip_code_fence(raw or "").strip())
        except ValueError as e:
            logger.warning(f"[review] Model trả về JSON không hợp lệ: {e}")
            raise UnknownError() from e

        result = parse_analysis(payload)
        logger.info(f"[review] Score={result.score}, issues={len(result.issues)}")
        return result
