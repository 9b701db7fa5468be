from typing import Any, Dict, Optional, Sequence

from openai import OpenAI

from domain.ports import ChatMessage, LLMClientPort
from infra.providers.base import ProviderConfig


class OpenAIClient(LLMClientPort):
    def __init__(self, cfg: ProviderConfig):
        self._cfg = cfg
        self._client: Optional[OpenAI] = None

    @property
    def is_configured(self) -> bool:
        return self._cfg.is_configured

    def _sdk(self) -> OpenAI:
        # SDK raise ngay khi thiếu key, nên chỉ khởi tạo lúc gọi thật
        if self._client is None:
            self._client = OpenAI(api_key=self._cfg.api_key, base_url=self._cfg.api_base or None)
        return self._client

    def chat_completion(
        self,
        model: str,
        messages: Sequence[ChatMessage],
        temperature: float = 0.2,
        response_format: Optional[Dict[str, Any]] = None,
    ) -> str:
        kwargs: Dict[str, Any] = {
            "model": model,
            "messages": [{"role": m.role, "content": m.content} for m in messages],
            "temperature": temperature,
        }
        if response_format is not None:
            kwargs["response_format"] = response_format

        resp = self._sdk().chat.completions.create(**kwargs)
        choice = resp.choices[0]
        if getattr(choice, "finish_reason", None) == "content_filter":
            raise RuntimeError("Response blocked by content_filter")
        return choice.message.content or ""
