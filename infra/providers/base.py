from dataclasses import dataclass

OPENAI = "OpenAI"
AZURE_OPENAI = "Azure OpenAI"


@dataclass(frozen=True)
class ProviderConfig:
    """Connection settings for one chat-completion backend."""

    provider: str = OPENAI
    api_key: str = ""
    model: str = ""              # tên model, hoặc tên deployment với Azure
    api_base: str = ""
    azure_api_base: str = ""
    azure_api_version: str = ""

    @property
    def is_azure(self) -> bool:
        return self.provider == AZURE_OPENAI

    @property
    def is_configured(self) -> bool:
        if self.is_azure:
            return bool(self.api_key and self.azure_api_base)
        return bool(self.api_key)
