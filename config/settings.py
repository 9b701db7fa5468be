from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- Provider ---
    PROVIDER: str = "OpenAI"  # hoặc "Azure OpenAI"

    # --- OpenAI ---
    OPENAI_API_KEY: str = ""
    OPENAI_API_BASE: str = "https://api.openai.com/v1"
    OPENAI_MODEL: str = "gpt-4o-mini"

    # --- Azure OpenAI ---
    AZURE_OPENAI_API_KEY: str = ""
    AZURE_OPENAI_API_BASE: str = ""
    AZURE_OPENAI_DEPLOYMENT: str = ""
    AZURE_OPENAI_API_VERSION: str = "2024-08-01-preview"

    # --- Common model parameters ---
    TEMPERATURE: float = 0.2

    # --- Firebase ---
    FIREBASE_API_KEY: str = ""
    FIREBASE_DATABASE_URL: str = ""
    GOOGLE_SIGN_IN_ENABLED: bool = False
    HTTP_TIMEOUT_SECONDS: float = 15.0

    # --- Logging ---
    LOG_DIR: str = "tmp"
    LOG_LEVEL: str = "INFO"


settings = Settings()
