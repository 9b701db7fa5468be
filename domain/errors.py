from typing import Optional

from config.constant import MAX_ERROR_MESSAGE_LENGTH


class AppError(Exception):
    """Base for every error whose message is safe to show to the user."""

    default_message = "An unexpected error occurred. Please try again."

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ConfigurationError(AppError):
    default_message = "API key not configured. Set OPENAI_API_KEY (or the Azure OpenAI settings) in .env and restart the app."


class ValidationError(AppError):
    default_message = "Invalid response structure from the AI model."


class ProviderError(AppError):
    AUTH = "auth"
    QUOTA = "quota"
    SAFETY = "safety"
    NETWORK = "network"

    def __init__(self, kind: str, message: Optional[str] = None):
        self.kind = kind
        super().__init__(message)


class UnknownError(AppError):
    default_message = "Failed to analyze code. The AI model may be temporarily unavailable or the request was invalid."

    def __init__(self, message: Optional[str] = None):
        if message and len(message) > MAX_ERROR_MESSAGE_LENGTH:
            message = message[:MAX_ERROR_MESSAGE_LENGTH]
        super().__init__(message)


class IdentityError(AppError):
    def __init__(self, message: Optional[str] = None, code: Optional[str] = None):
        self.code = code
        super().__init__(message)


class PersistenceError(AppError):
    default_message = "Failed to save review history."


class DatabaseError(RuntimeError):
    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)
