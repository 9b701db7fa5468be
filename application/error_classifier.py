"""Maps a failed model call to a user-facing error.

The provider gives no stable error codes to the browser client, so the mapping
is a substring match on the exception text. Rules are evaluated in order and
the first match wins. Upstream wording changes can silently move a failure to
a different category.
"""
from typing import Callable, Sequence, Tuple

from config.constant import MAX_ERROR_MESSAGE_LENGTH
from domain.errors import AppError, ProviderError, UnknownError

Rule = Tuple[Callable[[str], bool], Callable[[str], AppError]]


def _contains_any(*markers: str) -> Callable[[str], bool]:
    def predicate(message: str) -> bool:
        return any(m in message for m in markers)
    return predicate


AUTH_MARKERS = ("API_KEY", "api key", "API key", "401", "403", "permission", "Unauthorized")
QUOTA_MARKERS = ("429", "quota", "rate limit", "Rate limit")
SAFETY_MARKERS = ("SAFETY", "safety", "content_filter", "content management policy")
NETWORK_MARKERS = ("fetch", "network", "Network", "ECONNREFUSED", "Connection error", "timed out")

CLASSIFICATION_RULES: Sequence[Rule] = (
    (
        _contains_any(*AUTH_MARKERS),
        lambda _m: ProviderError(
            ProviderError.AUTH,
            "Invalid or missing API key. Please check your API key in the .env file.",
        ),
    ),
    (
        _contains_any(*QUOTA_MARKERS),
        lambda _m: ProviderError(
            ProviderError.QUOTA,
            "API rate limit exceeded. Please try again later or check your API quota.",
        ),
    ),
    (
        _contains_any(*SAFETY_MARKERS),
        lambda _m: ProviderError(
            ProviderError.SAFETY,
            "The code could not be processed due to safety settings. "
            "Please check the code for any sensitive or harmful content.",
        ),
    ),
    (
        _contains_any(*NETWORK_MARKERS),
        lambda _m: ProviderError(
            ProviderError.NETWORK,
            "Network error. Please check your internet connection and try again.",
        ),
    ),
    (
        lambda m: 0 < len(m) < MAX_ERROR_MESSAGE_LENGTH,
        lambda m: UnknownError(m),
    ),
)


def classify_error(error: BaseException, rules: Sequence[Rule] = CLASSIFICATION_RULES) -> AppError:
    if isinstance(error, AppError):
        return error
    message = str(error) or ""
    for predicate, factory in rules:
        if predicate(message):
            return factory(message)
    return UnknownError()
