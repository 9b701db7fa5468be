"""Tests for the ordered string-matching error classification."""

from application.error_classifier import CLASSIFICATION_RULES, classify_error
from domain.errors import ConfigurationError, ProviderError, UnknownError, ValidationError


class TestClassifyError:
    def test_auth_markers(self):
        for msg in ("Error code: 401 - invalid key", "403 Forbidden", "Incorrect API key provided"):
            err = classify_error(RuntimeError(msg))
            assert isinstance(err, ProviderError)
            assert err.kind == ProviderError.AUTH

    def test_quota_markers(self):
        err = classify_error(RuntimeError("Error code: 429 - You exceeded your current quota"))
        assert err.kind == ProviderError.QUOTA

    def test_safety_markers(self):
        err = classify_error(RuntimeError("Response blocked by content_filter"))
        assert err.kind == ProviderError.SAFETY

    def test_network_markers(self):
        assert classify_error(RuntimeError("Connection error.")).kind == ProviderError.NETWORK
        assert classify_error(RuntimeError("Request timed out.")).kind == ProviderError.NETWORK

    def test_priority_order_auth_before_quota(self):
        # both markers present: the credential rule is evaluated first
        err = classify_error(RuntimeError("401 after 429 retries"))
        assert err.kind == ProviderError.AUTH

    def test_short_unknown_message_is_surfaced_verbatim(self):
        err = classify_error(RuntimeError("model overloaded"))
        assert isinstance(err, UnknownError)
        assert err.message == "model overloaded"

    def test_long_unknown_message_becomes_generic(self):
        err = classify_error(RuntimeError("x" * 500))
        assert isinstance(err, UnknownError)
        assert err.message == UnknownError.default_message

    def test_empty_message_becomes_generic(self):
        assert classify_error(RuntimeError()).message == UnknownError.default_message

    def test_app_errors_pass_through_untouched(self):
        original = ValidationError()
        assert classify_error(original) is original
        config = ConfigurationError()
        assert classify_error(config) is config

    def test_custom_rule_list(self):
        rules = CLASSIFICATION_RULES[-1:]
        err = classify_error(RuntimeError("429"), rules=rules)
        assert isinstance(err, UnknownError)


class TestUnknownError:
    def test_message_is_truncated(self):
        assert len(UnknownError("y" * 1000).message) == 200
