"""Tests for wiring services from Settings."""

from __future__ import annotations

from config.settings import Settings
from infra.factories.code_review_factory import build_auth_gateway, build_from_settings, build_history_repository
from infra.providers.azure_client import AzureOpenAIClient
from infra.providers.openai_client import OpenAIClient


def _settings(**overrides):
    return Settings(_env_file=None, **overrides)


class TestBuildFromSettings:
    def test_openai_default(self):
        service = build_from_settings(_settings(OPENAI_API_KEY="sk-test", OPENAI_MODEL="gpt-4o"))
        assert isinstance(service.client, OpenAIClient)
        assert service.client.is_configured
        assert service.default_model == "gpt-4o"

    def test_azure_provider(self):
        service = build_from_settings(_settings(
            PROVIDER="Azure OpenAI",
            AZURE_OPENAI_API_KEY="az",
            AZURE_OPENAI_API_BASE="https://res.openai.azure.com",
            AZURE_OPENAI_DEPLOYMENT="review-deploy",
        ))
        assert isinstance(service.client, AzureOpenAIClient)
        assert service.client.is_configured
        assert service.default_model == "review-deploy"

    def test_missing_key_is_unconfigured(self):
        service = build_from_settings(_settings(OPENAI_API_KEY=""))
        assert not service.client.is_configured


class TestBuildFirebase:
    def test_history_uses_gateway_token(self):
        gateway = build_auth_gateway(_settings(FIREBASE_API_KEY="k"))
        repo = build_history_repository(gateway, _settings(FIREBASE_DATABASE_URL="https://db.example.com"))
        assert gateway.id_token() is None
        assert repo.db._token_provider == gateway.id_token
