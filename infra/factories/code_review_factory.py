from typing import Optional

from application.code_review_service import CodeReviewService
from config.settings import Settings, settings as default_settings
from infra.auth.firebase_auth import FirebaseAuthGateway
from infra.db.realtime_db import RealtimeDatabaseClient
from infra.db.repositories.review_repo import FirebaseReviewRepository
from infra.providers.azure_client import AzureOpenAIClient
from infra.providers.base import AZURE_OPENAI, ProviderConfig
from infra.providers.openai_client import OpenAIClient


def build_code_review_service(provider: str, api_key: str, model: str, api_base: str = "",
                              azure_api_base: str = "", azure_api_version: str = "",
                              temperature: float = 0.2) -> CodeReviewService:
    cfg = ProviderConfig(
        provider=provider,
        api_key=api_key,
        model=model,
        api_base=api_base,
        azure_api_base=azure_api_base,
        azure_api_version=azure_api_version,
    )
    if cfg.is_azure:
        client = AzureOpenAIClient(cfg)
    else:
        client = OpenAIClient(cfg)
    return CodeReviewService(client, default_model=model, temperature=temperature)


def build_from_settings(cfg: Optional[Settings] = None) -> CodeReviewService:
    cfg = cfg or default_settings
    if cfg.PROVIDER == AZURE_OPENAI:
        return build_code_review_service(
            provider=cfg.PROVIDER,
            api_key=cfg.AZURE_OPENAI_API_KEY,
            model=cfg.AZURE_OPENAI_DEPLOYMENT,
            azure_api_base=cfg.AZURE_OPENAI_API_BASE,
            azure_api_version=cfg.AZURE_OPENAI_API_VERSION,
            temperature=cfg.TEMPERATURE,
        )
    return build_code_review_service(
        provider=cfg.PROVIDER,
        api_key=cfg.OPENAI_API_KEY,
        model=cfg.OPENAI_MODEL,
        api_base=cfg.OPENAI_API_BASE,
        temperature=cfg.TEMPERATURE,
    )


def build_auth_gateway(cfg: Optional[Settings] = None) -> FirebaseAuthGateway:
    cfg = cfg or default_settings
    return FirebaseAuthGateway(api_key=cfg.FIREBASE_API_KEY, timeout=cfg.HTTP_TIMEOUT_SECONDS)


def build_history_repository(gateway: FirebaseAuthGateway, cfg: Optional[Settings] = None) -> FirebaseReviewRepository:
    cfg = cfg or default_settings
    db = RealtimeDatabaseClient(
        database_url=cfg.FIREBASE_DATABASE_URL,
        token_provider=gateway.id_token,
        timeout=cfg.HTTP_TIMEOUT_SECONDS,
    )
    return FirebaseReviewRepository(db)
