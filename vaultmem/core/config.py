"""Application configuration via Pydantic Settings."""

from typing import Dict, List

from pydantic_settings import BaseSettings, SettingsConfigDict

from vaultmem.algos.mem_scoring.weights import build_weights_table
from vaultmem.models.dto.ranking import RankingConfig, VaultTypeQualityWeights


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # API Settings
    PROJECT_NAME: str = "Vaultmem API"
    VERSION: str = "0.3.0"
    API_PREFIX: str = "/api"

    # Ranking Settings (validated into RankingConfig)
    RANKING_RECENCY_WEIGHT: float = 0.4
    RANKING_QUALITY_WEIGHT: float = 0.6
    RANKING_MIN_QUALITY_SCORE: float = 0.3
    RANKING_MAX_AGE_DAYS: float = 365
    RANKING_USAGE_BONUS: float = 0.1
    DEFAULT_TOP_LIMIT: int = 3

    # Vault type profiles, merged over the built-in table
    # e.g. VAULT_TYPE_WEIGHTS='{"research": {"completeness_weight": 0.5, ...}}'
    VAULT_TYPE_WEIGHTS: Dict[str, VaultTypeQualityWeights] = {}

    # LangSmith Tracing (Optional - for debugging/monitoring)
    LANGSMITH_TRACING: bool = False
    LANGSMITH_API_KEY: str = ""
    LANGSMITH_PROJECT: str = ""
    LANGSMITH_ENDPOINT: str = ""

    # CORS Settings
    BACKEND_CORS_ORIGINS: List[str] = []

    def ranking_config(self) -> RankingConfig:
        """
        Build the ranking config from settings.

        Raises pydantic.ValidationError on invalid weights (e.g. not summing to 1),
        so misconfiguration surfaces at startup rather than during ranking.
        """
        return RankingConfig(
            recency_weight=self.RANKING_RECENCY_WEIGHT,
            quality_weight=self.RANKING_QUALITY_WEIGHT,
            min_quality_score=self.RANKING_MIN_QUALITY_SCORE,
            max_age_days=self.RANKING_MAX_AGE_DAYS,
            usage_bonus=self.RANKING_USAGE_BONUS,
        )

    def vault_weights_table(self) -> Dict[str, VaultTypeQualityWeights]:
        """Built-in vault type profiles with configured overrides applied."""
        return build_weights_table(self.VAULT_TYPE_WEIGHTS)


# Global settings instance
settings = Settings()
