"""
Ranking configuration DTOs.

Defines the validated configuration objects consumed by the scoring
algorithms. Validation happens here, when the host builds the config;
the algorithms themselves assume a well-formed config.
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator


WEIGHT_SUM_TOLERANCE = 1e-6


class VaultTypeQualityWeights(BaseModel):
    """
    Weight profile used to combine quality sub-scores.

    Profiles are keyed by vault type ("project", "music", ...) and must sum to 1.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    completeness_weight: float = Field(ge=0.0, le=1.0, validation_alias="completenessWeight")
    accuracy_weight: float = Field(ge=0.0, le=1.0, validation_alias="accuracyWeight")
    relevance_weight: float = Field(ge=0.0, le=1.0, validation_alias="relevanceWeight")

    @model_validator(mode="after")
    def _check_sum(self) -> "VaultTypeQualityWeights":
        total = self.completeness_weight + self.accuracy_weight + self.relevance_weight
        if abs(total - 1.0) > WEIGHT_SUM_TOLERANCE:
            raise ValueError(f"quality weights must sum to 1.0, got {total:.4f}")
        return self


class RankingConfig(BaseModel):
    """
    Configuration for memory ranking and selection.

    Final score = (recency × recency_weight) + (quality × quality_weight),
    with usage_bonus of the result reserved for the usage weight.
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        json_schema_extra={"examples": [
            {
                "recency_weight": 0.4,
                "quality_weight": 0.6,
                "min_quality_score": 0.3,
                "max_age_days": 365,
                "usage_bonus": 0.1,
            }
        ]},
    )

    recency_weight: float = Field(
        default=0.4,
        ge=0.0,
        le=1.0,
        validation_alias="recencyWeight",
        description="Weight for recency score",
    )
    quality_weight: float = Field(
        default=0.6,
        ge=0.0,
        le=1.0,
        validation_alias="qualityWeight",
        description="Weight for overall quality score",
    )
    min_quality_score: float = Field(
        default=0.3,
        ge=0.0,
        le=1.0,
        validation_alias="minQualityScore",
        description="Memories scored below this are not loaded",
    )
    max_age_days: float = Field(
        default=365,
        gt=0,
        validation_alias="maxAgeDays",
        description="Age at which recency reaches its floor",
    )
    usage_bonus: float = Field(
        default=0.1,
        ge=0.0,
        le=0.5,
        validation_alias="usageBonus",
        description="Share of the score reserved for usage; heavily used memories earn it",
    )

    @model_validator(mode="after")
    def _check_weights(self) -> "RankingConfig":
        total = self.recency_weight + self.quality_weight
        if abs(total - 1.0) > WEIGHT_SUM_TOLERANCE:
            raise ValueError(
                f"recency_weight + quality_weight must sum to 1.0, got {total:.4f}"
            )
        return self


DEFAULT_RANKING_CONFIG = RankingConfig()
