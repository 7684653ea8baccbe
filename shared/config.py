"""
Shared configuration management for the eligibility engine.
"""

from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseConfig(BaseSettings):
    """Base configuration class with common settings."""

    model_config = SettingsConfigDict(
        env_prefix="ELIGIBILITY_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment
    env: str = Field(default="local")
    log_level: str = Field(default="info")


class EligibilitySettings(BaseConfig):
    """Eligibility engine configuration."""

    service_name: str = Field(default="eligibility")

    # Raise NoRuleMatchedError instead of returning the default outcome
    strict_matching: bool = Field(default=False)

    # YAML file overriding the reference lists below
    reference_data_file: Optional[str] = Field(default=None)

    # Reference data (JSON-encoded lists when set via environment)
    mas_entities: List[str] = Field(default_factory=lambda: [
        "DBS BANK LTD",
        "OVERSEA-CHINESE BANKING CORPORATION LIMITED",
        "UNITED OVERSEAS BANK LIMITED",
    ])
    qualifying_nexus: List[str] = Field(default_factory=lambda: ["Singapore", "SG", "SGP"])
    excluded_product_types: List[str] = Field(default_factory=lambda: [
        "FX_SPOT",
        "SECURITIES_SPOT",
        "PHYSICALLY_SETTLED_COMMODITY_FORWARD",
        "SPOT_COMMODITY",
    ])
    commodity_exchanges: List[str] = Field(default_factory=lambda: [
        "SGX",
        "XSES",
        "ICE",
        "IFEU",
        "CME",
        "XCME",
        "LME",
        "XLME",
    ])


def get_settings(**overrides) -> EligibilitySettings:
    """Get eligibility settings, applying explicit overrides over the environment."""
    return EligibilitySettings(**overrides)
