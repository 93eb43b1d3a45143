"""Configuration management using Pydantic Settings"""

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from retention_engine.domain.risk import RiskWeights


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="RETENTION_",
        extra="ignore",
    )

    # Service
    service_name: str = "retention-engine"
    log_level: str = "INFO"

    # Risk weights (points) and tier thresholds (percent)
    risk_expiry_base: float = 40
    risk_expiry_decay_per_day: float = 4
    risk_pending_balance: float = 30
    risk_stale_payment_days: int = 30
    risk_stale_payment_penalty: float = 15
    risk_lapsed_payment_days: int = 90
    risk_lapsed_payment_penalty: float = 30
    risk_high_threshold: int = 70
    risk_medium_threshold: int = 30

    # Report shaping
    preview_limit: int = 3
    insights_limit: int = 3
    expiring_window_days: int = 30
    what_if_uplift_points: float = 10.0

    @model_validator(mode="after")
    def check_risk_thresholds(self) -> "Settings":
        """Fail at startup on tier thresholds the scorer would reject"""
        self.risk_weights()
        return self

    def risk_weights(self) -> RiskWeights:
        return RiskWeights(
            expiry_base=self.risk_expiry_base,
            expiry_decay_per_day=self.risk_expiry_decay_per_day,
            pending_balance=self.risk_pending_balance,
            stale_payment_days=self.risk_stale_payment_days,
            stale_payment_penalty=self.risk_stale_payment_penalty,
            lapsed_payment_days=self.risk_lapsed_payment_days,
            lapsed_payment_penalty=self.risk_lapsed_payment_penalty,
            high_threshold=self.risk_high_threshold,
            medium_threshold=self.risk_medium_threshold,
        )


settings = Settings()
