"""
HAVEN Application Settings

Configuration management using Pydantic Settings.
All values can be overridden from environment variables.

CLINICAL_REVIEW_REQUIRED: Detection windows and thresholds
default to the values the rule engine was validated with.
Changing them changes crisis detection behaviour.
"""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DetectionSettings(BaseSettings):
    """Crisis classifier configuration."""
    
    model_config = SettingsConfigDict(env_prefix="HAVEN_DETECTION_")
    
    sensitivity: float = Field(default=0.7, ge=0.0, le=1.0, description="Initial detection sensitivity")
    pattern_window: int = Field(default=10, ge=1, le=100, description="Prior user turns inspected for patterns")
    theme_repeat_threshold: int = Field(default=3, ge=1, le=100, description="Theme repeats before repeated_distress")
    escalation_window: int = Field(default=3, ge=2, le=20, description="Densities compared for escalation")
    escalation_min_density: float = Field(default=0.2, ge=0.0, le=1.0)
    history_retention_days: int = Field(default=30, ge=1, le=365)
    excerpt_length: int = Field(default=100, ge=0, le=1000, description="Characters kept per distress occurrence")


class ConversationSettings(BaseSettings):
    """Conversation flow configuration."""
    
    model_config = SettingsConfigDict(env_prefix="HAVEN_CONVERSATION_")
    
    topic_min_history: int = Field(default=6, ge=1, le=100)
    topic_window: int = Field(default=10, ge=1, le=100)
    topic_min_user_turns: int = Field(default=3, ge=1, le=100)
    topic_repetition_threshold: int = Field(default=5, ge=1, le=100)


class ResourceSettings(BaseSettings):
    """Crisis resource catalog configuration."""
    
    model_config = SettingsConfigDict(env_prefix="HAVEN_RESOURCES_")
    
    catalog_path: Optional[str] = Field(default=None, description="Optional JSON catalog override")


class Settings(BaseSettings):
    """
    Main application settings.
    
    All configuration is loaded from environment variables with HAVEN_ prefix.
    
    Usage:
        settings = get_settings()
        window = settings.detection.pattern_window
    """
    
    model_config = SettingsConfigDict(
        env_prefix="HAVEN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )
    
    # Application
    env: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Application environment"
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level"
    )
    
    # Nested settings
    detection: DetectionSettings = Field(default_factory=DetectionSettings)
    conversation: ConversationSettings = Field(default_factory=ConversationSettings)
    resources: ResourceSettings = Field(default_factory=ResourceSettings)
    
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.env == "production"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.
    
    Uses LRU cache to ensure settings are only loaded once.
    For testing, pass explicit settings objects to services instead.
    
    Returns:
        Settings: Application settings instance
    """
    return Settings()
