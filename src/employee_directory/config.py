"""
Configuration management for the Employee Directory backend
"""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # MongoDB (the bare MONGODB_* names are accepted for compatibility)
    mongodb_uri: str = Field(
        default="mongodb://localhost:27017",
        validation_alias=AliasChoices("DIRECTORY_MONGODB_URI", "MONGODB_URI", "mongodb_uri"),
    )
    mongodb_db: str = Field(
        default="employee_directory",
        validation_alias=AliasChoices("DIRECTORY_MONGODB_DB", "MONGODB_DB", "mongodb_db"),
    )
    mongodb_pool_size: int = 10
    mongodb_server_selection_timeout_ms: int = 15000
    mongodb_socket_timeout_ms: int = 45000
    mongodb_max_idle_time_ms: int = 30000

    # Connection retry policy
    connect_max_retries: int = 3
    connect_retry_base_delay: float = 1.0  # seconds
    connect_retry_max_delay: float = 5.0  # seconds

    # Telemetry thresholds
    slow_request_threshold_ms: float = 100.0
    slow_operation_threshold_ms: float = 1000.0

    # API Settings
    api_host: str = "0.0.0.0"
    api_port: int = 8088
    api_reload: bool = False
    cors_origins: list[str] = ["http://localhost:3000"]

    # Environment
    environment: str = "development"  # 'development', 'staging', 'production'
    debug: bool = True
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_prefix = "DIRECTORY_"
        case_sensitive = False
        populate_by_name = True
        extra = "ignore"

    @property
    def is_production(self) -> bool:
        return self.environment.lower() in ("production", "prod")


# Global settings instance
settings = Settings()
