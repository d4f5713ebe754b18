"""
Application configuration.

Loads settings from environment variables with sensible defaults.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from taskmanager.core.errors import ConfigurationError


DEFAULT_JWT_SECRET = "dev-jwt-secret-change-in-production"


class Settings(BaseSettings):
    """Application settings loaded from environment."""
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )
    
    # ==========================================================================
    # Environment
    # ==========================================================================
    
    environment: str = "development"
    
    # ==========================================================================
    # API Server
    # ==========================================================================
    
    api_host: str = "0.0.0.0"
    api_port: int = 8080
    cors_origins: str = "http://localhost:3000"
    
    # ==========================================================================
    # Authentication
    # ==========================================================================
    
    jwt_secret_key: str = DEFAULT_JWT_SECRET
    jwt_algorithm: str = "HS256"
    jwt_token_expire_minutes: int = 24 * 60
    password_hash_iterations: int = 100_000
    
    # Bootstrap admin, created at startup if missing. The only way an
    # ADMIN account comes into existence.
    admin_identifier: str = ""
    admin_email: str = ""
    admin_password: str = ""
    
    # ==========================================================================
    # Logging / error tracking
    # ==========================================================================
    
    log_level: str = "INFO"
    log_dir: str = ""
    sentry_dsn: str = ""
    
    # ==========================================================================
    # Helpers
    # ==========================================================================
    
    @property
    def cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]
    
    @property
    def is_production(self) -> bool:
        return self.environment == "production"
    
    @property
    def bootstrap_admin_enabled(self) -> bool:
        return bool(self.admin_identifier and self.admin_email and self.admin_password)
    
    def check(self) -> None:
        """Reject settings that must never reach production."""
        if self.is_production and self.jwt_secret_key == DEFAULT_JWT_SECRET:
            raise ConfigurationError("JWT_SECRET_KEY must be set in production")
        if self.jwt_token_expire_minutes <= 0:
            raise ConfigurationError("JWT_TOKEN_EXPIRE_MINUTES must be positive")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
