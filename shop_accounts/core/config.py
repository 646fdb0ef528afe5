"""Application configuration"""

from pydantic_settings import BaseSettings
from pydantic import Field
from typing import Optional


class Settings(BaseSettings):
    """Application settings."""

    # API Configuration
    API_PREFIX: str = "/api"
    PROJECT_NAME: str = "Shop Accounts"
    VERSION: str = "1.0.0"
    DESCRIPTION: str = "User account service for the shop: registration, sessions, password reset and pruning"

    # Security
    SECRET_KEY: str = Field(default="change-me-in-production", env="SECRET_KEY")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(default=60, env="ACCESS_TOKEN_EXPIRE_MINUTES")
    ALGORITHM: str = "HS256"
    SESSION_COOKIE_NAME: str = Field(default="session", env="SESSION_COOKIE_NAME")
    OAUTH_STATE_COOKIE_NAME: str = "oauth_state"

    # Account lifecycle
    PASSWORD_RESET_TOKEN_TTL_MINUTES: int = Field(default=60, env="PASSWORD_RESET_TOKEN_TTL_MINUTES")
    INACTIVITY_RETENTION_DAYS: int = Field(default=2, env="INACTIVITY_RETENTION_DAYS")

    # Database
    DATABASE_URL: str = Field(default="sqlite:///./accounts.db", env="DATABASE_URL")

    # Redis / Celery
    REDIS_URL: str = Field(default="redis://localhost:6379", env="REDIS_URL")
    PRUNE_INTERVAL_HOURS: int = Field(default=24, env="PRUNE_INTERVAL_HOURS")

    # GitHub OAuth
    GITHUB_CLIENT_ID: Optional[str] = Field(default=None, env="GITHUB_CLIENT_ID")
    GITHUB_CLIENT_SECRET: Optional[str] = Field(default=None, env="GITHUB_CLIENT_SECRET")
    GITHUB_CALLBACK_URL: str = Field(
        default="http://localhost:8000/api/users/githubcallback", env="GITHUB_CALLBACK_URL"
    )

    # Email SMTP Configuration
    SMTP_HOST: str = Field(default="localhost", env="SMTP_HOST")
    SMTP_PORT: int = Field(default=587, env="SMTP_PORT")
    SMTP_USERNAME: Optional[str] = Field(default=None, env="SMTP_USERNAME")
    SMTP_PASSWORD: Optional[str] = Field(default=None, env="SMTP_PASSWORD")
    SMTP_USE_TLS: bool = Field(default=True, env="SMTP_USE_TLS")
    FROM_EMAIL: str = Field(default="noreply@shop.local", env="FROM_EMAIL")
    FROM_NAME: str = Field(default="Shop", env="FROM_NAME")

    # CORS
    ALLOWED_HOSTS: list[str] = Field(default=["http://localhost:3000"], env="ALLOWED_HOSTS")

    # Application URLs
    FRONTEND_URL: str = Field(default="http://localhost:8000", env="FRONTEND_URL")

    # Development
    DEBUG: bool = Field(default=False, env="DEBUG")
    TESTING: bool = Field(default=False, env="TESTING")
    ENVIRONMENT: str = Field(default="development", env="ENVIRONMENT")
    LOG_LEVEL: str = Field(default="INFO", env="LOG_LEVEL")

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
