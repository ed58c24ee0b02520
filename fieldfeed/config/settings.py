import os
import tempfile
from decimal import Decimal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application configuration using Pydantic BaseSettings.
    Loads environment variables (and ``.env``) automatically.
    """

    # API Configuration
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "Field to Feed Orders API"
    PROJECT_DESCRIPTION: str = "Bulk order lifecycle and notifications for the Field to Feed marketplace"
    VERSION: str = "0.1.0"

    # Environment
    ENVIRONMENT: str = Field("production", description="Deployment environment")
    DEBUG: bool = Field(False, description="Debug mode; shows internal error detail")

    # PostgreSQL Database Settings
    DB_HOST: str = Field("localhost", description="PostgreSQL host")
    DB_PORT: int = Field(5432, description="PostgreSQL port")
    DB_NAME: str = Field("fieldfeed", description="Database name")
    DB_USER: str = Field("fieldfeed", description="Database user")
    DB_PASSWORD: str | None = Field(None, description="Database password")
    DB_ECHO: bool = Field(False, description="Log SQL queries (debug only)")

    # Database connection pool settings
    DB_POOL_SIZE: int = Field(10, description="Connection pool size")
    DB_MAX_OVERFLOW: int = Field(20, description="Maximum pool overflow")
    DB_POOL_RECYCLE: int = Field(3600, description="Recycle connections every N seconds")
    DB_POOL_TIMEOUT: int = Field(30, description="Timeout waiting for a pooled connection")

    # JWT Settings (admin tokens)
    JWT_SECRET_KEY: str = Field("change-me", description="Secret used to verify admin tokens")
    JWT_ALGORITHM: str = Field("HS256", description="JWT signing algorithm")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(60 * 24 * 7, description="Admin token lifetime in minutes")

    # Email transport
    EMAIL_HOST: str = Field("smtp.gmail.com", description="SMTP host")
    EMAIL_PORT: int = Field(587, description="SMTP port")
    EMAIL_USER: str | None = Field(None, description="SMTP user, also the sender address")
    EMAIL_PASS: str | None = Field(None, description="SMTP password")
    EMAIL_USE_TLS: bool = Field(True, description="Upgrade the SMTP connection with STARTTLS")
    EMAIL_TIMEOUT_SECONDS: int = Field(60, description="SMTP connection and socket timeout")
    EMAIL_FROM_NAME: str = Field("Field to Feed Export", description="Display name for outgoing mail")
    ADMIN_EMAIL: str | None = Field(None, description="Recipient of admin alerts (defaults to EMAIL_USER)")
    NOTIFICATIONS_ENABLED: bool = Field(True, description="When False, notifications are logged and skipped")

    # Invoices
    INVOICE_TEMP_DIR: str = Field(
        default_factory=lambda: os.path.join(tempfile.gettempdir(), "fieldfeed-invoices"),
        description="Directory for transient invoice PDFs",
    )
    INVOICE_TAX_RATE: Decimal = Field(Decimal("0.18"), description="Tax rate used when no breakdown is stored")
    INVOICE_DUE_DAYS: int = Field(30, description="Days between invoice date and due date")
    DEFAULT_CURRENCY: str = Field("USD", description="Currency for computed price breakdowns")

    # Company block printed on invoices and emails
    COMPANY_NAME: str = "Field to Feed Export"
    COMPANY_TAGLINE: str = "Premium Agricultural Products"
    COMPANY_ADDRESS: str = "Agriculture Business Hub, Farm District"
    COMPANY_PHONE: str = "+1 (555) 123-4567"
    COMPANY_EMAIL: str = "orders@fieldtofeed.com"
    COMPANY_WEBSITE: str = "www.fieldtofeed.com"

    # Logging
    LOG_LEVEL: str = Field("INFO", description="Root log level")
    LOG_FORMAT: str = Field("colored", description="Console log format: colored, plain or json")

    # Monitoring
    SENTRY_DSN: str | None = Field(None, description="Sentry DSN; Sentry is disabled when empty")

    # CORS
    CORS_ORIGINS: list[str] = Field(default=[], description="Allowed CORS origins (all origins in debug)")

    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, value):
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("INVOICE_TAX_RATE")
    @classmethod
    def validate_tax_rate(cls, v):
        if v < 0 or v >= 1:
            raise ValueError("INVOICE_TAX_RATE must be a fraction between 0 and 1")
        return v

    @field_validator("DB_POOL_SIZE")
    @classmethod
    def validate_pool_size(cls, v):
        if v < 1:
            raise ValueError("DB_POOL_SIZE must be at least 1")
        return v

    @field_validator("LOG_FORMAT")
    @classmethod
    def validate_log_format(cls, v):
        if v not in ("colored", "plain", "json"):
            raise ValueError("LOG_FORMAT must be one of: colored, plain, json")
        return v

    @property
    def is_development(self) -> bool:
        """Development mode shows internal error detail to callers."""
        return self.DEBUG or self.ENVIRONMENT.lower() in ["development", "dev", "local"]

    @property
    def admin_notification_email(self) -> str | None:
        return self.ADMIN_EMAIL or self.EMAIL_USER

    @property
    def effective_cors_origins(self) -> list[str]:
        if self.CORS_ORIGINS:
            return self.CORS_ORIGINS
        return ["*"] if self.is_development else []

    @property
    def company_info(self) -> dict[str, str]:
        return {
            "name": self.COMPANY_NAME,
            "tagline": self.COMPANY_TAGLINE,
            "address": self.COMPANY_ADDRESS,
            "phone": self.COMPANY_PHONE,
            "email": self.COMPANY_EMAIL,
            "website": self.COMPANY_WEBSITE,
        }


# Singleton instance
_settings_instance = None


def get_settings() -> Settings:
    """
    Return the cached settings instance.
    Avoids re-reading the environment on every call.
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
