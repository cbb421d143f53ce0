"""
Centralized configuration with environment variable overrides.

Business details, storage, mail transport and API settings are all
configurable here. Nothing is hardcoded in handler or notifier logic.
"""

import logging
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


def _safe_int(env_var: str, default: str) -> int:
    """Parse an integer from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return int(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid integer for {env_var}: {raw!r}"
        ) from None


def _safe_float(env_var: str, default: str) -> float:
    """Parse a float from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return float(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid float for {env_var}: {raw!r}"
        ) from None


def _safe_bool(env_var: str, default: str) -> bool:
    """Parse a boolean flag (true/false, yes/no, 1/0) from an env var."""
    raw = os.getenv(env_var, default).strip().lower()
    if raw in ("1", "true", "yes", "on"):
        return True
    if raw in ("0", "false", "no", "off"):
        return False
    raise ValueError(f"Invalid boolean for {env_var}: {raw!r}")


def _split_csv(env_var: str, default: str) -> tuple[str, ...]:
    return tuple(p.strip() for p in os.getenv(env_var, default).split(",") if p.strip())


@dataclass(frozen=True)
class BusinessConfig:
    """Business details shown in confirmation messages."""

    name: str = os.getenv("BUSINESS_NAME", "CarePair Auto Service")
    tagline: str = os.getenv("BUSINESS_TAGLINE", "Expert service, trusted care")
    contact_email: str = os.getenv("BUSINESS_CONTACT_EMAIL", "info@carepair.com")
    contact_phone: str = os.getenv("BUSINESS_CONTACT_PHONE", "(555) 123-4567")


@dataclass(frozen=True)
class StorageConfig:
    """Document store connection settings."""

    mongodb_uri: str = os.getenv("MONGODB_URI", "")
    database_name: str = os.getenv("MONGODB_DATABASE", "car_repair_booking")
    collection_name: str = os.getenv("MONGODB_COLLECTION", "bookings")
    timeout_ms: int = _safe_int("MONGODB_TIMEOUT_MS", "5000")


@dataclass(frozen=True)
class MailConfig:
    """Outbound SMTP transport settings."""

    smtp_host: str = os.getenv("SMTP_HOST", "")
    smtp_port: int = _safe_int("SMTP_PORT", "587")
    smtp_user: str = os.getenv("SMTP_USER", "")
    smtp_pass: str = os.getenv("SMTP_PASS", "")
    mail_from: str = os.getenv("MAIL_FROM", "")
    timeout_sec: float = _safe_float("SMTP_TIMEOUT", "10.0")
    notifications_enabled: bool = _safe_bool("EMAIL_NOTIFICATIONS", "true")

    @property
    def enabled(self) -> bool:
        return self.notifications_enabled and bool(self.smtp_host and self.smtp_user)

    @property
    def sender(self) -> str:
        return self.mail_from or self.smtp_user


@dataclass(frozen=True)
class ApiConfig:
    """HTTP surface and form client settings."""

    host: str = os.getenv("API_HOST", "0.0.0.0")
    port: int = _safe_int("PORT", "8000")
    list_limit: int = _safe_int("BOOKINGS_LIST_LIMIT", "100")
    cors_origins: tuple[str, ...] = _split_csv("CORS_ORIGINS", "*")
    submit_url: str = os.getenv("SUBMIT_URL", "http://localhost:8000/api/bookings")
    submit_timeout_sec: float = _safe_float("SUBMIT_TIMEOUT", "10.0")


@dataclass(frozen=True)
class AppConfig:
    """Root configuration aggregating all sub-configs."""

    business: BusinessConfig = field(default_factory=BusinessConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    mail: MailConfig = field(default_factory=MailConfig)
    api: ApiConfig = field(default_factory=ApiConfig)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    service_name: str = os.getenv("SERVICE_NAME", "carepair-booking")


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values are within acceptable ranges."""
    if not 1 <= config.api.port <= 65535:
        raise ValueError(f"PORT must be between 1 and 65535, got {config.api.port}")
    if config.api.list_limit < 1:
        raise ValueError(
            f"BOOKINGS_LIST_LIMIT must be >= 1, got {config.api.list_limit}"
        )
    if config.api.submit_timeout_sec <= 0:
        raise ValueError(
            f"SUBMIT_TIMEOUT must be > 0, got {config.api.submit_timeout_sec}"
        )
    if config.storage.timeout_ms < 1:
        raise ValueError(
            f"MONGODB_TIMEOUT_MS must be >= 1, got {config.storage.timeout_ms}"
        )
    if not config.storage.database_name or not config.storage.collection_name:
        raise ValueError("MONGODB_DATABASE and MONGODB_COLLECTION must not be empty")
    if not 1 <= config.mail.smtp_port <= 65535:
        raise ValueError(
            f"SMTP_PORT must be between 1 and 65535, got {config.mail.smtp_port}"
        )
    if config.mail.timeout_sec <= 0:
        raise ValueError(f"SMTP_TIMEOUT must be > 0, got {config.mail.timeout_sec}")


def load_config() -> AppConfig:
    """Load and validate application configuration."""
    config = AppConfig()
    _validate_config(config)
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logger.info("Configuration loaded for '%s'", config.business.name)
    if not config.mail.enabled:
        logger.info("Confirmation emails disabled (SMTP not configured or switched off)")
    return config


# Singleton instance
settings = load_config()
