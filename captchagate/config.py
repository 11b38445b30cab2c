"""Environment-driven configuration, loaded once at process start."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional, Tuple

from dotenv import load_dotenv

from .errors import ConfigurationError


ALLOWED_ORIGINS: Tuple[str, ...] = (
    "https://www.billyreid.com",
    "http://127.0.0.1:9292",
)
MIN_SCORE = 0.5


@dataclass(frozen=True)
class GateConfig:
    """Settings for one deployment of the gate."""

    recaptcha_secret_key: Optional[str]
    shopify_access_token: Optional[str] = None
    shopify_shop_domain: Optional[str] = None
    booking_data_enabled: bool = True
    allowed_origins: Tuple[str, ...] = ALLOWED_ORIGINS
    min_score: float = MIN_SCORE
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, dotenv: bool = True) -> "GateConfig":
        if dotenv:
            load_dotenv()
        return cls(
            recaptcha_secret_key=os.getenv("RECAPTCHA_SECRET_KEY") or None,
            shopify_access_token=os.getenv("SHOPIFY_ADMIN_ACCESS_TOKEN") or None,
            shopify_shop_domain=os.getenv("SHOPIFY_SHOP_DOMAIN") or None,
            booking_data_enabled=os.getenv("BOOKING_DATA_ENABLED", "true").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def validate(self) -> None:
        """Raise ConfigurationError for the first missing required setting."""
        if not self.recaptcha_secret_key:
            raise ConfigurationError("RECAPTCHA_SECRET_KEY environment variable is not set")
        if self.booking_data_enabled and (
            not self.shopify_access_token or not self.shopify_shop_domain
        ):
            raise ConfigurationError("Shopify Admin API credentials not configured")


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach a single stream handler to the package logger."""
    package_logger = logging.getLogger("captchagate")
    name = str(level).upper()
    unknown = not isinstance(logging.getLevelName(name), int)
    package_logger.setLevel("INFO" if unknown else name)
    if not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        package_logger.addHandler(handler)
    if unknown:
        package_logger.warning("Unknown LOG_LEVEL %r, using INFO", level)
    return package_logger
