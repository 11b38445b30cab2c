"""captchagate - reCAPTCHA verification gate with optional booking data."""

from .app import create_app
from .config import GateConfig
from .enrichment import Enricher, ShopifyBookingFetcher
from .handler import RequestHandler
from .origin import OriginGate
from .verifier import TokenVerifier, evaluate_verification

__all__ = [
    "create_app",
    "GateConfig",
    "Enricher",
    "ShopifyBookingFetcher",
    "RequestHandler",
    "OriginGate",
    "TokenVerifier",
    "evaluate_verification",
]
