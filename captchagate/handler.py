"""Request handler chaining the origin gate, token verification and enrichment."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from .config import GateConfig
from .enrichment import Enricher, ShopifyBookingFetcher
from .errors import (
    CaptchaGateError,
    ConfigurationError,
    UNEXPECTED_MESSAGE,
    ValidationError,
)
from .models import HandlerResponse, IncomingRequest
from .origin import OriginGate
from .verifier import RecaptchaClient, TokenVerifier


logger = logging.getLogger(__name__)


class RequestHandler:
    """Turns one IncomingRequest into exactly one HandlerResponse.

    ``config_error`` is set when the deployment is missing a required
    setting; every POST then answers 500 without looking at the body.
    """

    def __init__(
        self,
        origin_gate: OriginGate,
        verifier: Optional[TokenVerifier],
        enricher: Optional[Enricher] = None,
        config_error: Optional[ConfigurationError] = None,
    ) -> None:
        self.origin_gate = origin_gate
        self.verifier = verifier
        self.enricher = enricher
        self.config_error = config_error

    @classmethod
    def from_config(cls, config: GateConfig) -> "RequestHandler":
        origin_gate = OriginGate(config.allowed_origins)
        try:
            config.validate()
        except ConfigurationError as exc:
            logger.error("%s", exc.detail)
            return cls(origin_gate, verifier=None, config_error=exc)

        verifier = TokenVerifier(
            RecaptchaClient(config.recaptcha_secret_key),
            min_score=config.min_score,
        )
        enricher = None
        if config.booking_data_enabled:
            enricher = ShopifyBookingFetcher(
                shop_domain=config.shopify_shop_domain,
                access_token=config.shopify_access_token,
            )
        return cls(origin_gate, verifier, enricher)

    def handle(self, request: IncomingRequest) -> HandlerResponse:
        headers = self.origin_gate.cors_headers(request.origin)
        short_circuit = self.origin_gate.short_circuit(request.method, request.origin)
        if short_circuit is not None:
            return short_circuit

        try:
            payload = self._process(request)
        except CaptchaGateError as exc:
            return HandlerResponse(exc.status_code, headers, exc.to_payload())
        except Exception:
            logger.exception("CAPTCHA verification error")
            return HandlerResponse(500, headers, {"success": False, "message": UNEXPECTED_MESSAGE})
        return HandlerResponse(200, headers, payload)

    def _process(self, request: IncomingRequest) -> Dict[str, Any]:
        if self.config_error is not None:
            raise self.config_error

        token = request.token
        if not token:
            raise ValidationError()

        decision = self.verifier.verify(token, request.action, request.client_ip)

        payload: Dict[str, Any] = {"success": True, "message": decision.message}
        if self.enricher is not None:
            payload["data"] = self.enricher.fetch()
        if decision.score is not None:
            payload["score"] = decision.score
        return payload
