"""reCAPTCHA token verification and the ordered acceptance policy."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from .config import MIN_SCORE
from .errors import VerificationFailure
from .models import VerificationDecision, VerificationResult


SITEVERIFY_URL = "https://www.google.com/recaptcha/api/siteverify"

CONFIG_ERROR_MESSAGE = "CAPTCHA verification failed due to configuration error"
LOW_SCORE_MESSAGE = "CAPTCHA verification failed - suspicious activity detected"
ACTION_MISMATCH_MESSAGE = "CAPTCHA action mismatch"
NOT_SUCCESSFUL_MESSAGE = "CAPTCHA verification failed"
VERIFIED_MESSAGE = "CAPTCHA verified successfully"

logger = logging.getLogger(__name__)


def evaluate_verification(
    result: VerificationResult,
    expected_action: Optional[str] = None,
    min_score: float = MIN_SCORE,
) -> VerificationDecision:
    """Apply the acceptance rules in order; the first rule that fails wins.

    1. any error code
    2. score below ``min_score``
    3. action differs from the one the caller claimed
    4. ``success`` is not true
    """
    if result.error_codes:
        return VerificationDecision(False, CONFIG_ERROR_MESSAGE)
    if result.score is not None and result.score < min_score:
        return VerificationDecision(False, LOW_SCORE_MESSAGE, score=result.score)
    if expected_action and result.action != expected_action:
        return VerificationDecision(False, ACTION_MISMATCH_MESSAGE)
    if not result.success:
        return VerificationDecision(False, NOT_SUCCESSFUL_MESSAGE)
    return VerificationDecision(True, VERIFIED_MESSAGE, score=result.score)


class RecaptchaClient:
    """Thin wrapper around the siteverify endpoint."""

    def __init__(self, secret_key: str, verify_url: str = SITEVERIFY_URL) -> None:
        self._secret_key = secret_key
        self.verify_url = verify_url

    def siteverify(self, token: str, remote_ip: Optional[str] = None) -> VerificationResult:
        data: Dict[str, Any] = {"secret": self._secret_key, "response": token}
        if remote_ip:
            data["remoteip"] = remote_ip
        response = requests.post(
            self.verify_url,
            data=data,
            headers={"Content-Type": "application/x-www-form-urlencoded"},
        )
        return VerificationResult.from_dict(response.json())


class TokenVerifier:
    """Verifies a token and raises VerificationFailure when the policy rejects it."""

    def __init__(self, client: RecaptchaClient, min_score: float = MIN_SCORE) -> None:
        self.client = client
        self.min_score = min_score

    def verify(
        self,
        token: str,
        action: Optional[str] = None,
        remote_ip: Optional[str] = None,
    ) -> VerificationDecision:
        result = self.client.siteverify(token, remote_ip)
        decision = evaluate_verification(result, action, self.min_score)
        if decision.passed:
            return decision

        if result.error_codes:
            logger.error("reCAPTCHA errors: %s", result.error_codes)
        elif decision.score is not None:
            logger.warning("reCAPTCHA score %.2f below threshold %.2f", decision.score, self.min_score)
        elif decision.message == ACTION_MISMATCH_MESSAGE:
            logger.warning("reCAPTCHA action mismatch: expected %r, got %r", action, result.action)
        else:
            logger.warning("reCAPTCHA reported success=false")
        raise VerificationFailure(message=decision.message, score=decision.score)
