"""Error taxonomy for the CAPTCHA gate.

Every error carries the HTTP status it maps to and a message that is safe
to return to the caller. Internal details stay in the log.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


SERVER_CONFIGURATION_MESSAGE = "Server configuration error"
TOKEN_REQUIRED_MESSAGE = "CAPTCHA token is required"
FETCH_FAILED_MESSAGE = "Failed to fetch booking data"
UNEXPECTED_MESSAGE = "Internal server error during CAPTCHA verification"


class CaptchaGateError(Exception):
    """Base class for errors that become a JSON failure payload."""

    status_code = 500
    message = UNEXPECTED_MESSAGE

    def __init__(self, detail: Optional[str] = None, message: Optional[str] = None) -> None:
        super().__init__(detail or message or self.message)
        self.detail = detail
        if message is not None:
            self.message = message

    def to_payload(self) -> Dict[str, Any]:
        return {"success": False, "message": self.message}


class ConfigurationError(CaptchaGateError):
    """A required setting is missing. The detail names it; the caller never sees it."""

    status_code = 500
    message = SERVER_CONFIGURATION_MESSAGE


class ValidationError(CaptchaGateError):
    status_code = 400
    message = TOKEN_REQUIRED_MESSAGE


class VerificationFailure(CaptchaGateError):
    """The verification service rejected the token, or the policy did."""

    status_code = 400
    message = "CAPTCHA verification failed"

    def __init__(
        self,
        message: Optional[str] = None,
        score: Optional[float] = None,
        detail: Optional[str] = None,
    ) -> None:
        super().__init__(detail=detail, message=message)
        self.score = score

    def to_payload(self) -> Dict[str, Any]:
        payload = super().to_payload()
        if self.score is not None:
            payload["score"] = self.score
        return payload


class UpstreamFailure(CaptchaGateError):
    """The booking data API was unreachable or reported errors."""

    status_code = 500
    message = FETCH_FAILED_MESSAGE
