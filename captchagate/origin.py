"""Origin gate: CORS headers and the method short-circuit.

Runs before anything else looks at the request:
- OPTIONS -> 200 with an empty body
- anything but POST -> 405
- POST -> continue to verification
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Iterable, Optional

from .models import HandlerResponse


ALLOW_METHODS = "POST, OPTIONS"
ALLOW_HEADERS = "Content-Type"


class OriginDecision(Enum):
    PREFLIGHT = "PREFLIGHT"
    REJECT_METHOD = "REJECT_METHOD"
    CONTINUE = "CONTINUE"


class OriginGate:
    """Decides CORS exposure for a fixed allow-list of origins."""

    def __init__(self, allowed_origins: Iterable[str]) -> None:
        self.allowed_origins = frozenset(allowed_origins)

    def cors_headers(self, origin: Optional[str]) -> Dict[str, str]:
        headers = {}
        if origin and origin in self.allowed_origins:
            headers["Access-Control-Allow-Origin"] = origin
        headers["Access-Control-Allow-Methods"] = ALLOW_METHODS
        headers["Access-Control-Allow-Headers"] = ALLOW_HEADERS
        return headers

    @staticmethod
    def evaluate(method: str) -> OriginDecision:
        method = (method or "").upper()
        if method == "OPTIONS":
            return OriginDecision.PREFLIGHT
        if method != "POST":
            return OriginDecision.REJECT_METHOD
        return OriginDecision.CONTINUE

    def short_circuit(self, method: str, origin: Optional[str]) -> Optional[HandlerResponse]:
        """Return the final response for preflight/non-POST, or None to continue."""
        decision = self.evaluate(method)
        if decision is OriginDecision.PREFLIGHT:
            return HandlerResponse(200, self.cors_headers(origin), None)
        if decision is OriginDecision.REJECT_METHOD:
            return HandlerResponse(
                405,
                self.cors_headers(origin),
                {"success": False, "message": "Method not allowed"},
            )
        return None
