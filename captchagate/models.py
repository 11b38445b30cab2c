"""Request-scoped values passed between the gate's stages."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


@dataclass
class IncomingRequest:
    """What the handler needs from an inbound HTTP request."""

    method: str
    origin: Optional[str] = None
    forwarded_for: Optional[str] = None
    remote_addr: Optional[str] = None
    body: Dict[str, Any] = field(default_factory=dict)

    @property
    def token(self) -> Optional[str]:
        return self.body.get("token") or None

    @property
    def action(self) -> Optional[str]:
        return self.body.get("action") or None

    @property
    def client_ip(self) -> Optional[str]:
        """First hop of X-Forwarded-For, else the connection's peer address."""
        if self.forwarded_for:
            first = self.forwarded_for.split(",")[0].strip()
            if first:
                return first
        return self.remote_addr or None


@dataclass
class VerificationResult:
    """Parsed siteverify response."""

    success: bool
    score: Optional[float] = None
    action: Optional[str] = None
    error_codes: List[str] = field(default_factory=list)
    hostname: Optional[str] = None
    challenge_ts: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "VerificationResult":
        if not isinstance(data, dict):
            raise ValueError("Verification response is not a JSON object.")
        score = data.get("score")
        if isinstance(score, bool):
            raise ValueError("Verification score is not a number.")
        return cls(
            success=data.get("success") is True,
            score=float(score) if score is not None else None,
            action=data.get("action"),
            error_codes=list(data.get("error-codes") or []),
            hostname=data.get("hostname"),
            challenge_ts=data.get("challenge_ts"),
        )


@dataclass(frozen=True)
class VerificationDecision:
    passed: bool
    message: str
    score: Optional[float] = None


@dataclass
class MetaobjectNode:
    """One Shopify metaobject with its ordered key/value fields."""

    id: str
    handle: str
    display_name: str
    fields: List[Tuple[str, Optional[str]]]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MetaobjectNode":
        return cls(
            id=data.get("id", ""),
            handle=data["handle"],
            display_name=data.get("displayName", ""),
            fields=[(item.get("key"), item.get("value")) for item in data.get("fields") or []],
        )

    def field_value(self, key: str) -> Optional[str]:
        for field_key, value in self.fields:
            if field_key == key:
                return value
        return None


@dataclass
class HandlerResponse:
    """Transport-neutral response: a payload of None means an empty body."""

    status: int
    headers: Dict[str, str]
    payload: Optional[Dict[str, Any]] = None
