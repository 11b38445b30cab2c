"""Booking data enrichment from the Shopify Admin GraphQL API.

The handler calls an enricher only after the token passed verification.
The Shopify implementation pulls the ``custom_location`` and ``stylist``
metaobjects and keeps the ``booking_link`` field of each, keyed by handle.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List

import requests

from .errors import UpstreamFailure
from .models import MetaobjectNode


SHOPIFY_API_VERSION = "2024-10"
BOOKING_LINK_KEY = "booking_link"

METAOBJECTS_QUERY = """
query ShopMetaobjects {
  customLocations: metaobjects(first: 100, type: "custom_location") {
    edges {
      node {
        id
        handle
        displayName
        fields {
          key
          value
        }
      }
    }
  }
  stylists: metaobjects(first: 100, type: "stylist") {
    edges {
      node {
        id
        handle
        displayName
        fields {
          key
          value
        }
      }
    }
  }
}
"""

# GraphQL alias -> output key
CATEGORIES = {
    "customLocations": "locations",
    "stylists": "stylists",
}

logger = logging.getLogger(__name__)


class Enricher(ABC):
    """Supplies the ``data`` section of a successful response."""

    @abstractmethod
    def fetch(self) -> Dict[str, Any]:
        """Return auxiliary data or raise UpstreamFailure."""


class ShopifyBookingFetcher(Enricher):
    def __init__(self, shop_domain: str, access_token: str) -> None:
        self.shop_domain = shop_domain
        self._access_token = access_token

    @property
    def endpoint(self) -> str:
        return f"https://{self.shop_domain}/admin/api/{SHOPIFY_API_VERSION}/graphql.json"

    def fetch(self) -> Dict[str, Dict[str, str]]:
        try:
            response = requests.post(
                self.endpoint,
                headers={
                    "Content-Type": "application/json",
                    "X-Shopify-Access-Token": self._access_token,
                },
                json={"query": METAOBJECTS_QUERY},
            )
        except requests.RequestException as exc:
            logger.error("Shopify API request error: %s", exc)
            raise UpstreamFailure(f"Shopify API request error: {exc}") from exc

        if not response.ok:
            logger.error("Shopify API request failed: %s", response.status_code)
            raise UpstreamFailure(f"Shopify API request failed: {response.status_code}")

        try:
            body = response.json()
        except ValueError as exc:
            logger.error("Shopify API returned invalid JSON")
            raise UpstreamFailure("Shopify API returned invalid JSON") from exc

        if not isinstance(body, dict):
            raise UpstreamFailure("Shopify API returned an unexpected payload")
        if body.get("errors"):
            logger.error("Shopify API errors: %s", body["errors"])
            raise UpstreamFailure(f"Shopify API errors: {body['errors']}")

        try:
            return extract_booking_links(body.get("data") or {})
        except (KeyError, TypeError, AttributeError) as exc:
            logger.error("Unexpected Shopify response shape: %s", exc)
            raise UpstreamFailure(f"Unexpected Shopify response shape: {exc}") from exc


def _nodes(connection: Dict[str, Any]) -> List[MetaobjectNode]:
    return [MetaobjectNode.from_dict(edge["node"]) for edge in connection.get("edges", [])]


def extract_booking_links(data: Dict[str, Any]) -> Dict[str, Dict[str, str]]:
    """Map each category's metaobject handles to their booking links.

    Nodes without a non-empty ``booking_link`` field are left out.
    """
    result: Dict[str, Dict[str, str]] = {}
    for alias, output_key in CATEGORIES.items():
        links: Dict[str, str] = {}
        for node in _nodes(data.get(alias) or {}):
            value = node.field_value(BOOKING_LINK_KEY)
            if value:
                links[node.handle] = value
        result[output_key] = links
    return result
