# tests/conftest.py
import pytest
import requests

from captchagate import create_app
from captchagate.config import GateConfig

SHOP_DOMAIN = "billy-reid.myshopify.com"
SHOPIFY_URL = f"https://{SHOP_DOMAIN}/admin/api/2024-10/graphql.json"


class FakeResponse:
    def __init__(self, payload=None, status_code=200):
        self._payload = payload
        self.status_code = status_code

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class FakeHttp:
    """Stands in for requests.post; answers by URL and records every call."""

    def __init__(self):
        self.routes = {}
        self.calls = []

    def add(self, url, payload=None, status_code=200, exc=None):
        self.routes[url] = exc if exc is not None else FakeResponse(payload, status_code)

    def calls_to(self, url):
        return [c for c in self.calls if c["url"] == url]

    def __call__(self, url, **kwargs):
        self.calls.append({"url": url, **kwargs})
        if url not in self.routes:
            raise AssertionError(f"unexpected outbound call to {url}")
        route = self.routes[url]
        if isinstance(route, Exception):
            raise route
        return route


def metaobject(handle, booking_link=None, extra_fields=()):
    fields = [{"key": key, "value": value} for key, value in extra_fields]
    if booking_link is not None:
        fields.append({"key": "booking_link", "value": booking_link})
    return {
        "node": {
            "id": f"gid://shopify/Metaobject/{handle}",
            "handle": handle,
            "displayName": handle.replace("-", " ").title(),
            "fields": fields,
        }
    }


def shopify_body(locations=(), stylists=()):
    return {
        "data": {
            "customLocations": {"edges": list(locations)},
            "stylists": {"edges": list(stylists)},
        }
    }


@pytest.fixture
def fake_http(monkeypatch):
    fake = FakeHttp()
    monkeypatch.setattr(requests, "post", fake)
    return fake


@pytest.fixture
def config():
    return GateConfig(
        recaptcha_secret_key="test-secret",
        shopify_access_token="shpat_test",
        shopify_shop_domain=SHOP_DOMAIN,
        booking_data_enabled=True,
    )


@pytest.fixture
def verify_only_config():
    return GateConfig(recaptcha_secret_key="test-secret", booking_data_enabled=False)


@pytest.fixture
def client(config, fake_http):
    return create_app(config).test_client()


@pytest.fixture
def verify_only_client(verify_only_config, fake_http):
    return create_app(verify_only_config).test_client()
