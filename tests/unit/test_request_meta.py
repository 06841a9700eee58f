"""Tests for caller IP resolution behind proxies."""

import pytest
from starlette.requests import Request

from src.core.config import settings
from src.core.interfaces.http.request_meta import get_client_ip, is_trusted_proxy


def _request(peer: str | None, **headers: str) -> Request:
    scope = {
        "type": "http",
        "method": "GET",
        "path": "/",
        "headers": [
            (name.replace("_", "-").encode(), value.encode())
            for name, value in headers.items()
        ],
        "client": (peer, 50000) if peer else None,
    }
    return Request(scope)


class TestUntrustedPeer:
    def test_forwarded_headers_are_ignored(self):
        request = _request(
            "198.51.100.5", x_forwarded_for="203.0.113.7", x_real_ip="203.0.113.8"
        )
        assert get_client_ip(request) == "198.51.100.5"

    def test_missing_peer_is_unknown(self):
        assert get_client_ip(_request(None, x_forwarded_for="203.0.113.7")) == "unknown"


class TestTrustedProxy:
    @pytest.fixture(autouse=True)
    def trusted(self, monkeypatch):
        monkeypatch.setattr(settings, "TRUSTED_PROXIES", ["10.0.0.0/8"])

    def test_rightmost_untrusted_hop_wins(self):
        request = _request(
            "10.0.0.2", x_forwarded_for="1.2.3.4, 203.0.113.7, 10.0.0.9"
        )
        assert get_client_ip(request) == "203.0.113.7"

    def test_all_trusted_hops_fall_back_to_first(self):
        request = _request("10.0.0.2", x_forwarded_for="10.1.1.1, 10.0.0.9")
        assert get_client_ip(request) == "10.1.1.1"

    def test_real_ip_used_without_forwarded_for(self):
        assert get_client_ip(_request("10.0.0.2", x_real_ip="203.0.113.8")) == (
            "203.0.113.8"
        )

    def test_peer_used_without_headers(self):
        assert get_client_ip(_request("10.0.0.2")) == "10.0.0.2"

    def test_peer_outside_network_is_not_trusted(self):
        request = _request("192.0.2.1", x_forwarded_for="203.0.113.7")
        assert get_client_ip(request) == "192.0.2.1"


def test_invalid_host_is_not_trusted(monkeypatch):
    monkeypatch.setattr(settings, "TRUSTED_PROXIES", ["127.0.0.1"])
    assert is_trusted_proxy("not-an-ip") is False
    assert is_trusted_proxy("127.0.0.1") is True
