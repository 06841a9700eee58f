"""Caller metadata helpers."""

from functools import lru_cache
from ipaddress import IPv4Network, IPv6Network, ip_address, ip_network

from fastapi import Request

from src.core.config import settings

UNKNOWN_CLIENT_IP = "unknown"


@lru_cache(maxsize=8)
def _networks(proxies: tuple[str, ...]) -> tuple[IPv4Network | IPv6Network, ...]:
    return tuple(
        ip_network(proxy.strip(), strict=False) for proxy in proxies if proxy.strip()
    )


def is_trusted_proxy(host: str | None) -> bool:
    if not host or not settings.TRUSTED_PROXIES:
        return False
    try:
        address = ip_address(host)
    except ValueError:
        return False
    networks = _networks(tuple(settings.TRUSTED_PROXIES))
    return any(address in network for network in networks)


def get_client_ip(request: Request) -> str:
    """Resolve the caller's IP.

    Forwarding headers are read only when the socket peer is a trusted
    proxy. X-Forwarded-For is walked from the right, skipping trusted hops,
    because entries left of the last trusted proxy are client-supplied.
    """
    peer = request.client.host if request.client else None

    if is_trusted_proxy(peer):
        forwarded_for = request.headers.get("x-forwarded-for")
        if forwarded_for:
            hops = [hop.strip() for hop in forwarded_for.split(",") if hop.strip()]
            for hop in reversed(hops):
                if not is_trusted_proxy(hop):
                    return hop
            if hops:
                return hops[0]
        real_ip = request.headers.get("x-real-ip")
        if real_ip:
            return real_ip.strip()

    return peer or UNKNOWN_CLIENT_IP


def get_user_agent(request: Request) -> str:
    return request.headers.get("user-agent") or ""
