"""Key naming for shared auth state.

Used by both the memory store and Redis so the two backends are
interchangeable:
- Access keys: one outstanding key per admin email
- Rate limits: failed-attempt counters and lockouts per fingerprint
- IP bans: addresses banned by the input classifier
"""


class StateKeys:
    """Key namespace management."""

    # admin:access_key:{email}
    ACCESS_KEY_PREFIX = "admin:access_key"

    # admin:ratelimit:{fingerprint}
    RATE_LIMIT_PREFIX = "admin:ratelimit"

    # security:banned_ip:{ip}
    BANNED_IP_PREFIX = "security:banned_ip"

    @classmethod
    def access_key(cls, email: str) -> str:
        """Build the access key record key.

        Args:
            email: Email the key was issued to (lower-cased)

        Returns:
            Formatted key
        """
        return f"{cls.ACCESS_KEY_PREFIX}:{email.lower()}"

    @classmethod
    def rate_limit(cls, fingerprint: str) -> str:
        """Build the rate limit record key."""
        return f"{cls.RATE_LIMIT_PREFIX}:{fingerprint}"

    @classmethod
    def banned_ip(cls, ip: str) -> str:
        """Build the IP ban key."""
        return f"{cls.BANNED_IP_PREFIX}:{ip}"
