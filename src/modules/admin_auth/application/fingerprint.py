"""Caller fingerprinting for rate limiting."""


def _utf16_code_units(data: str) -> list[int]:
    raw = data.encode("utf-16-le")
    return [int.from_bytes(raw[i : i + 2], "little") for i in range(0, len(raw), 2)]


def generate_fingerprint(user_agent: str, client_ip: str) -> str:
    """Derive a stable, non-cryptographic caller id.

    32-bit rolling hash (``h * 31 + c``) over ``"{user_agent}-{client_ip}"``
    code units, returned as hex of the absolute signed value. The same
    browser on the same address gets the same fingerprint across the
    issuance and login requests.
    """
    h = 0
    for code in _utf16_code_units(f"{user_agent}-{client_ip}"):
        h = ((h << 5) - h + code) & 0xFFFFFFFF
    if h & 0x80000000:
        h -= 0x100000000
    return format(abs(h), "x")
