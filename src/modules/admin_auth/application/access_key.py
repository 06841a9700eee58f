"""Access key generation."""

import secrets
import string

UPPERCASE = string.ascii_uppercase
LOWERCASE = string.ascii_lowercase
DIGITS = string.digits
ALPHABET = UPPERCASE + LOWERCASE + DIGITS

_system_random = secrets.SystemRandom()


def generate_access_key(length: int = 12) -> str:
    """Generate a random alphanumeric key.

    The key always holds at least one uppercase letter, one lowercase letter
    and one digit. Characters are shuffled so those guaranteed characters do
    not sit at fixed positions.
    """
    if length < 3:
        raise ValueError("Access key length must be at least 3")

    chars = [
        secrets.choice(UPPERCASE),
        secrets.choice(LOWERCASE),
        secrets.choice(DIGITS),
    ]
    chars.extend(secrets.choice(ALPHABET) for _ in range(length - 3))
    _system_random.shuffle(chars)
    return "".join(chars)
