"""Short, URL-safe record identifiers.

Eight characters from the URL-safe base64 alphabet (48 random bits).
Uniqueness is probabilistic; the store re-draws on the rare collision
with a live id.
"""

import secrets

ID_BYTES = 6


def generate() -> str:
    """Return a fresh identifier such as ``"Xb3_k9Qa"``."""
    return secrets.token_urlsafe(ID_BYTES)
