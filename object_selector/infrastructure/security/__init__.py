"""Security: JWT caller tokens and per-action nonces."""

from object_selector.infrastructure.security.jwt import create_access_token, verify_token
from object_selector.infrastructure.security.nonce import NonceManager

__all__ = ["NonceManager", "create_access_token", "verify_token"]
