"""Per-action anti-forgery tokens bound to a user (implements INonceManager).

A nonce is the first 10 hex characters of HMAC-SHA256 over
``tick|action|user_id``. The tick advances every half lifetime, and a nonce
verifies during its own tick and the next one.
"""

import hashlib
import hmac
import math
import time
from collections.abc import Callable


class NonceManager:
    """Create and verify nonces with a server secret."""

    NONCE_LENGTH = 10

    def __init__(
        self,
        secret_key: str,
        lifetime_seconds: int = 86_400,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._secret = secret_key.encode()
        self.lifetime_seconds = lifetime_seconds
        self._clock = clock

    def tick(self) -> int:
        return math.ceil(self._clock() / (self.lifetime_seconds / 2))

    def _digest(self, tick: int, action: str, user_id: str) -> str:
        message = f"{tick}|{action}|{user_id}".encode()
        return hmac.new(self._secret, message, hashlib.sha256).hexdigest()[: self.NONCE_LENGTH]

    def create_nonce(self, action: str, user_id: str) -> str:
        return self._digest(self.tick(), action, user_id)

    def verify_nonce(self, nonce: str | None, action: str, user_id: str) -> bool:
        if not isinstance(nonce, str) or not nonce:
            return False
        tick = self.tick()
        candidate = nonce.encode()
        return any(
            hmac.compare_digest(candidate, self._digest(t, action, user_id).encode())
            for t in (tick, tick - 1)
        )
