"""DTO for the authenticated caller of a selector request."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CallerIdentity:
    """Caller resolved from the access token: user id (sub) and capability role."""

    user_id: str
    role: str | None = None
