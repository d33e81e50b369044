"""Issue an access token for calling the selector API by hand.

Usage:
    uv run python -m scripts.issue_access_token <user_id> [role]

role defaults to administrator. Prints the token and a current query nonce.
"""

import sys
from pathlib import Path

from dotenv import load_dotenv

from object_selector.api.v1.endpoints.object_selector import QUERY_ACTION
from object_selector.core.config import get_settings
from object_selector.domain.enums import UserRole
from object_selector.infrastructure.security.jwt import create_access_token
from object_selector.infrastructure.security.nonce import NonceManager


def main() -> None:
    if len(sys.argv) < 2:
        print(
            "Usage: uv run python -m scripts.issue_access_token <user_id> [role]",
            file=sys.stderr,
        )
        sys.exit(1)
    load_dotenv(Path(__file__).resolve().parent.parent / ".env", override=True)
    user_id = sys.argv[1]
    role = sys.argv[2] if len(sys.argv) > 2 else UserRole.ADMINISTRATOR.value
    if role not in {r.value for r in UserRole}:
        print(f"Unknown role: {role}", file=sys.stderr)
        sys.exit(1)

    settings = get_settings()
    token = create_access_token({"sub": user_id, "role": role})
    nonce = NonceManager(
        settings.secret_key.get_secret_value(),
        lifetime_seconds=settings.nonce_lifetime_seconds,
    ).create_nonce(QUERY_ACTION, user_id)
    print(f"Authorization: Bearer {token}")
    print(f"customize_object_selector_query_nonce={nonce}")


if __name__ == "__main__":
    main()
