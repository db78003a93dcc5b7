"""Session resolution.

Sign-in happens elsewhere; the trusted front end forwards the shared
API key together with the signed-in user's ID:

    Authorization: Bearer <auth_api_key>
    X-User-ID: <user id>
"""

from dataclasses import dataclass
from typing import Mapping

from storefront.infrastructure.config import settings

USER_ID_HEADER = "X-User-ID"


@dataclass(frozen=True)
class Session:
    """Authenticated admin user for a request."""

    user_id: str


def resolve_session(headers: Mapping[str, str], api_key: str | None = None) -> Session | None:
    """Resolve the session carried by request headers.

    Args:
        headers: Request headers (case-insensitive mapping).
        api_key: Expected key; defaults to ``settings.auth_api_key``.

    Returns:
        Session if the key matches and a user ID is present, None otherwise.
    """
    expected = api_key if api_key is not None else settings.auth_api_key

    auth_header = headers.get("Authorization")
    if not auth_header:
        return None

    parts = auth_header.split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    if parts[1] != expected:
        return None

    user_id = (headers.get(USER_ID_HEADER) or "").strip()
    if not user_id:
        return None

    return Session(user_id=user_id)
