"""Access token verification."""

import jwt
from jwt import InvalidTokenError

from talkbuddy.config import get_settings

ALGORITHM = "HS256"


def verify_access_token(token: str) -> int | None:
    """Verify an access token and return the user_id if valid."""
    try:
        payload = jwt.decode(token, get_settings().SECRET_KEY, algorithms=[ALGORITHM])
        # Refresh tokens are issued by the account service and never accepted here
        if payload.get("type") == "refresh":
            return None
        user_id = payload.get("sub")
        if user_id is None:
            return None
        return int(user_id)
    except (InvalidTokenError, ValueError):
        return None
