from typing import Optional
from fastapi import Request
from pathfinder.core.jwt import decode_token


class NotAuthenticatedError(Exception):
    """Raised when a protected route is reached without a valid session."""
    def __init__(self, message: str = "You must be logged in"):
        self.message = message
        super().__init__(message)


def get_current_user_from_request(request: Request) -> Optional[int]:
    """
    Helper to extract user_id from token without redirecting.
    Returns None if invalid.
    """
    token = request.cookies.get("access_token")
    if not token:
        return None

    payload = decode_token(token)
    if not payload or not payload.get("sub"):
        return None

    try:
        return int(payload["sub"])
    except (TypeError, ValueError):
        return None
