"""User display attributes from /user-data."""

from typing import Optional

from ..client import MatchfeedClient, TransportError
from ..logger import get_logger
from ..models import Candidate

ENDPOINT = "user-data"
PATH = "/user-data"


def fetch_profile(client: MatchfeedClient, user_id: str) -> Optional[Candidate]:
    """Fetch a user's name, bio and image keys.

    Returns None when the backend does not know the user (a `null` body
    or `"user-found": false`).
    """
    payload = client.get_json(PATH, ENDPOINT, params={"id": user_id})
    if payload is None:
        get_logger().info("User not found", user=user_id)
        return None
    if not isinstance(payload, dict):
        raise TransportError(f"{ENDPOINT} returned an unexpected body for {user_id}", ENDPOINT)
    if payload.get("user-found") is False:
        get_logger().info("User not found", user=user_id)
        return None
    return Candidate.from_payload(user_id, payload)
