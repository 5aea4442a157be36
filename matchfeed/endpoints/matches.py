"""Mutual matches from /matches-list."""

from typing import List

from ..client import MatchfeedClient, TransportError

ENDPOINT = "matches-list"
PATH = "/matches-list"


def fetch_matches(client: MatchfeedClient, user_id: str) -> List[str]:
    """Ids of users who matched with user_id, in backend order."""
    payload = client.get_json(PATH, ENDPOINT, params={"id": user_id})
    if payload is None:
        return []
    if not isinstance(payload, list):
        raise TransportError(f"{ENDPOINT} returned an unexpected body", ENDPOINT)
    return [str(item) for item in payload if item]
