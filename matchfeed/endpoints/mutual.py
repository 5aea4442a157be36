"""Shared-connection counts from /mutual-friends."""

from ..client import MatchfeedClient, TransportError

ENDPOINT = "mutual-friends"
PATH = "/mutual-friends"


def fetch_mutual_connections(client: MatchfeedClient, user_id_a: str, user_id_b: str) -> int:
    """Number of connections the two users share.

    The endpoint answers with either the list of shared ids or a bare count.
    """
    payload = client.get_json(PATH, ENDPOINT, params={"userid1": user_id_a, "userid2": user_id_b})
    if isinstance(payload, list):
        return len(payload)
    if isinstance(payload, int) and not isinstance(payload, bool) and payload >= 0:
        return payload
    if isinstance(payload, dict) and isinstance(payload.get("count"), int):
        return max(0, payload["count"])
    raise TransportError(f"{ENDPOINT} returned an unexpected body", ENDPOINT)
