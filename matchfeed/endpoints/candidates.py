"""Next-candidate lookup against /potential-matches."""

import json

from ..client import MatchfeedClient, TransportError
from ..logger import get_logger

ENDPOINT = "potential-matches"
PATH = "/potential-matches"
ID_FIELD = "nextPotentialMatchID"


def parse_next_candidate(body: str) -> str:
    """Extract the candidate id from a JSON or plain-text response body.

    Only the line ending a servlet print may add is dropped; the id is
    otherwise returned exactly as sent, so " NO_POTENTIAL_MATCHES " is not
    the sentinel.
    Raises TransportError when no id can be found.
    """
    text = body.rstrip("\r\n")
    try:
        decoded = json.loads(text)
    except ValueError:
        if text.lstrip()[:1] in ("{", "[", '"'):
            raise TransportError(f"{ENDPOINT} returned malformed JSON", ENDPOINT)
        decoded = text

    value = decoded.get(ID_FIELD) if isinstance(decoded, dict) else decoded
    if not isinstance(value, str) or value == "":
        raise TransportError(f"{ENDPOINT} response has no candidate id", ENDPOINT)
    return value


def fetch_next_candidate(client: MatchfeedClient, reviewer_id: str) -> str:
    """Ask the backend for the reviewer's next unreviewed candidate.

    Args:
        client: Backend client
        reviewer_id: The acting user's id

    Returns:
        A candidate id, or NO_POTENTIAL_MATCHES when the pool is exhausted

    Raises:
        TransportError: On network failure or an unusable body
    """
    resp = client.get(PATH, ENDPOINT, params={"userid": reviewer_id})
    candidate_id = parse_next_candidate(resp.text)
    get_logger().debug("Next candidate fetched", reviewer=reviewer_id, candidate=candidate_id)
    return candidate_id
