"""Raw image bytes from /blob-key."""

from typing import Tuple

from ..client import MatchfeedClient, TransportError

ENDPOINT = "blob-key"
PATH = "/blob-key"
DEFAULT_CONTENT_TYPE = "application/octet-stream"


def fetch_blob(client: MatchfeedClient, image_key: str) -> Tuple[bytes, str]:
    """Return (content, content_type) for an image key.

    An empty body is treated as a failed fetch.
    """
    resp = client.get(PATH, ENDPOINT, params={"imageKey": image_key})
    content = resp.content
    if not content:
        raise TransportError(f"{ENDPOINT} returned no content for {image_key}", ENDPOINT, resp.status_code)
    content_type = resp.headers.get("Content-Type") or DEFAULT_CONTENT_TYPE
    return content, content_type.split(";")[0].strip()
