"""
Image reference resolution.

Turns an opaque blob key into an ImageHandle. Any key that cannot be
resolved yields the canonical placeholder, so a display never holds a
broken image.
"""

import base64
from typing import Optional

from .client import MatchfeedClient, TransportError
from .endpoints.blobs import fetch_blob
from .logger import get_logger
from .models import ImageHandle, PLACEHOLDER_IMAGE


def to_data_uri(content: bytes, content_type: str) -> str:
    encoded = base64.b64encode(content).decode("ascii")
    return f"data:{content_type};base64,{encoded}"


class MediaResolver:
    """Resolves image keys through the blob endpoint."""

    def __init__(self, client: MatchfeedClient, placeholder: ImageHandle = PLACEHOLDER_IMAGE):
        self.client = client
        self.placeholder = placeholder

    def resolve(self, ref: Optional[str]) -> ImageHandle:
        """Return a displayable handle for ref.

        Empty or missing refs return the placeholder without a request;
        a failed fetch returns it too.
        """
        if not ref:
            return self.placeholder
        try:
            content, content_type = fetch_blob(self.client, ref)
        except TransportError as e:
            get_logger().warning("Image unavailable, using placeholder", ref=ref, error=str(e))
            return self.placeholder
        return ImageHandle(src=to_data_uri(content, content_type), ref=ref)
