"""Acting-user lookup from the page's query string, and per-user page links."""

from collections.abc import Mapping
from typing import Dict, Optional, Union
from urllib.parse import parse_qs, urlencode

ID_PARAM = "id"
PAGES = ("profile", "feed", "matches")


def _query_part(location: str) -> str:
    """Query string of a URL, path or bare query ('id=u1', '?id=u1')."""
    if "?" in location:
        return location.split("?", 1)[1].split("#", 1)[0]
    if "=" in location and "/" not in location:
        return location
    return ""


def current_user_id(location: Union[str, Mapping[str, str], None]) -> Optional[str]:
    """
    Return the `id` query parameter, or None when it is missing or empty.

    Args:
        location: An absolute or relative URL, a bare query string
            ('id=u1' or '?id=u1'),
            or an already-parsed mapping of parameters

    Returns:
        The user id, or None
    """
    if location is None:
        return None
    if isinstance(location, Mapping):
        value = location.get(ID_PARAM)
    else:
        query = _query_part(location)
        values = parse_qs(query).get(ID_PARAM)
        value = values[0] if values else None
    if not isinstance(value, str) or not value.strip():
        return None
    return value


def page_link(page: str, user_id: str) -> str:
    if page not in PAGES:
        raise ValueError(f"Unknown page {page!r} (expected one of: {', '.join(PAGES)})")
    return f"{page}.html?{urlencode({ID_PARAM: user_id})}"


def navigation_links(user_id: Optional[str]) -> Dict[str, str]:
    """Links to the profile, feed and matches pages for user_id ({} when absent)."""
    if not user_id:
        return {}
    return {page: page_link(page, user_id) for page in PAGES}
