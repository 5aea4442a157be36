"""
Profile and matches page data.

Both pages start from the acting user's id and skip everything when it is
absent. Users the backend does not know are left out.
"""

from typing import List, Optional

from .client import MatchfeedClient
from .endpoints.matches import fetch_matches
from .endpoints.profiles import fetch_profile
from .logger import get_logger
from .media import MediaResolver
from .models import CARD_PLACEHOLDER_IMAGE, MAX_IMAGE_SLOTS, MatchCard, ProfileView

# Element ids of the five photo slots on the profile page.
PHOTO_SLOTS = (
    "profile-photo-image",
    "photo-2-image",
    "photo-3-image",
    "photo-4-image",
    "photo-5-image",
)


def load_profile(
    client: MatchfeedClient,
    user_id: Optional[str],
    resolver: Optional[MediaResolver] = None,
) -> Optional[ProfileView]:
    """
    Load the editable profile of the acting user.

    Args:
        client: Backend client
        user_id: Acting user's id; None skips the load
        resolver: Image resolver (defaults to one on the same client)

    Returns:
        ProfileView, or None when there is no user id or no such user.
        Unset photo slots map to None.
    """
    if not user_id:
        get_logger().debug("No user id, skipping profile load")
        return None
    profile = fetch_profile(client, user_id)
    if profile is None:
        return None

    resolver = resolver or MediaResolver(client)
    refs = list(profile.image_refs) + [""] * (MAX_IMAGE_SLOTS - len(profile.image_refs))
    photos = {}
    for slot, ref in zip(PHOTO_SLOTS, refs):
        photos[slot] = resolver.resolve(ref) if ref else None

    return ProfileView(user_id=user_id, name=profile.name, bio=profile.bio, photos=photos)


def build_match_cards(client: MatchfeedClient, user_id: Optional[str]) -> List[MatchCard]:
    """One card per mutual match, in the order the backend lists them."""
    if not user_id:
        get_logger().debug("No user id, skipping matches")
        return []

    cards: List[MatchCard] = []
    for match_id in fetch_matches(client, user_id):
        profile = fetch_profile(client, match_id)
        if profile is None:
            continue
        cards.append(
            MatchCard(
                user_id=match_id,
                name=profile.name,
                image=CARD_PLACEHOLDER_IMAGE,
                bio=profile.bio or None,
                profile_link=profile.profile_link,
            )
        )
    get_logger().debug("Built match cards", user=user_id, cards=len(cards))
    return cards
