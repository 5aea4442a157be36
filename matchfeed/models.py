"""
Value types shared by the fetchers, the renderer and the review flow.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

# Must match the potential-matches endpoint byte for byte.
NO_POTENTIAL_MATCHES = "NO_POTENTIAL_MATCHES"

MAX_IMAGE_SLOTS = 5


class Verdict(str, Enum):
    FRIENDED = "FRIENDED"
    PASSED = "PASSED"

    @classmethod
    def parse(cls, value: str) -> "Verdict":
        try:
            return cls(value.strip().upper())
        except ValueError:
            choices = ", ".join(v.value for v in cls)
            raise ValueError(f"Unknown verdict {value!r} (expected one of: {choices})")


def is_sentinel(candidate_id: str) -> bool:
    return candidate_id == NO_POTENTIAL_MATCHES


@dataclass(frozen=True)
class Candidate:
    """A user proposed to the reviewer, as returned by /user-data."""

    id: str
    name: str = ""
    bio: str = ""
    image_refs: Tuple[str, ...] = ()
    profile_link: Optional[str] = None

    def present_image_refs(self) -> List[str]:
        """Image keys with unset ("") slots dropped, original order kept."""
        return [ref for ref in self.image_refs if isinstance(ref, str) and ref != ""]

    @classmethod
    def from_payload(cls, user_id: str, payload: Dict[str, Any]) -> "Candidate":
        blobkeys = payload.get("blobkeys") or []
        if not isinstance(blobkeys, list):
            blobkeys = []
        refs = tuple(k if isinstance(k, str) else "" for k in blobkeys[:MAX_IMAGE_SLOTS])
        return cls(
            id=str(payload.get("id") or user_id),
            name=payload.get("name") or "",
            bio=payload.get("bio") or "",
            image_refs=refs,
            profile_link=payload.get("profileLink") or None,
        )


@dataclass(frozen=True)
class Decision:
    reviewer_id: str
    candidate_id: str
    verdict: Verdict

    def __post_init__(self):
        if not self.reviewer_id:
            raise ValueError("Decision requires a reviewer id")
        if not self.candidate_id or is_sentinel(self.candidate_id):
            raise ValueError(f"Decision requires a real candidate id, got {self.candidate_id!r}")

    def as_form(self) -> Dict[str, str]:
        """Form fields read by the match-decisions endpoint."""
        return {
            "userid": self.reviewer_id,
            "potentialMatchID": self.candidate_id,
            "decision": self.verdict.value,
        }


@dataclass(frozen=True)
class ImageHandle:
    """Something a display layer can put in an <img src>."""

    src: str
    ref: Optional[str] = None
    placeholder: bool = False


PLACEHOLDER_IMAGE = ImageHandle(src="images/noBlobStoreImage.jpg", placeholder=True)
NO_MATCHES_IMAGE = ImageHandle(src="images/nomatches.png", placeholder=True)
CARD_PLACEHOLDER_IMAGE = ImageHandle(src="images/noBlobStoreImage2.jpg", placeholder=True)


@dataclass(frozen=True)
class Caption:
    name: str = ""
    bio: str = ""
    mutual_text: Optional[str] = None

    def lines(self) -> List[str]:
        out = [self.name, self.bio]
        if self.mutual_text is not None:
            out.append(self.mutual_text)
        return out


@dataclass(frozen=True)
class Slide:
    image: ImageHandle
    active: bool = False
    caption: Caption = field(default_factory=Caption)

    @property
    def css_class(self) -> str:
        return "carousel-item active" if self.active else "carousel-item"


@dataclass(frozen=True)
class Indicator:
    index: int
    active: bool = False
    target: str = "#feed"

    @property
    def css_class(self) -> str:
        return "active" if self.active else ""


@dataclass(frozen=True)
class MatchCard:
    user_id: str
    name: str
    image: ImageHandle = CARD_PLACEHOLDER_IMAGE
    bio: Optional[str] = None
    profile_link: Optional[str] = None


@dataclass(frozen=True)
class ProfileView:
    user_id: str
    name: str
    bio: str
    photos: Dict[str, Optional[ImageHandle]] = field(default_factory=dict)
