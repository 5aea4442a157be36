"""
Carousel composition for the review page.

CarouselDisplay produces declarative Slide/Indicator lists; the page layer
turns them into markup. Slide i always pairs with indicator i.
"""

from typing import List, Optional

from .logger import get_logger
from .media import MediaResolver
from .models import Candidate, Caption, Indicator, NO_MATCHES_IMAGE, PLACEHOLDER_IMAGE, Slide


def mutual_connections_text(count: Optional[int]) -> Optional[str]:
    if count is None:
        return None
    noun = "mutual friend" if count == 1 else "mutual friends"
    return f"{count} {noun}"


def build_indicators(count: int) -> List[Indicator]:
    return [Indicator(index=i, active=(i == 0)) for i in range(count)]


class CarouselDisplay:
    """Holds the currently rendered slides and indicators."""

    def __init__(self, resolver: MediaResolver):
        self.resolver = resolver
        self.slides: List[Slide] = []
        self.indicators: List[Indicator] = []

    def clear(self) -> None:
        self.slides = []
        self.indicators = []

    def render(self, candidate: Candidate, mutual_connections: Optional[int]) -> None:
        """Replace the display with one slide per present image of candidate.

        mutual_connections is None when that lookup failed; the caption then
        carries only name and bio.
        """
        self.clear()
        mutual_text = mutual_connections_text(mutual_connections)
        images = [self.resolver.resolve(ref) for ref in candidate.present_image_refs()]

        if not images:
            slides = [Slide(image=PLACEHOLDER_IMAGE, active=True, caption=Caption("", "", mutual_text))]
        else:
            caption = Caption(candidate.name, candidate.bio or "", mutual_text)
            slides = [Slide(image=image, active=(i == 0), caption=caption) for i, image in enumerate(images)]

        self._show(slides)
        get_logger().debug("Rendered candidate", candidate=candidate.id, slides=len(slides))

    def render_exhausted(self) -> None:
        """Show the single 'no more candidates' slide."""
        self.clear()
        self._show([Slide(image=NO_MATCHES_IMAGE, active=True)])

    def _show(self, slides: List[Slide]) -> None:
        self.slides = slides
        self.indicators = build_indicators(len(slides))

    @property
    def active_index(self) -> Optional[int]:
        for i, slide in enumerate(self.slides):
            if slide.active:
                return i
        return None

    def is_empty(self) -> bool:
        return not self.slides
