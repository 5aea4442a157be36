"""
Tests for carousel composition.
"""

import pytest

from matchfeed.media import MediaResolver
from matchfeed.models import Candidate, NO_MATCHES_IMAGE, PLACEHOLDER_IMAGE
from matchfeed.render import CarouselDisplay, build_indicators, mutual_connections_text

from conftest import make_response


def blob_route(params, data):
    key = params.get("imageKey")
    if key.startswith("bad"):
        return make_response(404, text="missing")
    return make_response(content=key.encode("utf-8"), headers={"Content-Type": "image/png"})


@pytest.fixture
def display(client, session):
    session.routes["/blob-key"] = blob_route
    return CarouselDisplay(MediaResolver(client))


def assert_aligned(display):
    assert len(display.slides) == len(display.indicators)
    for i, indicator in enumerate(display.indicators):
        assert indicator.index == i
        assert indicator.active == display.slides[i].active
    assert sum(1 for s in display.slides if s.active) == (1 if display.slides else 0)


class TestRender:
    @pytest.mark.parametrize("refs, expected", [
        (("a", "", "", "", ""), 1),
        (("a", "", "c", "", ""), 2),
        (("", "b", "c", "d", ""), 3),
        (("a", "b", "c", "d", "e"), 5),
    ])
    def test_one_slide_per_present_image(self, display, refs, expected):
        display.render(Candidate(id="u2", name="Ada", image_refs=refs), 1)

        assert len(display.slides) == expected
        assert len(display.indicators) == expected
        assert display.slides[0].active and display.indicators[0].active
        assert not any(s.active for s in display.slides[1:])
        assert not any(i.active for i in display.indicators[1:])
        assert_aligned(display)

    def test_slides_keep_original_order(self, display, session):
        display.render(Candidate(id="u2", image_refs=("", "k2", "", "k4", "k5")), None)

        assert [s.image.ref for s in display.slides] == ["k2", "k4", "k5"]
        assert [c["params"]["imageKey"] for c in session.calls_to("/blob-key")] == ["k2", "k4", "k5"]

    def test_all_slots_empty_gives_single_placeholder(self, display, session):
        display.render(Candidate(id="u2", name="Grace", bio="hi", image_refs=("",) * 5), 2)

        assert len(display.slides) == 1
        assert len(display.indicators) == 1
        slide = display.slides[0]
        assert slide.image is PLACEHOLDER_IMAGE
        assert slide.active
        assert slide.caption.name == ""
        assert slide.caption.bio == ""
        assert session.calls_to("/blob-key") == []

    def test_failed_image_uses_placeholder_slide(self, display):
        display.render(Candidate(id="u2", image_refs=("good", "bad-1")), 0)

        assert len(display.slides) == 2
        assert not display.slides[0].image.placeholder
        assert display.slides[1].image is PLACEHOLDER_IMAGE

    def test_caption_has_name_bio_and_mutual_text(self, display):
        display.render(Candidate(id="u2", name="Ada", bio="", image_refs=("a", "b")), 3)

        for slide in display.slides:
            assert slide.caption.name == "Ada"
            assert slide.caption.bio == ""
            assert slide.caption.mutual_text == "3 mutual friends"

    def test_caption_omits_mutual_text_when_unknown(self, display):
        display.render(Candidate(id="u2", name="Ada", bio="x", image_refs=("a",)), None)

        assert display.slides[0].caption.mutual_text is None
        assert display.slides[0].caption.lines() == ["Ada", "x"]

    def test_render_replaces_previous_candidate(self, display):
        display.render(Candidate(id="u2", image_refs=("a", "b", "c")), 0)
        display.render(Candidate(id="u3", image_refs=("d",)), 0)

        assert [s.image.ref for s in display.slides] == ["d"]
        assert_aligned(display)


class TestClear:
    def test_clear_is_idempotent(self, display):
        display.render(Candidate(id="u2", image_refs=("a", "b")), 0)

        display.clear()
        assert (len(display.slides), len(display.indicators)) == (0, 0)
        display.clear()
        assert (len(display.slides), len(display.indicators)) == (0, 0)
        assert display.is_empty()
        assert display.active_index is None

    def test_clear_on_fresh_display(self, display):
        display.clear()
        assert display.slides == [] and display.indicators == []


class TestExhausted:
    def test_single_no_matches_slide(self, display):
        display.render(Candidate(id="u2", image_refs=("a", "b")), 0)
        display.render_exhausted()

        assert len(display.slides) == 1
        assert display.slides[0].image is NO_MATCHES_IMAGE
        assert display.slides[0].caption.lines() == ["", ""]
        assert_aligned(display)


def test_mutual_connections_text():
    assert mutual_connections_text(None) is None
    assert mutual_connections_text(0) == "0 mutual friends"
    assert mutual_connections_text(1) == "1 mutual friend"


def test_build_indicators():
    indicators = build_indicators(3)
    assert [i.index for i in indicators] == [0, 1, 2]
    assert [i.active for i in indicators] == [True, False, False]
    assert all(i.target == "#feed" for i in indicators)
