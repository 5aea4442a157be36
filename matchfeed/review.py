"""
Potential-match review state machine.

A ReviewSession is an immutable value; the functions below are the only
transitions:

    IDLE        --fetch real id-->   DISPLAYING
    IDLE        --fetch sentinel-->  EXHAUSTED (terminal)
    DISPLAYING  --decision saved-->  IDLE
    DISPLAYING  --decision failed--> DISPLAYING (no transition)

ReviewFlow drives those transitions against the backend and keeps the
carousel display and the accept/reject controls in step with the session.
"""

from contextlib import contextmanager
from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterator, Optional, Union

from .client import MatchfeedClient, MatchfeedError, TransportError
from .endpoints.candidates import fetch_next_candidate
from .endpoints.decisions import submit_decision
from .endpoints.mutual import fetch_mutual_connections
from .endpoints.profiles import fetch_profile
from .logger import get_logger
from .media import MediaResolver
from .models import Candidate, Decision, Verdict, is_sentinel
from .render import CarouselDisplay


class ReviewState(str, Enum):
    IDLE = "idle"
    DISPLAYING = "displaying"
    EXHAUSTED = "exhausted"


class ReviewTransitionError(MatchfeedError):
    """An action was requested in a state that does not allow it."""


@dataclass(frozen=True)
class ReviewSession:
    reviewer_id: Optional[str]
    state: ReviewState = ReviewState.IDLE
    candidate_id: Optional[str] = None

    @property
    def controls_enabled(self) -> bool:
        return self.candidate_id is not None

    @property
    def has_reviewer(self) -> bool:
        return bool(self.reviewer_id)


def start_session(reviewer_id: Optional[str]) -> ReviewSession:
    return ReviewSession(reviewer_id=reviewer_id or None)


def apply_fetch_result(session: ReviewSession, candidate_id: str) -> ReviewSession:
    """IDLE -> DISPLAYING for a real id, IDLE -> EXHAUSTED for the sentinel."""
    if session.state is not ReviewState.IDLE:
        raise ReviewTransitionError(f"Cannot take a new candidate while {session.state.value}")
    if is_sentinel(candidate_id):
        return replace(session, state=ReviewState.EXHAUSTED, candidate_id=None)
    if not candidate_id:
        raise ValueError("candidate_id must be a non-empty string")
    return replace(session, state=ReviewState.DISPLAYING, candidate_id=candidate_id)


def apply_decision_success(session: ReviewSession) -> ReviewSession:
    """DISPLAYING -> IDLE once the backend accepted the decision."""
    if session.state is not ReviewState.DISPLAYING:
        raise ReviewTransitionError(f"No candidate to decide on while {session.state.value}")
    return replace(session, state=ReviewState.IDLE, candidate_id=None)


class DecisionControls:
    """Enabled/disabled state of the accept ("friend") and reject ("pass") buttons."""

    def __init__(self):
        self.accept_enabled = False
        self.reject_enabled = False

    def set_enabled(self, enabled: bool) -> None:
        self.accept_enabled = enabled
        self.reject_enabled = enabled

    def sync(self, session: ReviewSession) -> None:
        self.set_enabled(session.controls_enabled)

    @property
    def enabled(self) -> bool:
        return self.accept_enabled and self.reject_enabled


class ReviewFlow:
    """
    One reviewer's pass through their potential matches.

    Every backend round-trip runs inside a pending region: the controls are
    disabled on entry and re-synced from the session on every exit, and no
    second action may start until the region ends.
    """

    def __init__(
        self,
        client: MatchfeedClient,
        reviewer_id: Optional[str],
        resolver: Optional[MediaResolver] = None,
        display: Optional[CarouselDisplay] = None,
        controls: Optional[DecisionControls] = None,
    ):
        self.client = client
        self.resolver = resolver or MediaResolver(client)
        self.display = display or CarouselDisplay(self.resolver)
        self.controls = controls or DecisionControls()
        self.session = start_session(reviewer_id)
        self.candidate: Optional[Candidate] = None
        self.mutual_connections: Optional[int] = None
        self._busy = False
        self.controls.sync(self.session)

    @property
    def state(self) -> ReviewState:
        return self.session.state

    @contextmanager
    def _pending(self) -> Iterator[None]:
        if self._busy:
            raise ReviewTransitionError("Another review action is still pending")
        self._busy = True
        self.controls.set_enabled(False)
        try:
            yield
        finally:
            self._busy = False
            self.controls.sync(self.session)

    def load_next(self) -> ReviewSession:
        """Fetch and display the next candidate.

        Skipped without error when there is no reviewer or the pool is
        exhausted.

        Raises:
            ReviewTransitionError: If a candidate is already displayed
            TransportError: If the candidate or its profile could not be fetched
        """
        logger = get_logger()
        if not self.session.has_reviewer:
            logger.debug("No reviewer id, skipping candidate fetch")
            return self.session
        if self.session.state is ReviewState.EXHAUSTED:
            logger.debug("Candidate pool exhausted, nothing to fetch", reviewer=self.session.reviewer_id)
            return self.session
        if self.session.state is ReviewState.DISPLAYING:
            raise ReviewTransitionError("Decide on the current candidate before fetching another")

        with self._pending():
            self._advance()
        return self.session

    def refresh(self) -> ReviewSession:
        """Re-fetch and re-render the displayed candidate (after a failed render)."""
        if self.session.state is not ReviewState.DISPLAYING:
            return self.session
        with self._pending():
            self._show_candidate(self.session.candidate_id)
        return self.session

    def decide(self, verdict: Union[Verdict, str]) -> ReviewSession:
        """Record a verdict on the displayed candidate, then load the next one.

        The next candidate is requested only after the backend answered the
        submission. On a failed submission nothing changes and the same
        decision can be tried again.

        Raises:
            ReviewTransitionError: If no candidate is displayed
            TransportError: If the submission, or the follow-up fetch, failed
        """
        if self._busy:
            raise ReviewTransitionError("Another review action is still pending")
        if self.session.state is not ReviewState.DISPLAYING:
            raise ReviewTransitionError(f"No candidate to decide on while {self.session.state.value}")

        if not isinstance(verdict, Verdict):
            verdict = Verdict.parse(verdict)
        decision = Decision(self.session.reviewer_id, self.session.candidate_id, verdict)

        with self._pending():
            try:
                submit_decision(self.client, decision)
            except TransportError:
                get_logger().warning(
                    "Decision not saved, candidate kept for retry",
                    reviewer=decision.reviewer_id,
                    candidate=decision.candidate_id,
                    verdict=verdict.value,
                )
                raise
            self.session = apply_decision_success(self.session)
            self.candidate = None
            self.mutual_connections = None
            self._advance()
        return self.session

    def accept(self) -> ReviewSession:
        return self.decide(Verdict.FRIENDED)

    def reject(self) -> ReviewSession:
        return self.decide(Verdict.PASSED)

    def _advance(self) -> None:
        self.display.clear()
        candidate_id = fetch_next_candidate(self.client, self.session.reviewer_id)
        self.session = apply_fetch_result(self.session, candidate_id)
        if self.session.state is ReviewState.EXHAUSTED:
            get_logger().info("No more potential matches", reviewer=self.session.reviewer_id)
            self.display.render_exhausted()
            return
        self._show_candidate(candidate_id)

    def _show_candidate(self, candidate_id: str) -> None:
        # Profile and mutual connections are both resolved before anything is drawn.
        self.display.clear()
        self.candidate = None
        self.mutual_connections = None

        profile = fetch_profile(self.client, candidate_id)
        if profile is None:
            get_logger().info("Candidate has no profile, not rendering", candidate=candidate_id)
            return

        try:
            mutual = fetch_mutual_connections(self.client, self.session.reviewer_id, candidate_id)
        except TransportError as e:
            get_logger().warning("Mutual connections unavailable", candidate=candidate_id, error=str(e))
            mutual = None

        self.candidate = profile
        self.mutual_connections = mutual
        self.display.render(profile, mutual)
