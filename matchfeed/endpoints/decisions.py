"""Accept/reject submissions to /match-decisions."""

from ..client import MatchfeedClient
from ..logger import get_logger
from ..models import Decision

ENDPOINT = "match-decisions"
PATH = "/match-decisions"


def submit_decision(client: MatchfeedClient, decision: Decision) -> None:
    """POST one decision as form fields. Exactly one attempt, no retry.

    Raises:
        TransportError: On network failure or a non-2xx status
    """
    logger = get_logger()
    client.post(PATH, ENDPOINT, data=decision.as_form())
    logger.record_decision(decision.verdict.value)
    logger.info(
        "Decision recorded",
        reviewer=decision.reviewer_id,
        candidate=decision.candidate_id,
        verdict=decision.verdict.value,
    )
