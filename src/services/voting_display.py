"""Presentation helpers for proposals and vote tallies."""

from typing import Iterable, Optional

from src.models.governance import Proposal, ProposalStatus, ProposalType, VotingResults
from src.utils.ids import epoch_ms

MS_PER_MINUTE = 60 * 1000
MS_PER_HOUR = 60 * MS_PER_MINUTE
MS_PER_DAY = 24 * MS_PER_HOUR


def vote_percentage(votes: float, total: float) -> float:
    return votes / total * 100 if total > 0 else 0


def quorum_progress(proposal: Proposal, results: VotingResults) -> float:
    """Percent of the quorum reached, capped at 100."""
    required = proposal.total_voting_power * proposal.quorum_required / 100
    if required <= 0:
        return 100 if results.total_votes > 0 else 0
    return min(results.total_votes / required * 100, 100)


def format_time_remaining(end_ms: int, now_ms: Optional[int] = None, compact: bool = False) -> str:
    """Human readable voting countdown.

    Long form: ``2 days, 3 hours remaining``. Compact form: ``2d 3h``.
    """
    now_ms = epoch_ms() if now_ms is None else now_ms
    remaining = end_ms - now_ms

    if remaining <= 0:
        return "Ended" if compact else "Voting Ended"

    days = remaining // MS_PER_DAY
    hours = remaining % MS_PER_DAY // MS_PER_HOUR
    minutes = remaining % MS_PER_HOUR // MS_PER_MINUTE

    if compact:
        if days > 0:
            return f"{days}d {hours}h"
        if hours > 0:
            return f"{hours}h {minutes}m"
        return f"{minutes}m"

    if days > 0:
        return f"{days} days, {hours} hours remaining"
    if hours > 0:
        return f"{hours} hours, {minutes} minutes remaining"
    return f"{minutes} minutes remaining"


def is_voting_active(proposal: Proposal, now_ms: Optional[int] = None) -> bool:
    now_ms = epoch_ms() if now_ms is None else now_ms
    return (
        proposal.status == ProposalStatus.ACTIVE
        and proposal.voting_start_time <= now_ms < proposal.voting_end_time
    )


def filter_proposals(
    proposals: Iterable[Proposal],
    status: Optional[list[ProposalStatus]] = None,
    proposal_type: Optional[list[ProposalType]] = None,
    proposer: Optional[str] = None,
    query: Optional[str] = None,
) -> list[Proposal]:
    results = []
    needle = query.lower() if query else None

    for proposal in proposals:
        if status and proposal.status not in status:
            continue
        if proposal_type and proposal.proposal_type not in proposal_type:
            continue
        if proposer and proposal.proposer.lower() != proposer.lower():
            continue
        if needle and needle not in proposal.title.lower() and needle not in proposal.description.lower():
            continue
        results.append(proposal)

    return results
