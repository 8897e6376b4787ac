from functools import lru_cache
from typing import Iterable, List, Optional, Sequence

from pydantic import BaseModel, ConfigDict

from governance.enums.proposal_action import ProposalAction
from governance.models.proposal import ConvictionProposal, ProposalStake
from utils.formatter_utils import addresses_equal


class ProposalActionState(BaseModel):
    """The single action offered for a proposal, with what a caller needs to render it."""

    model_config = ConfigDict(frozen=True)

    action: ProposalAction
    label: str
    # Strong actions are rendered as the primary/emphasised button
    strong: bool


EXECUTE_STATE = ProposalActionState(action=ProposalAction.EXECUTE, label="Execute proposal", strong=True)
WITHDRAW_STATE = ProposalActionState(action=ProposalAction.WITHDRAW, label="Withdraw support", strong=False)
SUPPORT_STATE = ProposalActionState(action=ProposalAction.SUPPORT, label="Support this proposal", strong=True)


def get_authoritative_stake(
    stakes: Sequence[ProposalStake], account: Optional[str]
) -> Optional[ProposalStake]:
    """
    Returns the account's current position in a stake log.

    The log is append-only, so this walks every entry and keeps the last one
    whose entity matches the account (case-insensitive). Returns None when
    the account never staked.
    """
    authoritative = None
    if not account:
        return authoritative
    for stake in stakes:
        if addresses_equal(stake.entity, account):
            authoritative = stake
    return authoritative


def has_active_stake(proposal: ConvictionProposal, account: Optional[str]) -> bool:
    stake = get_authoritative_stake(proposal.stakes, account)
    return stake is not None and stake.amount > 0


def has_unique_stake_entities(stakes: Iterable[ProposalStake]) -> bool:
    """True when the log holds at most one record per entity."""
    seen = set()
    for stake in stakes:
        entity = stake.entity.lower()
        if entity in seen:
            return False
        seen.add(entity)
    return True


def is_threshold_reached(proposal: ConvictionProposal) -> bool:
    # A missing threshold can never be reached
    if proposal.threshold is None:
        return False
    return proposal.current_conviction >= proposal.threshold


@lru_cache(maxsize=1024)
def evaluate_proposal_action(
    proposal: ConvictionProposal, connected_account: Optional[str]
) -> Optional[ProposalActionState]:
    """
    Picks the one action a connected account may take on a proposal.

    Evaluated from the snapshot alone, in priority order:
    executed or display-only proposals offer nothing, a reached threshold
    offers execution, a positive current stake offers withdrawal, and
    anything else offers support.

    Args:
        proposal: Immutable proposal snapshot.
        connected_account: The wallet address, or None when disconnected.

    Returns:
        The offered ProposalActionState, or None when no action applies.
    """
    if proposal.executed or proposal.is_display_only:
        return None
    if is_threshold_reached(proposal):
        return EXECUTE_STATE
    if has_active_stake(proposal, connected_account):
        return WITHDRAW_STATE
    return SUPPORT_STATE


def sort_proposals_by_conviction(proposals: Iterable[ConvictionProposal]) -> List[ConvictionProposal]:
    """Descending current conviction. Ties keep their input order."""
    return sorted(proposals, key=lambda proposal: proposal.current_conviction, reverse=True)
