import pytest
from pydantic import ValidationError

from governance.models.proposal import ConvictionProposal

SUBGRAPH_PROPOSAL = {
    "id": "7",
    "name": "Community grants",
    "link": "https://forum.example.org/t/7",
    "creator": "0xAbCdEf0123456789aBcDeF0123456789AbCdEf01",
    "beneficiary": "0x1111111111111111111111111111111111111111",
    "requestedAmount": "2500000000000000000000",
    "currentConviction": "0x1bc16d674ec80000",
    "threshold": "123456789012345678901234567890",
    "executed": False,
    "stakes": [
        {"entity": "0x1111111111111111111111111111111111111111", "amount": "10"},
        {"entity": "0x1111111111111111111111111111111111111111", "amount": "0"},
    ],
}


def test_parses_subgraph_payload():
    proposal = ConvictionProposal.model_validate(SUBGRAPH_PROPOSAL)

    assert proposal.id == "7"
    assert proposal.requested_amount == 2500 * 10**18
    assert proposal.current_conviction == 2 * 10**18
    assert proposal.threshold == 123456789012345678901234567890
    assert [s.amount for s in proposal.stakes] == [10, 0]
    assert isinstance(proposal.stakes, tuple)
    assert proposal.is_display_only is False


def test_missing_amount_and_threshold_mean_display_only():
    proposal = ConvictionProposal(id=1, name="Signal")

    assert proposal.requested_amount is None
    assert proposal.threshold is None
    assert proposal.current_conviction == 0
    assert proposal.is_display_only is True


def test_threshold_without_requested_amount_is_actionable():
    proposal = ConvictionProposal(id=1, currentConviction=20, threshold=10)

    assert proposal.requested_amount is None
    assert proposal.is_display_only is False


def test_snapshot_is_immutable_and_hashable():
    proposal = ConvictionProposal.model_validate(SUBGRAPH_PROPOSAL)

    with pytest.raises(ValidationError):
        proposal.executed = True
    assert hash(proposal) == hash(ConvictionProposal.model_validate(SUBGRAPH_PROPOSAL))


def test_rejects_malformed_amount():
    with pytest.raises(ValidationError):
        ConvictionProposal.model_validate({**SUBGRAPH_PROPOSAL, "threshold": "lots"})
