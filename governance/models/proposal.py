from typing import Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from utils.formatter_utils import to_int_or_none


class ProposalStake(BaseModel):
    """One entry of a proposal's stake log: the entity's position after a stake/withdraw."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    entity: str
    amount: int = 0

    @field_validator("amount", mode="before")
    @classmethod
    def _parse_amount(cls, value):
        parsed = to_int_or_none(value)
        return 0 if parsed is None else parsed


class ConvictionProposal(BaseModel):
    """
    Immutable snapshot of a conviction voting proposal.
    Accepts the camelCase field names used by the subgraph.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: Union[int, str]
    name: str = ""
    link: str | None = None
    creator: str | None = None
    beneficiary: str | None = None

    requested_amount: int | None = Field(default=None, alias="requestedAmount")
    current_conviction: int = Field(default=0, alias="currentConviction")
    threshold: int | None = None

    executed: bool = False
    # Chronological log, later entries shadow earlier ones for the same entity
    stakes: Tuple[ProposalStake, ...] = ()

    @field_validator("requested_amount", "threshold", mode="before")
    @classmethod
    def _parse_optional_big_int(cls, value):
        return to_int_or_none(value)

    @field_validator("current_conviction", mode="before")
    @classmethod
    def _parse_big_int(cls, value):
        parsed = to_int_or_none(value)
        return 0 if parsed is None else parsed

    @property
    def is_display_only(self) -> bool:
        # Neither a funding request nor a threshold: nothing to act on
        return not self.requested_amount and self.threshold is None
