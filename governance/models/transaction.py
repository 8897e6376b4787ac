from typing import List

from pydantic import BaseModel, ConfigDict, Field


class TransactionRequest(BaseModel):
    """A single transaction ready to be signed: target contract and calldata (0x hex)."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    to: str
    data: str


class TransactionPath(BaseModel):
    """
    Ordered transactions needed to realise an intent from one account.
    Only the first transaction is submitted; prerequisite steps are not handled.
    """

    model_config = ConfigDict(populate_by_name=True)

    transactions: List[TransactionRequest] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.transactions
