from pydantic import BaseModel, ConfigDict, Field


class FundingToken(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    decimals: int = Field(ge=0)
    symbol: str
    verified: bool = False
    address: str | None = None
