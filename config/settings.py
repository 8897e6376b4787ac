from typing import Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

# Each group reads its own flat env vars (validation_alias) so it also works standalone
ENV_CONFIG = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


class AppSettings(BaseSettings):
    """General application settings."""

    model_config = ENV_CONFIG

    name: str = Field("Conviction Voting Actions", validation_alias="APP_NAME")
    debug: bool = Field(False, validation_alias="DEBUG")
    log_level: str = Field("INFO", validation_alias="LOG_LEVEL")


class EthereumSettings(BaseSettings):
    """Settings related to Ethereum Node connection and RPC."""

    model_config = ENV_CONFIG

    provider_uri: str = Field(
        default="http://localhost:8545",
        validation_alias="PROVIDER_URI",
        description="Ethereum Node JSON-RPC URL",
    )
    # Timeout for RPC calls (seconds)
    rpc_timeout: int = Field(default=60, gt=0, validation_alias="RPC_TIMEOUT")
    # Left empty, the chain id is read from the node when signing locally
    chain_id: Optional[int] = Field(default=None, gt=0, validation_alias="CHAIN_ID")


class ConvictionVotingSettings(BaseSettings):
    """The conviction voting app and the account acting on it."""

    model_config = ENV_CONFIG

    app_address: Optional[str] = Field(
        default=None,
        validation_alias="CONVICTION_VOTING_APP_ADDRESS",
        description="Address of the installed conviction voting app",
    )
    account_address: Optional[str] = Field(default=None, validation_alias="ACCOUNT_ADDRESS")
    # When set, transactions are signed locally instead of by the node
    account_private_key: Optional[SecretStr] = Field(default=None, validation_alias="ACCOUNT_PRIVATE_KEY")
    # Dry-run every transaction with eth_call before offering it as a path
    simulate_paths: bool = Field(default=True, validation_alias="SIMULATE_PATHS")


class FundingTokenSettings(BaseSettings):
    """The token requested by funding proposals."""

    model_config = ENV_CONFIG

    address: Optional[str] = Field(default=None, validation_alias="FUNDING_TOKEN_ADDRESS")
    symbol: str = Field(default="DAI", validation_alias="FUNDING_TOKEN_SYMBOL")
    decimals: int = Field(default=18, ge=0, validation_alias="FUNDING_TOKEN_DECIMALS")
    verified: bool = Field(default=False, validation_alias="FUNDING_TOKEN_VERIFIED")


class Settings(BaseSettings):
    """
    Main Settings class that composes all sub-settings.
    Uses validation_alias in sub-models to map flat env vars to nested structure.
    """

    app: AppSettings = Field(default_factory=AppSettings)
    ethereum: EthereumSettings = Field(default_factory=EthereumSettings)
    conviction_voting: ConvictionVotingSettings = Field(default_factory=ConvictionVotingSettings)
    funding_token: FundingTokenSettings = Field(default_factory=FundingTokenSettings)

    # Config to load from .env file
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


# Singleton instance
settings = Settings()
