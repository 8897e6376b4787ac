from typing import Optional

from web3 import AsyncWeb3

from abi.conviction_voting_abi import CONVICTION_VOTING_ABI
from config.settings import Settings
from governance.dispatcher.action_dispatcher import ActionDispatcher
from governance.models.funding_token import FundingToken
from governance.providers.provider_factory import get_async_web3
from governance.providers.web3_organization import Web3Organization
from governance.providers.web3_signer import Web3Signer
from utils.logger_utils import get_logger
from utils.validation_utils import validate_address

logger = get_logger("Dispatcher Factory")


def create_funding_token(settings: Settings) -> FundingToken:
    token_settings = settings.funding_token
    return FundingToken(
        decimals=token_settings.decimals,
        symbol=token_settings.symbol,
        verified=token_settings.verified,
        address=token_settings.address,
    )


def create_action_dispatcher(settings: Settings, web3: Optional[AsyncWeb3] = None) -> ActionDispatcher:
    """
    Wires an ActionDispatcher from settings: web3 provider, organization with the
    conviction voting app registered, and a signer for the configured account.

    Raises:
        ValueError: If the app address or the account is missing or malformed.
    """
    voting_settings = settings.conviction_voting
    app_address = voting_settings.app_address
    if not app_address:
        raise ValueError("CONVICTION_VOTING_APP_ADDRESS is not configured")
    validate_address(app_address)

    if web3 is None:
        web3 = get_async_web3(settings.ethereum.provider_uri, settings.ethereum.rpc_timeout)

    private_key = voting_settings.account_private_key
    signer = Web3Signer(
        web3,
        account_address=voting_settings.account_address,
        private_key=private_key.get_secret_value() if private_key else None,
        chain_id=settings.ethereum.chain_id,
    )
    organization = Web3Organization(
        web3,
        apps={app_address: CONVICTION_VOTING_ABI},
        simulate=voting_settings.simulate_paths,
    )

    logger.info(f"Dispatcher ready for app {app_address} as {signer.address}")
    return ActionDispatcher(
        organization=organization,
        signer=signer,
        app_address=app_address,
        account=signer.address,
        funding_token=create_funding_token(settings),
    )
