from unittest.mock import MagicMock

import pytest

from config.settings import ConvictionVotingSettings, FundingTokenSettings, Settings
from governance.dispatcher.action_dispatcher import ActionDispatcher
from governance.dispatcher.dispatcher_factory import create_action_dispatcher
from governance.providers.web3_organization import Web3Organization
from governance.providers.web3_signer import Web3Signer

APP_ADDRESS = "0x0000000000000000000000000000000000000a99"
ACCOUNT = "0x1111111111111111111111111111111111111111"


def make_settings(app_address=APP_ADDRESS):
    return Settings(
        conviction_voting=ConvictionVotingSettings(
            CONVICTION_VOTING_APP_ADDRESS=app_address,
            ACCOUNT_ADDRESS=ACCOUNT,
            ACCOUNT_PRIVATE_KEY=None,
            SIMULATE_PATHS=False,
        ),
        funding_token=FundingTokenSettings(FUNDING_TOKEN_SYMBOL="HNY", FUNDING_TOKEN_DECIMALS=6),
    )


def test_create_action_dispatcher_wires_collaborators():
    dispatcher = create_action_dispatcher(make_settings(), web3=MagicMock())

    assert isinstance(dispatcher, ActionDispatcher)
    assert isinstance(dispatcher.organization, Web3Organization)
    assert isinstance(dispatcher.signer, Web3Signer)
    assert dispatcher.account == ACCOUNT
    assert dispatcher.app_address == APP_ADDRESS
    assert dispatcher.funding_token.decimals == 6
    assert dispatcher.funding_token.symbol == "HNY"
    assert dispatcher.organization.simulate is False


@pytest.mark.parametrize("app_address", [None, "0x1234"])
def test_create_action_dispatcher_requires_valid_app(app_address):
    with pytest.raises(ValueError):
        create_action_dispatcher(make_settings(app_address), web3=MagicMock())
