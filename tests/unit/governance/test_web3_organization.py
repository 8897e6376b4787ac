from unittest.mock import AsyncMock, MagicMock

import pytest
from eth_utils import function_signature_to_4byte_selector, to_hex
from web3 import AsyncHTTPProvider, AsyncWeb3
from web3.exceptions import ContractLogicError

from abi.conviction_voting_abi import CONVICTION_VOTING_ABI
from governance.exceptions import IntentResolutionError
from governance.providers.web3_organization import Web3AppIntent, Web3Organization

APP_ADDRESS = "0x0000000000000000000000000000000000000a99"
ACCOUNT = "0x1111111111111111111111111111111111111111"


@pytest.fixture
def organization():
    web3 = AsyncWeb3(AsyncHTTPProvider("http://localhost:8545"))
    return Web3Organization(web3, apps={APP_ADDRESS: CONVICTION_VOTING_ABI}, simulate=False)


def selector(signature):
    return to_hex(function_signature_to_4byte_selector(signature))


def test_app_intent_encodes_call(organization):
    intent = organization.app_intent(APP_ADDRESS, "stakeToProposal", [3, 250])

    assert intent.function_name == "stakeToProposal"
    assert intent.params == [3, 250]
    assert intent.calldata.startswith(selector("stakeToProposal(uint256,uint256)"))
    assert intent.calldata.endswith(format(250, "064x"))


def test_app_intent_encodes_add_proposal(organization):
    intent = organization.app_intent(
        APP_ADDRESS, "addProposal", ["Meetup", "0x68747470", 10**18, "0xabcdef0123456789abcdef0123456789abcdef01"]
    )

    assert intent.calldata.startswith(selector("addProposal(string,bytes,uint256,address)"))


def test_app_address_lookup_ignores_case(organization):
    intent = organization.app_intent(APP_ADDRESS.upper().replace("0X", "0x"), "executeProposal", [1, True])

    assert intent.calldata.startswith(selector("executeProposal(uint256,bool)"))


def test_unknown_app_is_rejected(organization):
    with pytest.raises(IntentResolutionError):
        organization.app_intent("0x0000000000000000000000000000000000000bbb", "stakeToProposal", [1, 1])


def test_unknown_function_is_rejected(organization):
    with pytest.raises(IntentResolutionError) as exc_info:
        organization.app_intent(APP_ADDRESS, "vote", [1])

    assert exc_info.value.function_name == "vote"


def test_unencodable_params_are_rejected(organization):
    with pytest.raises(IntentResolutionError):
        organization.app_intent(APP_ADDRESS, "stakeToProposal", ["not a number", 1])


@pytest.mark.asyncio
async def test_paths_without_simulation_returns_single_transaction(organization):
    intent = organization.app_intent(APP_ADDRESS, "stakeToProposal", [3, 250])

    path = await intent.paths(ACCOUNT)

    assert len(path.transactions) == 1
    assert path.transactions[0].to.lower() == APP_ADDRESS
    assert path.transactions[0].data == intent.calldata


@pytest.mark.asyncio
async def test_paths_with_simulation_calls_node():
    web3 = MagicMock()
    web3.eth.call = AsyncMock(return_value=b"")
    intent = Web3AppIntent(web3, APP_ADDRESS, "stakeToProposal", [1, 1], "0x1234", simulate=True)

    path = await intent.paths(ACCOUNT)

    assert not path.is_empty
    call_args = web3.eth.call.call_args[0][0]
    assert call_args["to"] == APP_ADDRESS
    assert call_args["data"] == "0x1234"


@pytest.mark.asyncio
async def test_reverting_simulation_yields_empty_path():
    web3 = MagicMock()
    web3.eth.call = AsyncMock(side_effect=ContractLogicError("execution reverted: CONVICTION_VOTING_STAKING_MORE_THAN_AVAILABLE"))
    intent = Web3AppIntent(web3, APP_ADDRESS, "stakeToProposal", [1, 10**30], "0x1234", simulate=True)

    path = await intent.paths(ACCOUNT)

    assert path.is_empty
