import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest
from hexbytes import HexBytes

from governance.models.transaction import TransactionRequest
from governance.providers.web3_signer import Web3Signer

# Well-known throwaway key from the web3.py documentation
PRIVATE_KEY = "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"
KEY_ADDRESS = "0x2c7536E3605D9C16a7a3D7b1898e529396a65c23"
NODE_ACCOUNT = "0x1111111111111111111111111111111111111111"
TX = TransactionRequest(to="0x0000000000000000000000000000000000000a99", data="0xdeadbeef")


def resolved(value):
    future = asyncio.get_running_loop().create_future()
    future.set_result(value)
    return future


@pytest.fixture
def web3():
    mock_web3 = MagicMock()
    mock_web3.eth.send_transaction = AsyncMock(return_value=HexBytes("0x01"))
    mock_web3.eth.send_raw_transaction = AsyncMock(return_value=HexBytes("0x02"))
    mock_web3.eth.get_transaction_count = AsyncMock(return_value=7)
    mock_web3.eth.estimate_gas = AsyncMock(return_value=90000)
    mock_web3.eth.get_block = AsyncMock(return_value={"baseFeePerGas": 10})
    return mock_web3


@pytest.mark.asyncio
async def test_node_account_sends_through_node(web3):
    signer = Web3Signer(web3, account_address=NODE_ACCOUNT)

    tx_hash = await signer.send_transaction(TX)

    assert tx_hash == HexBytes("0x01")
    sent = web3.eth.send_transaction.call_args[0][0]
    assert sent["from"] == NODE_ACCOUNT
    assert sent["to"].lower() == TX.to
    assert sent["data"] == TX.data
    web3.eth.send_raw_transaction.assert_not_awaited()


@pytest.mark.asyncio
async def test_local_key_signs_and_sends_raw(web3):
    web3.eth.max_priority_fee = resolved(2)
    signer = Web3Signer(web3, private_key=PRIVATE_KEY, chain_id=1)

    tx_hash = await signer.send_transaction(TX)

    assert tx_hash == HexBytes("0x02")
    assert signer.address == KEY_ADDRESS
    web3.eth.get_transaction_count.assert_awaited_once_with(KEY_ADDRESS, "pending")
    raw = web3.eth.send_raw_transaction.call_args[0][0]
    assert isinstance(raw, (bytes, HexBytes)) and len(raw) > 0
    web3.eth.send_transaction.assert_not_awaited()


def test_key_must_match_account(web3):
    with pytest.raises(ValueError):
        Web3Signer(web3, account_address=NODE_ACCOUNT, private_key=PRIVATE_KEY)


def test_account_is_required(web3):
    with pytest.raises(ValueError):
        Web3Signer(web3)


@pytest.mark.asyncio
async def test_submissions_are_serialised(web3):
    in_flight = []
    overlaps = []

    async def slow_send(tx):
        in_flight.append(tx)
        if len(in_flight) > 1:
            overlaps.append(tx)
        await asyncio.sleep(0)
        in_flight.remove(tx)
        return HexBytes("0x01")

    web3.eth.send_transaction = AsyncMock(side_effect=slow_send)
    signer = Web3Signer(web3, account_address=NODE_ACCOUNT)

    await asyncio.gather(signer.send_transaction(TX), signer.send_transaction(TX))

    assert overlaps == []
    assert web3.eth.send_transaction.await_count == 2
