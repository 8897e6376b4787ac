import asyncio
from typing import Any, Dict, Optional

from eth_account import Account
from eth_account.signers.local import LocalAccount
from eth_utils import to_hex
from hexbytes import HexBytes
from web3 import AsyncWeb3

from governance.models.transaction import TransactionRequest
from governance.providers.base import BaseSigner
from utils.formatter_utils import to_normalized_address
from utils.logger_utils import get_logger

logger = get_logger("Web3 Signer")

# Headroom over the latest base fee for the EIP-1559 max fee
BASE_FEE_MULTIPLIER = 2


class Web3Signer(BaseSigner):
    """
    Signs with a local key when one is given, otherwise lets the node send
    from an unlocked account. Submissions are serialised with a lock so two
    concurrent dispatches never pick the same nonce.
    """

    def __init__(
        self,
        web3: AsyncWeb3,
        account_address: Optional[str] = None,
        private_key: Optional[str] = None,
        chain_id: Optional[int] = None,
    ):
        self._web3 = web3
        self._local_account: Optional[LocalAccount] = Account.from_key(private_key) if private_key else None
        if self._local_account is not None:
            if account_address and account_address.lower() != self._local_account.address.lower():
                raise ValueError(f"Private key does not belong to account {account_address}")
            account_address = self._local_account.address
        if not account_address:
            raise ValueError("Either an account address or a private key is required")

        self.address = to_normalized_address(account_address)
        self._chain_id = chain_id
        self._lock = asyncio.Lock()

    async def send_transaction(self, transaction: TransactionRequest) -> HexBytes:
        tx: Dict[str, Any] = {
            "from": self.address,
            "to": to_normalized_address(transaction.to),
            "data": transaction.data,
        }

        async with self._lock:
            if self._local_account is None:
                tx_hash = await self._web3.eth.send_transaction(tx)
            else:
                signed = self._local_account.sign_transaction(await self._build_transaction(tx))
                tx_hash = await self._web3.eth.send_raw_transaction(signed.raw_transaction)

        logger.info(f"Transaction sent from {self.address} to {tx['to']}: {to_hex(tx_hash)}")
        return tx_hash

    async def _build_transaction(self, tx: Dict[str, Any]) -> Dict[str, Any]:
        eth = self._web3.eth
        tx["nonce"] = await eth.get_transaction_count(self.address, "pending")
        tx["chainId"] = self._chain_id or await eth.chain_id
        tx["gas"] = await eth.estimate_gas(tx)

        latest_block = await eth.get_block("latest")
        priority_fee = await eth.max_priority_fee
        tx["maxPriorityFeePerGas"] = priority_fee
        tx["maxFeePerGas"] = latest_block["baseFeePerGas"] * BASE_FEE_MULTIPLIER + priority_fee
        return tx
