from typing import Any, Dict, List, Optional, Sequence

from web3 import AsyncWeb3
from web3.exceptions import ContractLogicError, Web3Exception

from governance.exceptions import IntentResolutionError
from governance.models.transaction import TransactionPath, TransactionRequest
from governance.providers.base import BaseIntent, BaseOrganization
from utils.formatter_utils import to_normalized_address
from utils.logger_utils import get_logger

logger = get_logger("Web3 Organization")


def _find_abi_function(abi: List[Dict[str, Any]], function_name: str) -> Optional[Dict[str, Any]]:
    for item in abi:
        if item.get("type") == "function" and item.get("name") == function_name:
            return item
    return None


def _normalize_args(abi_function: Dict[str, Any], params: Sequence[Any]) -> List[Any]:
    # web3 only encodes checksummed addresses
    inputs = abi_function.get("inputs", [])
    args = list(params)
    for index, abi_input in enumerate(inputs[: len(args)]):
        if abi_input.get("type") == "address" and isinstance(args[index], str):
            args[index] = to_normalized_address(args[index])
    return args


class Web3AppIntent(BaseIntent):
    def __init__(
        self,
        web3: AsyncWeb3,
        app_address: str,
        function_name: str,
        params: Sequence[Any],
        calldata: str,
        simulate: bool = True,
    ):
        super().__init__(app_address, function_name, params)
        self._web3 = web3
        self.calldata = calldata
        self.simulate = simulate

    async def paths(self, from_address: str) -> TransactionPath:
        transaction = TransactionRequest(to=self.app_address, data=self.calldata)

        if self.simulate:
            try:
                await self._web3.eth.call(
                    {"from": to_normalized_address(from_address), "to": transaction.to, "data": transaction.data}
                )
            except ContractLogicError as e:
                # The app would revert for this account: no viable path
                logger.info(f"{self.function_name} reverts for {from_address}: {e}")
                return TransactionPath(transactions=[])

        return TransactionPath(transactions=[transaction])


class Web3Organization(BaseOrganization):
    """
    Resolves intents against apps whose ABI is registered, encoding calls with web3.
    """

    def __init__(self, web3: AsyncWeb3, apps: Optional[Dict[str, List[Dict[str, Any]]]] = None, simulate: bool = True):
        self._web3 = web3
        self._apps: Dict[str, List[Dict[str, Any]]] = {}
        self.simulate = simulate
        for app_address, abi in (apps or {}).items():
            self.register_app(app_address, abi)

    def register_app(self, app_address: str, abi: List[Dict[str, Any]]) -> None:
        self._apps[app_address.lower()] = abi

    def app_intent(self, app_address: str, function_name: str, params: Sequence[Any]) -> Web3AppIntent:
        if not app_address:
            raise IntentResolutionError("No app address configured", function_name)

        abi = self._apps.get(app_address.lower())
        if abi is None:
            raise IntentResolutionError(f"Unknown app {app_address}", function_name)
        abi_function = _find_abi_function(abi, function_name)
        if abi_function is None:
            raise IntentResolutionError(f"Function {function_name} not found on app {app_address}", function_name)

        checksum_address = to_normalized_address(app_address)
        contract = self._web3.eth.contract(address=checksum_address, abi=abi)
        try:
            calldata = contract.encode_abi(function_name, args=_normalize_args(abi_function, params))
        except (TypeError, ValueError, Web3Exception) as e:
            raise IntentResolutionError(f"Cannot encode {function_name}{tuple(params)}: {e}", function_name) from e

        return Web3AppIntent(
            self._web3,
            checksum_address,
            function_name,
            params,
            calldata,
            simulate=self.simulate,
        )
