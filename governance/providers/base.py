from abc import ABC, abstractmethod
from typing import Any, Sequence

from governance.models.transaction import TransactionPath, TransactionRequest


class BaseIntent(ABC):
    """
    A governance action (app, function, parameters) not yet bound to a transaction.
    """

    def __init__(self, app_address: str, function_name: str, params: Sequence[Any]):
        self.app_address = app_address
        self.function_name = function_name
        self.params = list(params)

    @abstractmethod
    async def paths(self, from_address: str) -> TransactionPath:
        """
        Resolve the transactions that realise this intent from an account.

        Returns:
            TransactionPath, possibly empty when no viable path exists
            (missing permissions or balance).
        """
        pass


class BaseOrganization(ABC):
    """
    Client for the organization that hosts the governance apps.
    Swappable: a web3 implementation ships in web3_organization.py.
    """

    @abstractmethod
    def app_intent(self, app_address: str, function_name: str, params: Sequence[Any]) -> BaseIntent:
        """
        Build an intent for a function of an installed app.

        Raises:
            Exception: If the app is unknown or the function is not recognised.
        """
        pass


class BaseSigner(ABC):
    """
    Submits transactions on behalf of the connected account.
    Implementations must serialise submissions from the same account (nonces).
    """

    @abstractmethod
    async def send_transaction(self, transaction: TransactionRequest) -> Any:
        """
        Sign and broadcast a transaction.

        Returns:
            A transaction handle (the transaction hash for web3).
        """
        pass
