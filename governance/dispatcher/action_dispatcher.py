"""
Action Dispatcher

Turns conviction voting actions into submitted transactions:
intent (organization) -> transaction path (account) -> signer.
"""

import asyncio
from typing import Any, Callable, List, Optional, Set, Union

from governance.dispatcher.dispatch_result import DispatchHandle, DispatchResult
from governance.enums.dispatch_status import DispatchStatus
from governance.exceptions import DispatchError, IntentResolutionError, PathResolutionError, SubmissionError
from governance.models.funding_token import FundingToken
from governance.models.transaction import TransactionPath, TransactionRequest
from governance.providers.base import BaseIntent, BaseOrganization, BaseSigner
from utils.formatter_utils import text_to_hex, to_base_units
from utils.logger_utils import get_logger

logger = get_logger("Action Dispatcher")

ProposalId = Union[int, str]
OnDone = Optional[Callable[[], Any]]

# executeProposal(_proposalId, _withdrawIfPossible): always release the stakes
WITHDRAW_IF_POSSIBLE = True


class ActionDispatcher(object):
    """
    Dispatches the conviction voting app functions for one connected account.

    Every operation must be called from a running event loop. It starts the
    dispatch as a task and returns a DispatchHandle right away; awaiting the
    handle yields a DispatchResult. Failures never raise: they are logged and
    reported through the result. The optional on_done callback fires once per
    call, whatever the outcome.
    """

    def __init__(
        self,
        organization: BaseOrganization,
        signer: BaseSigner,
        app_address: str,
        account: str,
        funding_token: FundingToken,
    ):
        self.organization = organization
        self.signer = signer
        self.app_address = app_address
        self.account = account
        self.funding_token = funding_token
        # Strong references so fire-and-forget dispatches are not garbage collected
        self._pending: Set[asyncio.Task] = set()

    def new_proposal(self, title: str, link: str, amount: str, beneficiary: str, on_done: OnDone = None) -> DispatchHandle:
        """
        Submit a funding proposal.

        Args:
            title: Proposal title.
            link: URL with the proposal details, may be empty.
            amount: Requested amount in human units, e.g. "1.5".
            beneficiary: Address receiving the funds on execution.
            on_done: Completion callback.
        """

        def build_params() -> List[Any]:
            decimal_amount = to_base_units(amount, self.funding_token.decimals)
            return [title, text_to_hex(link), decimal_amount, beneficiary]

        return self._dispatch("addProposal", build_params, on_done)

    def stake_to_proposal(self, proposal_id: ProposalId, amount: int, on_done: OnDone = None) -> DispatchHandle:
        # Amount is in base units and is not bounds checked here
        return self._dispatch("stakeToProposal", lambda: [proposal_id, amount], on_done)

    def withdraw_from_proposal(self, proposal_id: ProposalId, amount: int, on_done: OnDone = None) -> DispatchHandle:
        return self._dispatch("withdrawFromProposal", lambda: [proposal_id, amount], on_done)

    def execute_proposal(self, proposal_id: ProposalId, on_done: OnDone = None) -> DispatchHandle:
        return self._dispatch("executeProposal", lambda: [proposal_id, WITHDRAW_IF_POSSIBLE], on_done)

    def _dispatch(self, function_name: str, build_params: Callable[[], List[Any]], on_done: OnDone) -> DispatchHandle:
        handle = DispatchHandle(function_name, on_done)
        task = asyncio.get_running_loop().create_task(self._send_intent(handle, build_params))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        handle.attach(task)
        return handle

    async def _send_intent(self, handle: DispatchHandle, build_params: Callable[[], List[Any]]) -> DispatchResult:
        function_name = handle.function_name
        logger.info(f"Dispatching {function_name} from {self.account}")

        try:
            params = self._build_params(function_name, build_params)
            handle.params = params
            intent = self._resolve_intent(function_name, params)
            transaction = await self._resolve_transaction(function_name, intent)
            handle.mark_submitted()
            tx_hash = await self._submit(function_name, transaction)
        except DispatchError as e:
            logger.error(f"Could not create tx for {function_name} [{e.kind.value}]: {e}")
            return DispatchResult(
                status=DispatchStatus.FAILED,
                function_name=function_name,
                params=handle.params,
                error_kind=e.kind,
                error=str(e),
            )

        return DispatchResult(
            status=DispatchStatus.SUBMITTED,
            function_name=function_name,
            params=handle.params,
            tx_hash=tx_hash,
        )

    @staticmethod
    def _build_params(function_name: str, build_params: Callable[[], List[Any]]) -> List[Any]:
        try:
            return list(build_params())
        except Exception as e:
            raise IntentResolutionError(f"Invalid parameters: {e}", function_name) from e

    def _resolve_intent(self, function_name: str, params: List[Any]) -> BaseIntent:
        try:
            intent = self.organization.app_intent(self.app_address, function_name, params)
        except DispatchError:
            raise
        except Exception as e:
            raise IntentResolutionError(f"Could not resolve intent: {e}", function_name) from e

        if not isinstance(intent, BaseIntent):
            raise IntentResolutionError(
                f"Organization returned {type(intent).__name__} instead of an intent", function_name
            )
        return intent

    async def _resolve_transaction(self, function_name: str, intent: BaseIntent) -> TransactionRequest:
        try:
            path = await intent.paths(self.account)
        except DispatchError:
            raise
        except Exception as e:
            raise PathResolutionError(f"Could not resolve transaction path: {e}", function_name) from e

        if not isinstance(path, TransactionPath):
            raise PathResolutionError(f"Intent returned {type(path).__name__} instead of a path", function_name)
        if path.is_empty:
            raise PathResolutionError(
                f"No transaction path found for {self.account} (missing permission or balance)",
                function_name,
            )
        if len(path.transactions) > 1:
            # TODO: submit prerequisite steps (token approvals) before the final transaction
            logger.warning(f"{function_name} path has {len(path.transactions)} steps, only the first is sent")
        return path.transactions[0]

    async def _submit(self, function_name: str, transaction: TransactionRequest) -> Any:
        try:
            return await self.signer.send_transaction(transaction)
        except DispatchError:
            raise
        except Exception as e:
            raise SubmissionError(f"Could not submit transaction: {e}", function_name) from e
