import asyncio
from typing import Any, Callable, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from governance.enums.dispatch_status import DispatchErrorKind, DispatchStatus
from utils.logger_utils import get_logger

logger = get_logger("Dispatch Handle")


class DispatchResult(BaseModel):
    """
    Outcome of one dispatch. SUBMITTED means the signer accepted the
    transaction, not that it was mined.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    status: DispatchStatus
    function_name: str
    params: List[Any] = Field(default_factory=list)
    tx_hash: Any = None
    error_kind: Optional[DispatchErrorKind] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == DispatchStatus.SUBMITTED


class DispatchHandle(object):
    """
    Awaitable handle over a running dispatch.

    Awaiting it always yields a DispatchResult. The completion callback runs
    exactly once when the dispatch task finishes, whatever the outcome,
    including cancellation before the task ever ran.
    """

    def __init__(self, function_name: str, on_done: Optional[Callable[[], Any]] = None):
        self.function_name = function_name
        self.params: List[Any] = []
        self.submitted = False
        self._on_done = on_done
        self._task: Optional[asyncio.Task] = None

    def attach(self, task: asyncio.Task) -> None:
        self._task = task
        task.add_done_callback(self._complete)

    def mark_submitted(self) -> None:
        self.submitted = True

    def cancel(self) -> bool:
        """
        Cancel the dispatch if the transaction has not been handed to the signer yet.

        Returns:
            True if the cancellation was requested, False once submission started
            or the dispatch already finished.
        """
        if self._task is None or self.submitted or self._task.done():
            return False
        return self._task.cancel()

    def done(self) -> bool:
        return self._task is not None and self._task.done()

    async def result(self) -> DispatchResult:
        try:
            return await self._task
        except asyncio.CancelledError:
            # Only swallow our own task's cancellation, not the awaiting task's
            if not self._task.cancelled():
                raise
            return DispatchResult(
                status=DispatchStatus.CANCELLED,
                function_name=self.function_name,
                params=self.params,
            )

    def __await__(self):
        return self.result().__await__()

    def _complete(self, _task: asyncio.Task) -> None:
        if self._on_done is None:
            return
        try:
            self._on_done()
        except Exception:
            logger.exception(f"Completion callback for {self.function_name} failed")
