from governance.enums.dispatch_status import DispatchErrorKind


class DispatchError(Exception):
    """Base class for failures while turning an intent into a submitted transaction."""

    kind: DispatchErrorKind

    def __init__(self, message: str, function_name: str | None = None):
        super().__init__(message)
        self.function_name = function_name


class IntentResolutionError(DispatchError):
    kind = DispatchErrorKind.INTENT_RESOLUTION


class PathResolutionError(DispatchError):
    kind = DispatchErrorKind.PATH_RESOLUTION


class SubmissionError(DispatchError):
    kind = DispatchErrorKind.SUBMISSION
