from enum import Enum


class DispatchStatus(str, Enum):
    SUBMITTED = "submitted"     # Handed to the signer, not confirmed on-chain
    FAILED = "failed"
    CANCELLED = "cancelled"     # Cancelled before submission


class DispatchErrorKind(str, Enum):
    INTENT_RESOLUTION = "intent_resolution"     # App or function could not be resolved
    PATH_RESOLUTION = "path_resolution"         # No transaction path from the account
    SUBMISSION = "submission"                   # Signing rejected or transport failed
