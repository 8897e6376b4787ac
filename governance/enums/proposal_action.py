from enum import Enum


class ProposalAction(str, Enum):
    EXECUTE = "execute"
    WITHDRAW = "withdraw"
    SUPPORT = "support"
