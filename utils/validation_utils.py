import re

from eth_utils import is_address

DECIMAL_AMOUNT_PATTERN = re.compile(r"^(\d+(\.\d*)?|\.\d+)$")


def validate_decimal_amount(amount: str) -> str:
    """
    Validate a human readable, non-negative decimal amount.

    Args:
        amount: The amount as typed by the user, e.g. "1.5". Surrounding whitespace is ignored.

    Returns:
        The stripped amount.

    Raises:
        ValueError: If the amount is not a plain decimal number.
    """
    if not isinstance(amount, str):
        raise ValueError(f"Amount must be a decimal string, got {type(amount).__name__}")

    stripped = amount.strip()
    if not DECIMAL_AMOUNT_PATTERN.match(stripped):
        raise ValueError(f"Invalid decimal amount: {amount!r}")
    return stripped


def validate_decimals(decimals: int) -> None:
    """
    Validate a token decimal count.

    Raises:
        ValueError: If decimals is negative or not an integer.
    """
    if isinstance(decimals, bool) or not isinstance(decimals, int) or decimals < 0:
        raise ValueError(f"Token decimals must be a non-negative integer, got {decimals!r}")


def validate_address(address: str) -> None:
    """
    Validate an Ethereum address (any casing, checksum enforced when mixed case).

    Raises:
        ValueError: If the value is not a valid address.
    """
    if not isinstance(address, str) or not is_address(address):
        raise ValueError(f"Invalid address: {address!r}")
