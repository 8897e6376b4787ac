# MIT License
#
# Copyright (c) 2018 Evgeny Medvedev, evge.medvedev@gmail.com
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.
#
# Modified by: Cuong CT, 6/12/2025
# Change Description: using eth_utils library for implement some formatter utilities

from typing import Any, Optional

from eth_utils import is_hex, to_checksum_address, to_hex, to_int

from utils.logger_utils import get_logger
from utils.validation_utils import validate_decimal_amount, validate_decimals

logger = get_logger("Formatter Utils")


def to_int_or_none(value: Any) -> Optional[int]:
    """
    Converts ints, decimal strings and 0x-prefixed hex strings to int.
    Subgraph payloads deliver big numbers as strings.
    """
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ValueError(f"Expected an integer amount, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        value = value.strip()
        if value.lower().startswith("0x"):
            if not is_hex(value):
                raise ValueError(f"Invalid hex string: {value}")
            return to_int(hexstr=value)
        return int(value, 10)
    raise ValueError(f"Cannot convert {type(value).__name__} to int: {value!r}")


def to_base_units(amount: str, decimals: int) -> int:
    """
    Converts a human readable amount ("1.5") into token base units.

    The conversion is string based so no precision is lost for large
    amounts: the fraction is right-padded to `decimals` digits and any
    digits beyond that are truncated.
    """
    validate_decimals(decimals)
    amount = validate_decimal_amount(amount)

    whole, _, fraction = amount.partition(".")
    fraction = fraction[:decimals].ljust(decimals, "0")
    return int((whole or "0") + fraction)


def text_to_hex(text: Optional[str]) -> str:
    """Encodes text as UTF-8 hex, "0x" for an empty or missing value."""
    return to_hex(text=text or "")


def addresses_equal(first: Optional[str], second: Optional[str]) -> bool:
    """
    Case-insensitive address comparison without checksum validation.
    Addresses coming from the subgraph and from wallets differ only in case.
    """
    if not first or not second:
        return False
    return first.lower() == second.lower()


def to_normalized_address(address: Optional[str]) -> Optional[str]:
    """
    Convert address to its checksum form.
    Falls back to lowercase for values eth_utils refuses.
    """
    if address is None or not isinstance(address, str):
        return None

    try:
        return to_checksum_address(address)
    except ValueError:
        logger.debug(f"Cannot checksum address, keeping lowercase: {address}")
        return address.lower()
