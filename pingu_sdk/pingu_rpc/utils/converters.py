"""
Conversion utilities for the Pingu RPC SDK.

On-chain amounts are integers scaled by 10^decimals. The decimals always come
from the caller (usually the asset registry), never from the magnitude of the
value.
"""

from typing import Union

from decimal import Decimal, InvalidOperation, localcontext

from pingu_sdk.pingu_rpc.consts import BPS_DIVIDER

# Enough digits for any uint256 at 18 decimals
_PRECISION = 100


def _check_decimals(decimals: int) -> None:
    if isinstance(decimals, bool) or not isinstance(decimals, int) or decimals < 0:
        raise ValueError(f"decimals must be a non-negative integer, got {decimals!r}")


def from_scaled(
    scaled_amount: Union[str, int],
    decimals: int,
    as_decimal: bool = False,
) -> Union[Decimal, float]:
    """
    Convert a scaled on-chain integer to a token amount.

    The division happens on exact `Decimal` values; only the final result is
    turned into a float.

    Args:
        scaled_amount: Amount scaled by 10^decimals
        decimals: Precision of the amount
        as_decimal: Whether to return a Decimal (True) or float (False)

    Returns:
        Amount in token units, with the sign of the input
    """
    _check_decimals(decimals)
    value = int(scaled_amount)

    with localcontext() as ctx:
        ctx.prec = _PRECISION
        decimal_value = Decimal(value).scaleb(-decimals)

    return decimal_value if as_decimal else float(decimal_value)


def to_scaled(amount: Union[str, int, float, Decimal], decimals: int) -> int:
    """
    Convert a token amount to a scaled on-chain integer.

    Args:
        amount: Amount in token units
        decimals: Precision to scale by

    Returns:
        Amount scaled by 10^decimals

    Raises:
        ValueError: If the amount is not a number or has more fractional
            digits than `decimals` can represent
    """
    _check_decimals(decimals)
    if not isinstance(amount, Decimal):
        try:
            amount = Decimal(str(amount))
        except InvalidOperation:
            raise ValueError(f"Invalid amount: {amount!r}")

    if not amount.is_finite():
        raise ValueError(f"Invalid amount: {amount!r}")

    with localcontext() as ctx:
        ctx.prec = _PRECISION
        scaled = amount.scaleb(decimals)

    if scaled != scaled.to_integral_value():
        raise ValueError(f"{amount} has more than {decimals} decimal places")

    return int(scaled)


def bps_to_decimal(bps: Union[str, int, Decimal]) -> Decimal:
    """
    Convert basis points to a fraction (100 bps = 0.01 = 1%).
    """
    return Decimal(str(bps)) / Decimal(BPS_DIVIDER)
