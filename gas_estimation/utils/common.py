from decimal import ROUND_FLOOR, Decimal
from typing import Sequence, Union

from web3 import Web3

HALF = Decimal('0.5')


def hex_to_int(value: Union[str, int]) -> int:
    """
    Decode a JSON-RPC quantity.
    Nodes return quantities as 0x-prefixed hex strings, web3 middlewares
    may already have converted them to int.
    """
    if isinstance(value, bool):
        raise ValueError(f'Expected hex quantity, got {value!r}')
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.startswith('0x'):
        return Web3.to_int(hexstr=value)
    raise ValueError(f'Expected hex quantity, got {value!r}')


def round_half_up(value: Union[Decimal, int, float]) -> int:
    """Round to the nearest integer, halves towards positive infinity: 1.5 -> 2, -1.5 -> -1."""
    return int((Decimal(value) + HALF).to_integral_value(rounding=ROUND_FLOOR))


def avg(values: Sequence[int]) -> int:
    """Arithmetic mean rounded to the nearest integer, halves rounded up."""
    return round_half_up(Decimal(sum(values)) / len(values))
