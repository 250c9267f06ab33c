from decimal import Decimal
from typing import Any, List, Optional, Sequence

import pydantic

from gas_estimation.models.gas_models import Eip1559Model, FeeHistoryRecord
from gas_estimation.models.rpc_models import FeeHistoryResponse
from gas_estimation.utils.common import round_half_up
from gas_estimation.utils.errors import FormatError, ValidationError

MIN_PERCENTILE = 1
MAX_PERCENTILE = 99


def get_eip1559_gas_fee(
    base_fee: int,
    max_priority_fee: int,
    priority_fee_buffer_percent: float = 0,
) -> Eip1559Model:
    """
    Priority fee is increased by `priority_fee_buffer_percent` of itself.
    Max fee leaves room for the base fee to double, see https://www.blocknative.com/blog/eip-1559-fees
    A negative priority fee (node gas price below the base fee) is returned as is.
    """
    buffer = round_half_up(Decimal(max_priority_fee) * Decimal(str(priority_fee_buffer_percent)))
    max_priority_fee = max_priority_fee + buffer
    max_fee = 2 * base_fee + max_priority_fee
    return Eip1559Model(max_fee=max_fee, max_priority_fee=max_priority_fee)


def validate_percentiles(percentiles: Sequence[float], num_elements: int = 3) -> None:
    if len(percentiles) != num_elements:
        raise ValidationError(f'percentiles must have {num_elements} elements')
    for percentile in percentiles:
        # NaN compares false both ways, check the closed range instead
        if not MIN_PERCENTILE <= percentile <= MAX_PERCENTILE:
            raise ValidationError(
                f'percentiles elements must be between {MIN_PERCENTILE} and {MAX_PERCENTILE}'
            )


def format_fee_history(
    result: Any,
    number_of_blocks: int,
    percentiles_count: Optional[int] = None,
) -> List[FeeHistoryRecord]:
    """
    Split eth_feeHistory result into one record per block, oldest first.

    `baseFeePerGas` holds one extra trailing item with the next block base fee,
    only the first `number_of_blocks` items of each array are used.
    `reward[i][j]` is the priority fee at the j-th requested percentile in block i.
    """
    try:
        history = FeeHistoryResponse.model_validate(result)
    except pydantic.ValidationError as e:
        raise FormatError(f'invalid eth_feeHistory response: {e}') from e

    arrays = {
        'baseFeePerGas': history.base_fee_per_gas,
        'gasUsedRatio': history.gas_used_ratio,
        'reward': history.reward,
    }
    for name, array in arrays.items():
        if len(array) < number_of_blocks:
            raise FormatError(
                f'eth_feeHistory {name} has {len(array)} items, expected at least {number_of_blocks}'
            )

    records = []
    for index in range(number_of_blocks):
        block_rewards = history.reward[index]
        if percentiles_count is not None and len(block_rewards) != percentiles_count:
            raise FormatError(
                f'eth_feeHistory reward of block {history.oldest_block + index} has '
                f'{len(block_rewards)} items, expected {percentiles_count}'
            )
        records.append(FeeHistoryRecord(
            block_number=history.oldest_block + index,
            base_fee_per_gas=history.base_fee_per_gas[index],
            gas_used_ratio=history.gas_used_ratio[index],
            priority_fee_per_gas=list(block_rewards),
        ))
    return records
