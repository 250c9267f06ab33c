from time import time
from typing import List, Optional, Sequence, Union

from gas_estimation.clients.blockchain.base_provider import BaseRPCProvider
from gas_estimation.config import Config
from gas_estimation.models.gas_models import (
    Eip1559Model,
    GasFeeResponse,
    GasFeeTracker,
    GasTrackerResponse,
)
from gas_estimation.utils.async_utils import gather_or_cancel
from gas_estimation.utils.common import avg, hex_to_int
from gas_estimation.utils.errors import FormatError, UnsupportedChainError, ValidationError
from gas_estimation.utils.fees import format_fee_history, get_eip1559_gas_fee, validate_percentiles
from gas_estimation.utils.logger import LogArgs, get_logger

GAS_SOURCE = 'NODE'
DEFAULT_NUMBER_OF_BLOCKS = 10
DEFAULT_PERCENTILES = (25, 50, 75)
TRACKER_PERCENTILES_COUNT = 3

logger = get_logger(__name__)


async def gas_fee(
    provider: BaseRPCProvider,
    legacy: bool = False,
    priority_fee_buffer_percent: float = 0,
) -> Union[int, Eip1559Model]:
    """
    Estimate the gas fee to be paid for a transaction.

    Legacy mode returns the node gas price. Otherwise the priority fee is the part
    of the node gas price above the latest block base fee, increased by
    `priority_fee_buffer_percent` (between 0 and 1) of itself.
    """
    if not 0 <= priority_fee_buffer_percent <= 1:
        raise ValidationError('priority_fee_buffer_percent must be between 0 and 1')

    log_args = {LogArgs.legacy: legacy, LogArgs.buffer_percent: priority_fee_buffer_percent}
    logger.debug(
        f'Estimating gas fee, legacy: %({LogArgs.legacy})s, buffer: %({LogArgs.buffer_percent})s',
        log_args,
        extra=log_args,
    )
    # eth_gasPrice is needed in both modes, it is the priority fee source for EIP-1559
    legacy_fee, block = await gather_or_cancel(
        provider.send('eth_gasPrice', []),
        provider.get_latest_block(),
    )
    try:
        legacy_fee = hex_to_int(legacy_fee)
    except ValueError as e:
        raise FormatError(f'invalid eth_gasPrice response: {e}') from e

    if legacy:
        return legacy_fee
    if block.base_fee_per_gas is None:
        raise UnsupportedChainError('block does not have baseFeePerGas; use legacy mode')

    max_priority_fee = legacy_fee - block.base_fee_per_gas
    return get_eip1559_gas_fee(block.base_fee_per_gas, max_priority_fee, priority_fee_buffer_percent)


async def gas_fee_tracker(
    provider: BaseRPCProvider,
    number_of_blocks: int = DEFAULT_NUMBER_OF_BLOCKS,
    percentiles: Sequence[float] = DEFAULT_PERCENTILES,
) -> GasFeeTracker:
    """
    Estimate slow, average and fast gas fees from the priority fees paid in the
    last `number_of_blocks` blocks at the given three percentiles.
    Inspired by https://docs.alchemy.com/docs/how-to-build-a-gas-fee-estimator-using-eip-1559
    """
    if isinstance(number_of_blocks, bool) or not isinstance(number_of_blocks, int) or number_of_blocks < 1:
        raise ValidationError('number_of_blocks must be a positive integer')
    percentiles = sorted(percentiles)
    validate_percentiles(percentiles, TRACKER_PERCENTILES_COUNT)

    log_args = {LogArgs.number_of_blocks: number_of_blocks, LogArgs.percentiles: percentiles}
    logger.debug(
        f'Tracking gas fee over %({LogArgs.number_of_blocks})s blocks at %({LogArgs.percentiles})s',
        log_args,
        extra=log_args,
    )
    history, block = await gather_or_cancel(
        provider.send('eth_feeHistory', [number_of_blocks, 'latest', percentiles]),
        provider.get_latest_block(),
    )
    history = format_fee_history(history, number_of_blocks, len(percentiles))

    slow_priority_fee, average_priority_fee, fast_priority_fee = (
        avg([record.priority_fee_per_gas[position] for record in history])
        for position in range(TRACKER_PERCENTILES_COUNT)
    )
    if block.base_fee_per_gas is None:
        raise UnsupportedChainError('block does not have baseFeePerGas; use legacy mode')

    return GasFeeTracker(
        slow=get_eip1559_gas_fee(block.base_fee_per_gas, slow_priority_fee),
        average=get_eip1559_gas_fee(block.base_fee_per_gas, average_priority_fee),
        fast=get_eip1559_gas_fee(block.base_fee_per_gas, fast_priority_fee),
    )


class GasService:
    def __init__(self, *, config: Config, provider: BaseRPCProvider):
        self.config = config
        self.provider = provider

    async def get_gas_fee(
        self,
        legacy: bool = False,
        priority_fee_buffer_percent: float = 0,
    ) -> GasFeeResponse:
        fee = await gas_fee(self.provider, legacy, priority_fee_buffer_percent)
        if legacy:
            return GasFeeResponse(source=GAS_SOURCE, timestamp=int(time()), legacy=fee)
        return GasFeeResponse(source=GAS_SOURCE, timestamp=int(time()), eip1559=fee)

    async def get_gas_fee_tracker(
        self,
        number_of_blocks: Optional[int] = None,
        percentiles: Optional[List[float]] = None,
    ) -> GasTrackerResponse:
        if number_of_blocks is None:
            number_of_blocks = self.config.DEFAULT_NUMBER_OF_BLOCKS
        if percentiles is None:
            percentiles = self.config.DEFAULT_PERCENTILES
        percentiles = sorted(percentiles)
        tracker = await gas_fee_tracker(self.provider, number_of_blocks, percentiles)
        return GasTrackerResponse(
            source=GAS_SOURCE,
            timestamp=int(time()),
            number_of_blocks=number_of_blocks,
            percentiles=percentiles,
            eip1559=tracker,
        )
