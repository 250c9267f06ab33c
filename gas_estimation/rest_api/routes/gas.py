from typing import List, Optional

from fastapi import Depends, Query
from fastapi.routing import APIRouter

from gas_estimation.models.gas_models import GasFeeResponse, GasTrackerResponse
from gas_estimation.rest_api import dependencies
from gas_estimation.utils.errors import responses

gas_routes = APIRouter()


@gas_routes.get('/fee', response_model=GasFeeResponse, responses=responses)
@gas_routes.get('/fee/', include_in_schema=False)
async def get_gas_fee(
    legacy: bool = Query(False, description='Return legacy gas price instead of EIP-1559 fee'),
    buffer_percent: float = Query(
        0, description='Share of the priority fee added to it as a buffer, between 0 and 1'
    ),
    gas_service: dependencies.GasService = Depends(dependencies.gas_service),
) -> GasFeeResponse:
    """
    Returns the gas fee for a transaction on the configured chain.
    Returned object has not null legacy field when legacy gas price is requested.
    """
    return await gas_service.get_gas_fee(legacy, buffer_percent)


@gas_routes.get('/tracker', response_model=GasTrackerResponse, responses=responses)
@gas_routes.get('/tracker/', include_in_schema=False)
async def get_gas_fee_tracker(
    number_of_blocks: Optional[int] = Query(
        None, ge=1, description='Number of latest blocks to sample priority fees from'
    ),
    percentiles: Optional[List[float]] = Query(
        None, description='Three percentiles of priority fees between 1 and 99'
    ),
    gas_service: dependencies.GasService = Depends(dependencies.gas_service),
) -> GasTrackerResponse:
    """
    Returns slow, average and fast EIP-1559 gas fees built from the fee history.
    """
    return await gas_service.get_gas_fee_tracker(number_of_blocks, percentiles)
