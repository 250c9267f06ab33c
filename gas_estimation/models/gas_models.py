from typing import List, Optional

from pydantic import BaseModel


class Eip1559Model(BaseModel):
    max_fee: int
    max_priority_fee: int


class GasFeeTracker(BaseModel):
    slow: Eip1559Model
    average: Eip1559Model
    fast: Eip1559Model


class FeeHistoryRecord(BaseModel):
    block_number: int
    base_fee_per_gas: int
    gas_used_ratio: float
    priority_fee_per_gas: List[int]


class GasFeeResponse(BaseModel):
    source: str
    timestamp: int
    eip1559: Optional[Eip1559Model] = None
    legacy: Optional[int] = None


class GasTrackerResponse(BaseModel):
    source: str
    timestamp: int
    number_of_blocks: int
    percentiles: List[float]
    eip1559: GasFeeTracker
