from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, confloat, conint, field_validator

from gas_estimation.utils.common import hex_to_int


class FeeHistoryResponse(BaseModel):
    """Result of eth_feeHistory, quantities decoded from hex."""
    oldest_block: conint(ge=0) = Field(alias='oldestBlock')
    base_fee_per_gas: List[conint(ge=0)] = Field(alias='baseFeePerGas')
    gas_used_ratio: List[confloat(ge=0, le=1)] = Field(alias='gasUsedRatio')
    reward: List[List[conint(ge=0)]]

    @field_validator('oldest_block', mode='before')
    @classmethod
    def decode_oldest_block(cls, value):
        return hex_to_int(value)

    @field_validator('base_fee_per_gas', mode='before')
    @classmethod
    def decode_base_fees(cls, value):
        if not isinstance(value, list):
            return value
        return [hex_to_int(fee) for fee in value]

    @field_validator('reward', mode='before')
    @classmethod
    def decode_reward(cls, value):
        if not isinstance(value, list):
            return value
        return [
            [hex_to_int(fee) for fee in block_rewards]
            if isinstance(block_rewards, list) else block_rewards
            for block_rewards in value
        ]


class BlockModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    number: Optional[int] = None
    base_fee_per_gas: Optional[conint(ge=0)] = Field(default=None, alias='baseFeePerGas')

    @field_validator('number', 'base_fee_per_gas', mode='before')
    @classmethod
    def decode_quantity(cls, value):
        if value is None:
            return value
        return hex_to_int(value)
