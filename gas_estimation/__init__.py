from gas_estimation.services.gas_service import gas_fee, gas_fee_tracker
from gas_estimation.utils.errors import (
    BaseGasEstimationError,
    FormatError,
    ProviderError,
    UnsupportedChainError,
    ValidationError,
)
