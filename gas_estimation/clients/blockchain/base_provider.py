from abc import ABC, abstractmethod
from typing import Any, List

from gas_estimation.models.rpc_models import BlockModel


class BaseRPCProvider(ABC):
    """
    Node access used by gas estimation.
    Implementations must raise ProviderError on transport or JSON-RPC failures.
    """

    @abstractmethod
    async def send(self, method: str, params: List[Any]) -> Any:
        """Send raw JSON-RPC request, return its `result` member."""

    @abstractmethod
    async def get_latest_block(self) -> BlockModel:
        ...
