import asyncio
from typing import Any, List

from aiohttp import ClientError, ClientTimeout
from web3 import AsyncHTTPProvider, AsyncWeb3
from web3.exceptions import Web3Exception
from web3.middleware import ExtraDataToPOAMiddleware
from web3.types import RPCEndpoint

from gas_estimation.clients.blockchain.base_provider import BaseRPCProvider
from gas_estimation.config import Config
from gas_estimation.models.rpc_models import BlockModel
from gas_estimation.utils.errors import ProviderError
from gas_estimation.utils.logger import LogArgs, get_logger

logger = get_logger(__name__)

TRANSPORT_ERRORS = (ClientError, asyncio.TimeoutError)
# non-JSON body (proxy error pages) fails response decoding with ValueError
DECODE_ERRORS = (ValueError, Web3Exception)


class Web3Client(BaseRPCProvider):
    def __init__(self, uri: str, config: Config):
        self.uri = uri
        self.w3 = AsyncWeb3(
            AsyncHTTPProvider(
                endpoint_uri=uri,
                request_kwargs={'timeout': ClientTimeout(total=config.WEB3_TIMEOUT)},
                # failed calls are not retried, a failure fails the estimate
                exception_retry_configuration=None,
            ),
        )
        if config.POA_MIDDLEWARE:
            self.w3.middleware_onion.inject(ExtraDataToPOAMiddleware, layer=0)

    async def send(self, method: str, params: List[Any]) -> Any:
        log_args = {LogArgs.web3_url: self.uri, LogArgs.rpc_method: method}
        logger.debug(
            f'Making request. URI: %({LogArgs.web3_url})s, Method: %({LogArgs.rpc_method})s',
            log_args,
            extra=log_args,
        )
        try:
            response = await self.w3.provider.make_request(RPCEndpoint(method), params)
        except TRANSPORT_ERRORS + DECODE_ERRORS as e:
            raise ProviderError(f'{method} request failed: {e!r}', method=method) from e

        if not isinstance(response, dict):
            raise ProviderError(f'{method} response is not a JSON-RPC object', method=method)
        if response.get('error'):
            error = response['error']
            message = error.get('message') if isinstance(error, dict) else error
            raise ProviderError(f'{method} returned error: {message}', method=method)
        if 'result' not in response:
            raise ProviderError(f'{method} response has no result', method=method)

        logger.debug(
            f'Getting response. URI: %({LogArgs.web3_url})s, Method: %({LogArgs.rpc_method})s',
            log_args,
            extra=log_args,
        )
        return response['result']

    async def get_latest_block(self) -> BlockModel:
        try:
            block = await self.w3.eth.get_block('latest')
        except TRANSPORT_ERRORS + DECODE_ERRORS as e:
            raise ProviderError(f'eth_getBlockByNumber request failed: {e!r}') from e
        return BlockModel.model_validate(dict(block))

    async def close(self) -> None:
        await self.w3.provider.disconnect()
