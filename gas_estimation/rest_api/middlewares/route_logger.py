import logging
import time
from typing import Callable, List, Optional
from uuid import uuid4

from fastapi import FastAPI, Request, Response
from starlette.datastructures import Headers
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import Receive, Scope, Send

from gas_estimation.utils.logger import get_logger, set_correlation_id, set_session_id


class RouteLoggerMiddleware(BaseHTTPMiddleware):
    """
    Logs every estimate request with its query and duration.
    Request correlation id is taken from `x-request-id` (or `cf-ray`) header,
    generated when missing and returned in the response headers.
    """
    cid_header: str = 'x-request-id'
    sid_header: str = 'x-session-id'
    cfray_header: str = 'cf-ray'

    def __init__(
        self,
        app: FastAPI,
        *,
        logger: Optional[logging.Logger] = None,
        skip_routes: Optional[List[str]] = None,
    ):
        self._logger = logger or get_logger(__name__)
        self._skip_routes = skip_routes or []
        super().__init__(app)

    async def __call__(self, scope: Scope, receive: Receive, send: Send):
        if scope['type'] != 'http':
            await self.app(scope, receive, send)
            return

        # Headers are immutable, correlation id is added to the scope before dispatch
        headers = Headers(scope=scope)
        request_id = headers.get(self.cid_header)
        if request_id is None:
            request_id = headers.get(self.cfray_header, uuid4().hex)
            scope['headers'].append((self.cid_header.encode(), request_id.encode()))

        if self.sid_header in headers:
            set_session_id(headers[self.sid_header])

        set_correlation_id(request_id)
        await super().__call__(scope, receive, send)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if any(request.url.path.startswith(path) for path in self._skip_routes):
            return await call_next(request)

        start_time = time.perf_counter()
        log_args = {
            'request_method': request.method,
            'request_path': request.url.path,
            'request_query': str(request.query_params),
        }
        try:
            response = await call_next(request)
        except Exception:
            log_args['response_status'] = 500
            self._logger.exception('Request failed with exception', log_args, extra=log_args)
            raise

        response.headers[self.cid_header] = request.headers[self.cid_header]
        log_args['request_duration'] = round(time.perf_counter() - start_time, 4)
        log_args['response_status'] = response.status_code
        msg = f"Request {'successful' if response.status_code < 500 else 'failed'}"
        self._logger.info(msg, log_args, extra=log_args)
        return response
