import pydantic
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from gas_estimation.config import Config
from gas_estimation.rest_api import dependencies
from gas_estimation.rest_api.middlewares import RouteLoggerMiddleware
from gas_estimation.rest_api.routes.gas import gas_routes
from gas_estimation.utils.errors import BaseGasEstimationError
from gas_estimation.utils.logger import get_logger

logger = get_logger(__name__)


def create_app(config: Config):
    app = FastAPI(
        title='Gas Estimation API',
        description=(
            """API estimates the fee a transaction on an Ethereum-compatible chain requires.
            Returns legacy gas price or EIP-1559 max fee and max priority fee,
            and slow, average and fast EIP-1559 fees built from the recent fee history."""
        ),
        version=config.VERSION,
        docs_url='/',
        redoc_url='/docs',
    )

    # Setup and register dependencies.
    web3_client = dependencies.Web3Client(config.WEB3_URL, config)
    gas_service = dependencies.GasService(config=config, provider=web3_client)
    deps = dependencies.Dependencies(
        config=config,
        web3_client=web3_client,
        gas_service=gas_service,
    )
    deps.register(app)

    # Setup and register middlewares and routes.
    register_cors(app, config)
    register_route(app)
    register_route_logging(app)

    # Common RFC 5741 Exceptions handling, https://tools.ietf.org/html/rfc5741#section-2
    @app.exception_handler(Exception)
    async def http_exception_handler(request: Request, exc):
        exception_dict = {
            "type": "Internal Server Error",
            "title": exc.__class__.__name__,
            "instance": f"{config.SERVER_HOST}{request.url.path}",
            "detail": f"{exc.__class__.__name__} at {str(exc)} when executing {request.method} request",
        }
        logger.error(
            "Exception when %s: %s",
            exception_dict["instance"],
            exception_dict["detail"],
        )
        return JSONResponse(exception_dict, status_code=500)

    @app.exception_handler(pydantic.ValidationError)
    async def handle_validation_error(
        request: Request, exc: pydantic.ValidationError
    ):  # pylint: disable=unused-argument
        """
        Handles validation errors.
        """
        return JSONResponse({"message": exc.errors(include_url=False)}, status_code=422)

    @app.exception_handler(BaseGasEstimationError)
    async def handle_gas_estimation_error(
        request: Request, exc: BaseGasEstimationError
    ):  # pylint: disable=unused-argument
        msg, log_args = exc.to_log_args()
        logger.warning(msg, log_args, extra=log_args)
        return exc.to_http_exception()

    @app.on_event("shutdown")
    async def shutdown_event():
        await web3_client.close()

    @app.get("/health_check", include_in_schema=False)
    def health_check():
        """
        Health check
        ---
        tags:
            - util
        responses:
            200:
                description: Returns "OK"
        """
        return Response("OK")

    return app


def register_route(app: FastAPI):
    app.include_router(gas_routes, prefix='/v1/gas', tags=['Gas'])


def register_route_logging(app: FastAPI):
    app.add_middleware(RouteLoggerMiddleware, skip_routes=['/health_check'])


def register_cors(app: FastAPI, config: Config):
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=config.CORS_CREDENTIALS,
        allow_methods=config.CORS_METHODS,
        allow_headers=config.CORS_HEADERS,
    )
