import pytest
from starlette.testclient import TestClient

from gas_estimation.config import Config
from gas_estimation.rest_api import dependencies
from gas_estimation.rest_api.create_app import create_app
from gas_estimation.services.gas_service import GasService
from gas_estimation.tests.fixtures import *  # noqa: F401, F403


@pytest.fixture()
def config() -> Config:
    return Config(WEB3_URL='http://localhost:8545', WEB3_TIMEOUT=1)


@pytest.fixture()
def gas_service(config, provider) -> GasService:
    return GasService(config=config, provider=provider)


@pytest.fixture()
def app_factory(config):
    def factory(provider):
        app = create_app(config=config)
        dependencies.Dependencies(
            config=config,
            web3_client=app.state.dependencies.web3_client,
            gas_service=GasService(config=config, provider=provider),
        ).register(app)
        return app

    return factory


@pytest.fixture()
def gas_client(app_factory, provider) -> TestClient:
    return TestClient(app_factory(provider))
