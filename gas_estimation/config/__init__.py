from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

from gas_estimation.config.logger import LoggerConfig


class Config(LoggerConfig, BaseSettings):
    SERVER_HOST: str = 'localhost'
    SERVER_PORT: int = 8000
    RELOAD: bool = False
    VERSION: str = '0.1.0'
    WORKERS_COUNT: int = 1
    CORS_ORIGINS: List[str] = ['*']
    CORS_CREDENTIALS: bool = True
    CORS_METHODS: List[str] = ['*']
    CORS_HEADERS: List[str] = ['*']

    WEB3_URL: str = 'http://localhost:8545'
    WEB3_TIMEOUT: int = 10
    POA_MIDDLEWARE: bool = True

    DEFAULT_NUMBER_OF_BLOCKS: int = 10
    DEFAULT_PERCENTILES: List[float] = [25, 50, 75]

    model_config = SettingsConfigDict(env_file='.env', extra='ignore')


config = Config()
