import uvicorn

from gas_estimation.config import config
from gas_estimation.rest_api.create_app import create_app

app = create_app(config)


def main() -> None:
    """Entrypoint of the application."""
    uvicorn.run(
        "gas_estimation.__main__:app",
        workers=config.WORKERS_COUNT,
        host=config.SERVER_HOST,
        port=config.SERVER_PORT,
        reload=config.RELOAD,
        log_level=config.LOGGING_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
