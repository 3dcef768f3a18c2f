"""Uvicorn server runner."""

import uvicorn

from notebox.app import App
from notebox.config import Config
from notebox.web.server import create_fastapi_app


def run_server(app: App, config: Config) -> None:
    """Run the API under uvicorn.

    uvicorn's own logging config is disabled so its records propagate to the
    root handler installed by ``setup_logging``.
    """
    fastapi_app = create_fastapi_app(app, config)
    uvicorn.run(
        fastapi_app,
        host=config.host,
        port=config.port,
        log_config=None,
        log_level="debug" if config.debug else "info",
        access_log=config.debug,
    )
