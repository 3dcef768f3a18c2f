"""Application entry point for the Notebox backend server."""

from notebox.app import App
from notebox.config import Config
from notebox.logging import setup_logging
from notebox.web.runner import run_server


def main() -> None:
    config = Config()  # type: ignore[call-arg]
    setup_logging(config.debug)
    app = App(config)
    run_server(app, config)


if __name__ == "__main__":
    main()
