"""Application entry point for the tic-tac-toe backend server."""

from tictactoe.app import App
from tictactoe.config import Config
from tictactoe.logging import setup_logging
from tictactoe.web.runner import run_server


def main() -> None:
    config = Config()
    setup_logging(config.debug)
    app = App(config)
    run_server(app, config)


if __name__ == "__main__":
    main()
