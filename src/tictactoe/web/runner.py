"""Uvicorn server runner with custom configuration."""

import uvicorn
from uvicorn.config import LOGGING_CONFIG

from tictactoe.app import App
from tictactoe.config import Config
from tictactoe.web.server import create_fastapi_app


def run_server(app: App, config: Config) -> None:
    """Run the Uvicorn server.

    Client addresses feed the login rate limiter, so X-Forwarded-For is only
    honoured from the proxies listed in config.forwarded_allow_ips.
    """
    fastapi_app = create_fastapi_app(app, config)

    log_config = LOGGING_CONFIG.copy()
    log_config["formatters"]["access"]["fmt"] = '%(asctime)s - %(client_addr)s - "%(request_line)s" %(status_code)s'
    log_config["formatters"]["default"]["fmt"] = "%(asctime)s - %(levelname)s - %(message)s"

    uvicorn.run(
        fastapi_app,
        host=config.host,
        port=config.port,
        log_config=log_config,
        log_level="debug" if config.debug else "info",
        access_log=config.debug,
        proxy_headers=True,
        forwarded_allow_ips=config.forwarded_allow_ips,
    )
