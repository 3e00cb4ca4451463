"""The HTTP server wiring and the command that starts the application."""

from __future__ import annotations

import argparse
import logging
import sqlite3
from dataclasses import dataclass

from flask import Flask

from .config import Config, init_config
from .controllers import ResultsController, RunnersController
from .database import init_database
from .results_repository import ResultsRepository
from .results_service import ResultsService
from .runners_repository import RunnersRepository
from .runners_service import RunnersService

logger = logging.getLogger(__name__)

_ALL_INTERFACES = "0.0.0.0"
_DEFAULT_PORT = 80


def _split_address(address: str) -> tuple[str, int]:
    """Split ``host:port`` into its parts; an empty host means every interface."""
    if not address:
        return _ALL_INTERFACES, _DEFAULT_PORT
    host, separator, port_text = address.rpartition(":")
    if not separator:
        raise ValueError(f"missing port in address {address!r}")
    host = host.strip("[]") or _ALL_INTERFACES
    if not port_text:
        return host, 0
    if not port_text.isdigit() or int(port_text) > 65535:
        raise ValueError(f"invalid port in address {address!r}")
    return host, int(port_text)


@dataclass
class HttpServer:
    """The configured web application together with its controllers."""

    config: Config
    app: Flask
    runners_controller: RunnersController
    results_controller: ResultsController

    def start(self) -> None:
        """Serve requests on ``http.server_address`` until stopped."""
        host, port = _split_address(self.config.get_string("http.server_address"))
        self.app.run(host=host, port=port)


def init_http_server(config: Config, connection: sqlite3.Connection) -> HttpServer:
    """Build repositories, services, controllers and routes over ``connection``."""
    runners_repository = RunnersRepository(connection)
    results_repository = ResultsRepository(connection)

    runners_service = RunnersService(runners_repository, results_repository)
    results_service = ResultsService(runners_repository, results_repository)

    runners_controller = RunnersController(runners_service)
    results_controller = ResultsController(results_service)

    app = Flask(__name__)
    routes = [
        ("/runner", "create_runner", runners_controller.create_runner, "POST"),
        ("/runner", "update_runner", runners_controller.update_runner, "PUT"),
        ("/runner/<runner_id>", "delete_runner", runners_controller.delete_runner, "DELETE"),
        ("/runner/<runner_id>", "get_runner", runners_controller.get_runner, "GET"),
        ("/runner", "get_runners_batch", runners_controller.get_runners_batch, "GET"),
        ("/results", "create_result", results_controller.create_result, "POST"),
        ("/result/<result_id>", "delete_result", results_controller.delete_result, "DELETE"),
    ]
    for rule, endpoint, view, method in routes:
        app.add_url_rule(rule, endpoint, view, methods=[method])

    return HttpServer(
        config=config,
        app=app,
        runners_controller=runners_controller,
        results_controller=results_controller,
    )


def main(argv: list[str] | None = None) -> int:
    """Load the configuration, open the database and serve HTTP requests."""
    parser = argparse.ArgumentParser(
        prog="runnerstrack", description="Serve the runners and results API."
    )
    parser.add_argument(
        "--config",
        default="runners",
        help="name of the configuration file, without extension (default: runners)",
    )
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO)

    try:
        logger.info("Initializing app")
        config = init_config(args.config)
        logger.info("Initializing database")
        connection = init_database(config)
        logger.info("Initializing HTTP server")
        server = init_http_server(config, connection)
        server.start()
    except (OSError, ValueError) as exc:
        logger.error("%s", exc)
        return 1
    return 0