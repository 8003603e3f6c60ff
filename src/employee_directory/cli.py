#!/usr/bin/env python3
"""
Main CLI entry point for the Employee Directory backend.
"""

import os
import sys

import click
import uvicorn

from employee_directory import __version__
from employee_directory.config import settings
from employee_directory.database.cli import db
from employee_directory.logging import configure_logging, get_logger

logger = get_logger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="employee-directory")
def cli() -> None:
    """Employee Directory CLI - run the API server and manage the database."""
    pass


@cli.command()
@click.option("--host", default=settings.api_host, help="Host to bind to")
@click.option("--port", default=settings.api_port, type=int, help="Port to bind to")
@click.option(
    "--reload",
    is_flag=True,
    default=False,
    help="Enable auto-reload for development",
)
@click.option(
    "--workers",
    default=1,
    type=int,
    help="Number of worker processes (default: 1)",
)
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level (default: info)",
)
def serve(host: str, port: int, reload: bool, workers: int, log_level: str) -> None:
    """Start the Employee Directory API server."""
    configure_logging(debug=(log_level == "debug"))

    logger.info(
        "Starting Employee Directory API server",
        host=host,
        port=port,
        reload=reload,
        workers=workers,
        log_level=log_level,
    )

    # Settings are re-read when uvicorn imports the app in a fresh process
    if log_level == "debug":
        os.environ["DIRECTORY_DEBUG"] = "true"
        os.environ["DIRECTORY_LOG_LEVEL"] = "debug"
    else:
        os.environ.setdefault("DIRECTORY_DEBUG", "false")
        os.environ.setdefault("DIRECTORY_LOG_LEVEL", log_level)

    try:
        if reload or workers > 1:
            uvicorn.run(
                "employee_directory.api.app:app",
                host=host,
                port=port,
                reload=reload,
                workers=(workers if not reload else 1),
                log_level=log_level,
                access_log=True,
            )
        else:
            from employee_directory.api.app import app

            uvicorn.run(app, host=host, port=port, log_level=log_level, access_log=True)
    except KeyboardInterrupt:
        logger.info("Server shutdown requested by user")
    except Exception as e:
        logger.error("Server startup failed", error=str(e))
        sys.exit(1)


cli.add_command(db)


if __name__ == "__main__":
    cli()
