"""Main CLI entry point."""

import logging
import logging.handlers
from pathlib import Path
from typing import Optional

import click

from rsharkd import __version__

from .commands import config_group, devices_group, serve

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Handlers installed by setup_logging, replaced on each call
_installed_handlers: list[logging.Handler] = []


def setup_logging(verbose: int, debug: bool, log_file: Optional[Path], log_level: str) -> None:
    """
    Configure logging for the application.

    Logs always go to stderr; a rotating log file is added with --debug
    (./rsharkd-debug.log) or --log-file.

    Args:
        verbose: Verbosity count (0 = WARNING, 1 = INFO, 2+ = DEBUG)
        debug: If True, enable debug mode with file logging
        log_file: Custom log file path (optional)
        log_level: Log level for file logging (DEBUG/INFO/WARNING/ERROR)
    """
    if debug or verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    formatter = logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S')

    root_logger = logging.getLogger()
    while _installed_handlers:
        old = _installed_handlers.pop()
        root_logger.removeHandler(old)
        old.close()
    root_logger.setLevel(logging.DEBUG if (debug or log_file) else level)

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(formatter)
    root_logger.addHandler(stream_handler)
    _installed_handlers.append(stream_handler)

    log_path = None
    if debug and not log_file:
        log_path = Path.cwd() / "rsharkd-debug.log"
    elif log_file:
        log_path = log_file

    if log_path is not None:
        file_level = logging.DEBUG if debug else getattr(logging, log_level.upper())
        # Keeps last 5 files, max 10MB each
        file_handler = logging.handlers.RotatingFileHandler(
            log_path,
            maxBytes=10 * 1024 * 1024,
            backupCount=5
        )
        file_handler.setLevel(file_level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
        _installed_handlers.append(file_handler)

    logger.info(f"Logging configured: level={logging.getLevelName(level)}, file={log_path}")


@click.group()
@click.version_option(version=__version__, prog_name="rsharkd")
@click.option(
    '-v', '--verbose',
    count=True,
    help='Increase verbosity (-v: INFO, -vv: DEBUG)'
)
@click.option(
    '--debug',
    is_flag=True,
    help='Enable debug mode (DEBUG level, logs to ./rsharkd-debug.log)'
)
@click.option(
    '--log-file',
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help='Also log to this file'
)
@click.option(
    '--log-level',
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
    default='INFO',
    help='Log level for file logging (default: INFO)'
)
def cli(verbose: int, debug: bool, log_file: Optional[Path], log_level: str):
    """
    RadioSHARK daemon - control a USB RadioSHARK over HTTP.

    \b
    Examples:
      # List attached radios
      rsharkd devices list

      # Run the daemon for one radio
      rsharkd serve --shark 001:004

      # Check a saved configuration
      rsharkd config validate --config /etc/rsharkd.001-004.conf

      # Verbose logging
      rsharkd -v serve --shark 001:004
    """
    setup_logging(verbose, debug, log_file, log_level)


cli.add_command(serve)
cli.add_command(devices_group)
cli.add_command(config_group)

if __name__ == "__main__":
    cli()
