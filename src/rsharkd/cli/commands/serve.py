"""Serve command - runs the radio daemon."""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError

from rsharkd.exceptions import RadioSharkError, format_error_for_display
from rsharkd.models import CommitPolicy, ServerSettings
from rsharkd.models.config import DEFAULT_STATIC_ROOT

logger = logging.getLogger(__name__)


def build_settings(
    shark: Optional[str],
    address: str,
    config_file: Optional[Path],
    path: Path,
    commit_policy: str,
) -> ServerSettings:
    """
    Turn command line values into ServerSettings.

    Raises:
        click.ClickException: If the radio identifier is missing
        click.BadParameter: If a value is invalid
    """
    if not shark:
        raise click.ClickException("the radioshark to manage must be supplied (--shark)")
    try:
        return ServerSettings(
            device=shark,
            address=address,
            config_file=config_file,
            static_root=path,
            commit_policy=CommitPolicy(commit_policy.lower()),
        )
    except ValidationError as e:
        first = e.errors()[0]
        raise click.BadParameter(first.get("msg", str(e)), param_hint=str(first.get("loc", ("",))[0]))


@click.command(name="serve")
@click.option("--shark", "-s", type=str, default=None, help="RadioSHARK device to manage (bus:address)")
@click.option("--address", "-a", type=str, default=":8080", show_default=True, help="Address on which to listen")
@click.option(
    "--config",
    "-c",
    "config_file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Configuration file location (default: /etc/rsharkd.<shark>.conf)",
)
@click.option(
    "--path",
    "-p",
    type=click.Path(file_okay=False, path_type=Path),
    default=DEFAULT_STATIC_ROOT,
    show_default=True,
    help="Path to html",
)
@click.option(
    "--commit-policy",
    type=click.Choice([p.value for p in CommitPolicy], case_sensitive=False),
    default=CommitPolicy.OPTIMISTIC.value,
    show_default=True,
    help="Keep a requested configuration as current when a device write fails (optimistic) "
         "or only once the device accepted it (confirmed)",
)
def serve(
    shark: Optional[str],
    address: str,
    config_file: Optional[Path],
    path: Path,
    commit_policy: str,
):
    """
    Run the radio daemon.

    Opens the radio, applies the saved configuration to it and serves the
    HTTP control surface (/config/get, /config/apply, /config/validate)
    plus the web UI.

    \b
    Examples:
      rsharkd serve --shark 001:004
      rsharkd serve --shark 001:004 --address 127.0.0.1:9000 --config ./radio.conf
    """
    from rsharkd.api import serve as run_server

    settings = build_settings(shark, address, config_file, path, commit_policy)
    logger.info(f"Starting rsharkd for {settings.device} (config: {settings.config_path})")

    click.echo(f"rsharkd managing {settings.device}, listening on {settings.host}:{settings.port}", err=True)
    try:
        run_server(settings)
    except KeyboardInterrupt:
        logger.info("Daemon interrupted by user")
        click.echo("\nShutting down...", err=True)
    except RadioSharkError as e:
        logger.error(f"Startup failed: {e.technical_message}")

        user_message, recovery_hint = format_error_for_display(e)
        click.echo("\n" + "=" * 70, err=True)
        click.echo(f"ERROR: {user_message}", err=True)
        click.echo("=" * 70, err=True)
        if recovery_hint:
            click.echo(f"\n{recovery_hint}", err=True)

        sys.exit(1)
