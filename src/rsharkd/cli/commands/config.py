"""Config command implementations.

Commands:
    - config show --config PATH        # Display the persisted configuration
    - config validate --config PATH    # Report every problem in it
"""

import json
from pathlib import Path

import click

from rsharkd.exceptions import ConfigurationError
from rsharkd.models import RadioConfig
from rsharkd.services import check_config
from rsharkd.utils import PydanticPersistence

config_option = click.option(
    "--config",
    "-c",
    "config_file",
    type=click.Path(dir_okay=False, path_type=Path),
    required=True,
    help="Configuration file location",
)


@click.group(name="config")
def config_group():
    """Inspect radio configuration files."""
    pass


@config_group.command(name="show")
@config_option
def show_config(config_file: Path):
    """Display a configuration file (defaults if it doesn't exist)."""
    try:
        config = PydanticPersistence.load_json_or_default(config_file, RadioConfig)
    except (ConfigurationError, OSError) as e:
        raise click.ClickException(str(e))

    if not config_file.exists():
        click.echo(f"# {config_file} not found, showing defaults", err=True)
    click.echo(json.dumps(config.to_record(), indent=2))


@config_group.command(name="validate")
@config_option
def validate_config_file(config_file: Path):
    """Check a configuration file, listing every invalid value."""
    try:
        config = PydanticPersistence.load_json(config_file, RadioConfig)
    except FileNotFoundError:
        raise click.ClickException(f"{config_file} not found")
    except ConfigurationError as e:
        raise click.ClickException(e.get_full_message())
    except OSError as e:
        raise click.ClickException(str(e))

    failures = check_config(config)
    if not failures:
        click.echo(f"[OK] {config_file}")
        return

    click.echo(f"[FAIL] {config_file}")
    for failure in failures:
        click.echo(f"  - {failure.field}: {failure}")
    raise SystemExit(1)
