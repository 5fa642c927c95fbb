"""Main entry point for rsharkd."""

from rsharkd.cli.main import cli

if __name__ == "__main__":
    cli()
