"""Command line interface for rsharkd."""
