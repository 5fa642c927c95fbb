"""rsharkd: HTTP control daemon for the USB RadioSHARK receiver."""

__version__ = "0.1.0"
