"""Version information for :mod:`charterskg`."""

VERSION = "0.1.0"
