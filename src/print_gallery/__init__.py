"""Build printable HTML galleries from folders of numbered images."""

__version__ = "0.1.0"
