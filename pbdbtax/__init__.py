"""Higher taxonomy and age ranges for Paleobiology Database genera."""

__version__ = "1.0.0"
