"""Command-line interface for automodel."""

__version__ = "0.1.0"
