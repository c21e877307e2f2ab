"""Project Intel - structural queries over a pre-generated project index."""

__version__ = "0.1.0"
