"""Shell prompt segments for project toolchains."""

__version__ = "0.1.0"
