"""Version information for mxereader."""

__version__ = "0.1.0"
