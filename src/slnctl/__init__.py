"""slnctl — solution file project membership CLI."""

__version__ = "0.1.0"
