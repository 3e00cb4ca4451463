"""HTTP service for tracking runners and their race results in SQLite."""

__version__ = "0.1.0"