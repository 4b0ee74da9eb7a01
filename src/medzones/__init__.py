"""Zone classification, proximity search and neighborhood inference for doctor profiles."""

__version__ = "0.1.0"
