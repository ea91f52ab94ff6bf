"""A URL shortening web service with Flask routes and MongoDB or in-memory storage."""

__version__ = "0.1.0"

__all__ = ["__version__"]