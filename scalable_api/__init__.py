"""A layered Flask and SQLAlchemy REST service for managing users and their roles."""

__version__ = "0.1.0"
__all__ = ["__version__"]