"""Record-file storage for course registration: accounts, catalogue and views."""

__version__ = "0.1.0"
__all__ = ["__version__"]