"""Report, bump and rewrite a project's version number across its files."""

__version__ = "0.3.0"

__all__ = ["__version__"]