"""Single source of truth for the package version."""

__version__: str = "0.2.0"
