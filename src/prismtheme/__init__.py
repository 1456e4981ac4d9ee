"""Light/dark theme preference engine with WCAG contrast tooling."""

__version__ = "0.1.0"

__all__ = ["__version__"]
